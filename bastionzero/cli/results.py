from __future__ import annotations

from typing import Any

from pydantic import Field

from bastionzero.models.base import BastionZeroModel


class ErrorInfo(BastionZeroModel):
    type: str
    message: str
    hint: str | None = None
    status_code: int | None = Field(None, alias="statusCode")
    details: dict[str, Any] | None = None


class CommandMeta(BastionZeroModel):
    duration_ms: int = Field(..., alias="durationMs")
    base_url: str | None = Field(None, alias="baseUrl")


class CommandResult(BastionZeroModel):
    ok: bool
    command: str
    data: Any | None = None
    warnings: list[str] = Field(default_factory=list)
    meta: CommandMeta
    error: ErrorInfo | None = None

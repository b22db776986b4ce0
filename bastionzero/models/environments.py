"""
Environment models.
"""

from __future__ import annotations

from pydantic import Field

from .base import BastionZeroModel
from .types import TargetType, Timestamp


class TargetSummary(BastionZeroModel):
    id: str = ""
    type: TargetType | None = Field(None, alias="targetType")


class Environment(BastionZeroModel):
    """A named collection of targets."""

    id: str = ""
    organization_id: str = ""
    is_default: bool = False
    name: str = ""
    description: str | None = None
    time_created: Timestamp | None = None
    # Hours before offline targets are removed; 0 disables cleanup
    offline_cleanup_timeout_hours: int = 0
    targets: list[TargetSummary] = Field(default_factory=list)


class CreateEnvironmentRequest(BastionZeroModel):
    name: str = ""
    description: str | None = None
    # Always sent
    offline_cleanup_timeout_hours: int = Field(0, ge=0)


class CreateEnvironmentResponse(BastionZeroModel):
    id: str = ""


class ModifyEnvironmentRequest(BastionZeroModel):
    description: str | None = None
    offline_cleanup_timeout_hours: int | None = Field(None, ge=0)


__all__ = [
    "CreateEnvironmentRequest",
    "CreateEnvironmentResponse",
    "Environment",
    "ModifyEnvironmentRequest",
    "TargetSummary",
]

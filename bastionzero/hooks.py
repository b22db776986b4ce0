"""
Request/response hooks for observing HTTP traffic.

Hooks are plain callables passed to the client (`on_request`, `on_response`,
`on_error`). They receive read-only snapshots; header values that carry
credentials are redacted before a hook sees them.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

_REDACTED_HEADERS = frozenset({"x-api-key", "authorization", "cookie"})


def redact_headers(headers: list[tuple[str, str]]) -> dict[str, str]:
    return {
        name: ("[REDACTED]" if name.lower() in _REDACTED_HEADERS else value)
        for name, value in headers
    }


@dataclass(frozen=True, slots=True)
class RequestInfo:
    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class ResponseInfo:
    status_code: int
    elapsed_ms: float
    request: RequestInfo
    headers: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class ErrorInfo:
    """A request that failed before a response was received."""

    error: BaseException
    elapsed_ms: float
    request: RequestInfo


RequestHook = Callable[[RequestInfo], None]
ResponseHook = Callable[[ResponseInfo], None]
ErrorHook = Callable[[ErrorInfo], None]


__all__ = [
    "ErrorHook",
    "ErrorInfo",
    "RequestHook",
    "RequestInfo",
    "ResponseHook",
    "ResponseInfo",
    "redact_headers",
]

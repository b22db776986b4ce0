"""
Exceptions raised by the BastionZero SDK.

API errors (non-2xx responses) are raised as `ErrorResponse`. Transport
failures are raised by httpx unchanged (`httpx.TransportError` subclasses).
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import httpx


class BastionZeroError(Exception):
    """Base class for all SDK errors."""


class ConfigurationError(BastionZeroError):
    """The client was configured with invalid settings (e.g. malformed API secret)."""


class ErrorResponse(BastionZeroError):
    """
    An error reported by the BastionZero API.

    Raised for every response whose status code is outside 200-299. The body is
    decoded as `{"errorMsg": ..., "errorType": ..., "errors": {...}}` when
    possible; a body that is not JSON becomes `error_message` verbatim.
    """

    def __init__(
        self,
        *,
        status_code: int,
        method: str,
        url: str,
        reason: str = "",
        error_message: str = "",
        error_type: str = "",
        validation_errors: Mapping[str, list[str]] | None = None,
        response_body: bytes = b"",
        response: httpx.Response | None = None,
    ):
        self.status_code = status_code
        self.method = method
        self.url = url
        self.reason = reason
        self.error_message = error_message
        self.error_type = error_type
        self.validation_errors: dict[str, list[str]] = dict(validation_errors or {})
        self.response_body = response_body
        self.response = response
        super().__init__(self._render())

    @property
    def status(self) -> str:
        """Status line fragment, e.g. `404 Not Found`."""
        return f"{self.status_code} {self.reason}".rstrip()

    def _render(self) -> str:
        prefix = f"{self.method} {self.url}"
        if self.error_type:
            # errorType is always accompanied by errorMsg
            return f"{prefix}: {self.status}: {self.error_message} ({self.error_type})"
        if self.error_message:
            return f"{prefix}: {self.status}: {self.error_message}"
        if self.validation_errors:
            pretty = "Bad Request:"
            for prop, errors in self.validation_errors.items():
                pretty += f" {prop}: {', '.join(errors)}"
            return f"{prefix}: {self.status_code} {pretty}"
        return f"{prefix}: {self.status}"

    def __str__(self) -> str:
        return self._render()

    @classmethod
    def from_body(
        cls,
        *,
        status_code: int,
        method: str,
        url: str,
        reason: str = "",
        body: bytes = b"",
        response: httpx.Response | None = None,
    ) -> ErrorResponse:
        """Build an error from a raw response body."""
        error_message = ""
        error_type = ""
        validation_errors: dict[str, list[str]] = {}

        if body:
            try:
                data: Any = json.loads(body)
            except ValueError:
                error_message = body.decode("utf-8", errors="replace")
            else:
                if isinstance(data, Mapping):
                    error_message = _as_str(data.get("errorMsg"))
                    error_type = _as_str(data.get("errorType"))
                    validation_errors = _as_validation_errors(data.get("errors"))
                else:
                    # Valid JSON that does not match the error shape
                    error_message = body.decode("utf-8", errors="replace")

        return cls(
            status_code=status_code,
            method=method,
            url=url,
            reason=reason,
            error_message=error_message,
            error_type=error_type,
            validation_errors=validation_errors,
            response_body=body,
            response=response,
        )


def _as_str(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _as_validation_errors(value: Any) -> dict[str, list[str]]:
    if not isinstance(value, Mapping):
        return {}
    result: dict[str, list[str]] = {}
    for prop, errors in value.items():
        if isinstance(errors, (list, tuple)):
            result[str(prop)] = [_as_str(e) for e in errors]
        elif errors is not None:
            result[str(prop)] = [_as_str(errors)]
    return result


def is_api_error_status_code(err: BaseException | None, code: int) -> bool:
    """
    Return True when `err` is an `ErrorResponse` (or is caused by one) with the
    given HTTP status code.
    """
    seen: set[int] = set()
    current = err
    while current is not None and id(current) not in seen:
        if isinstance(current, ErrorResponse):
            return current.status_code == code
        seen.add(id(current))
        current = current.__cause__
    return False


__all__ = [
    "BastionZeroError",
    "ConfigurationError",
    "ErrorResponse",
    "is_api_error_status_code",
]

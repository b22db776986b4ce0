from __future__ import annotations

import os
import sys
import time
from contextlib import suppress
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal
from urllib.parse import urlsplit, urlunsplit

import httpx

from bastionzero import BastionZero
from bastionzero.client import API_SECRET_ENV, BASE_URL_ENV
from bastionzero.client import _maybe_load_dotenv as _sdk_maybe_load_dotenv
from bastionzero.exceptions import BastionZeroError, ConfigurationError, ErrorResponse
from bastionzero.hooks import ErrorHook, ErrorInfo as HookErrorInfo
from bastionzero.hooks import RequestHook, RequestInfo, ResponseHook, ResponseInfo
from bastionzero.models.types import DEFAULT_BASE_URL

from .errors import CLIError
from .logging import set_redaction_api_key
from .results import CommandMeta, CommandResult, ErrorInfo

OutputFormat = Literal["table", "json"]
OUTPUT_FORMATS: tuple[OutputFormat, ...] = ("table", "json")


def _strip_url_query_and_fragment(url: str) -> str:
    """
    Keep scheme/host/path but drop query/fragment so filters (emails, names)
    don't end up in traces.
    """
    parts = urlsplit(url)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, "", ""))


@dataclass(frozen=True, slots=True)
class ClientSettings:
    api_secret: str
    timeout: float
    base_url: str
    log_requests: bool
    on_request: RequestHook | None
    on_response: ResponseHook | None
    on_error: ErrorHook | None


@dataclass
class CLIContext:
    output: OutputFormat
    quiet: bool
    verbosity: int
    dotenv: bool
    env_file: Path
    api_secret_file: str | None
    timeout: float | None
    trace: bool
    base_url: str | None

    _client: BastionZero | None = None

    def use_output(self, output: OutputFormat) -> None:
        self.output = output

    def load_dotenv_if_requested(self) -> None:
        _sdk_maybe_load_dotenv(load_dotenv=self.dotenv, dotenv_path=self.env_file, override=False)

    def resolve_api_secret(self) -> str:
        if self.api_secret_file is not None:
            if self.api_secret_file == "-":
                secret = sys.stdin.read().strip()
                if not secret:
                    raise CLIError.usage("Empty API secret provided via stdin.")
                return secret
            path = Path(self.api_secret_file)
            try:
                secret = path.read_text(encoding="utf-8").strip()
            except OSError as exc:
                raise CLIError.usage(f"Cannot read API secret file: {path}") from exc
            if not secret:
                raise CLIError.usage(f"Empty API secret file: {path}")
            return secret

        env_secret = os.getenv(API_SECRET_ENV, "").strip()
        if env_secret:
            return env_secret

        raise CLIError.usage(
            f"Missing API secret. Set {API_SECRET_ENV} or use --api-secret-file.",
            hint="Create an API key in the BastionZero web app and export its secret.",
        )

    def resolve_base_url(self) -> str:
        return self.base_url or os.getenv(BASE_URL_ENV, "").strip() or DEFAULT_BASE_URL

    def resolve_client_settings(self) -> ClientSettings:
        self.load_dotenv_if_requested()
        api_secret = self.resolve_api_secret()
        set_redaction_api_key(api_secret)

        on_request: RequestHook | None = None
        on_response: ResponseHook | None = None
        on_error: ErrorHook | None = None
        if self.trace:

            def _write(line: str) -> None:
                sys.stderr.write(line + "\n")
                with suppress(OSError):
                    sys.stderr.flush()

            def _on_request(req: RequestInfo) -> None:
                _write(f"trace -> {req.method} {_strip_url_query_and_fragment(req.url)}")

            def _on_response(res: ResponseInfo) -> None:
                url = _strip_url_query_and_fragment(res.request.url)
                _write(f"trace <- {res.status_code} {url} elapsedMs={int(res.elapsed_ms)}")

            def _on_error(err: HookErrorInfo) -> None:
                url = _strip_url_query_and_fragment(err.request.url)
                _write(f"trace !! {type(err.error).__name__} {url}")

            on_request = _on_request
            on_response = _on_response
            on_error = _on_error

        return ClientSettings(
            api_secret=api_secret,
            timeout=self.timeout if self.timeout is not None else 30.0,
            base_url=self.resolve_base_url(),
            log_requests=self.verbosity >= 2,
            on_request=on_request,
            on_response=on_response,
            on_error=on_error,
        )

    def get_client(self) -> BastionZero:
        if self._client is not None:
            return self._client

        settings = self.resolve_client_settings()
        try:
            self._client = BastionZero.from_api_secret(
                settings.api_secret,
                base_url=settings.base_url,
                timeout=settings.timeout,
                log_requests=settings.log_requests,
                on_request=settings.on_request,
                on_response=settings.on_response,
                on_error=settings.on_error,
            )
        except ConfigurationError as exc:
            raise CLIError(str(exc), exit_code=2, error_type="config_error") from exc
        return self._client

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None


def exit_code_for_exception(exc: Exception) -> int:
    if isinstance(exc, CLIError):
        return exc.exit_code
    if isinstance(exc, ConfigurationError):
        return 2
    if isinstance(exc, ErrorResponse):
        if exc.status_code in (401, 403):
            return 3
        if exc.status_code == 404:
            return 4
        if exc.status_code >= 500:
            return 5
    return 1


def _error_type_for_status(status_code: int) -> str:
    if status_code == 401:
        return "auth_error"
    if status_code == 403:
        return "forbidden"
    if status_code == 404:
        return "not_found"
    if status_code == 400:
        return "validation_error"
    if status_code >= 500:
        return "server_error"
    return "api_error"


def error_info_for_exception(exc: Exception) -> ErrorInfo:
    if isinstance(exc, CLIError):
        return ErrorInfo(
            type=exc.error_type, message=exc.message, hint=exc.hint, details=exc.details
        )
    if isinstance(exc, ErrorResponse):
        details: dict[str, Any] | None = None
        if exc.validation_errors:
            details = {"errors": exc.validation_errors}
        return ErrorInfo(
            type=_error_type_for_status(exc.status_code),
            message=str(exc),
            status_code=exc.status_code,
            details=details,
        )
    if isinstance(exc, ConfigurationError):
        return ErrorInfo(type="config_error", message=str(exc))
    if isinstance(exc, httpx.TimeoutException):
        return ErrorInfo(type="timeout", message=str(exc) or "Request timed out")
    if isinstance(exc, httpx.TransportError):
        return ErrorInfo(type="network_error", message=str(exc) or type(exc).__name__)
    if isinstance(exc, BastionZeroError):
        return ErrorInfo(type="api_error", message=str(exc))
    return ErrorInfo(type="internal_error", message=str(exc) or type(exc).__name__)


def build_result(
    *,
    ok: bool,
    command: str,
    started_at: float,
    data: Any | None,
    warnings: list[str],
    base_url: str | None,
    error: ErrorInfo | None = None,
) -> CommandResult:
    duration_ms = int(max(0.0, (time.time() - started_at) * 1000))
    return CommandResult(
        ok=ok,
        command=command,
        data=data,
        warnings=warnings,
        meta=CommandMeta(duration_ms=duration_ms, base_url=base_url),
        error=error,
    )

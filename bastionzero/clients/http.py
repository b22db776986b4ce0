"""
HTTP plumbing shared by every service.

`HTTPClient` and `AsyncHTTPClient` build requests against the configured base
URL, send them through a small middleware pipeline (logging, hooks) and decode
the result. Services never touch httpx directly.
"""

from __future__ import annotations

import io
import json
import logging
import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import IO, Any

import httpx
import pydantic_core
from pydantic import BaseModel

from .._version import __version__
from ..exceptions import BastionZeroError, ErrorResponse
from ..hooks import (
    ErrorHook,
    ErrorInfo,
    RequestHook,
    RequestInfo,
    ResponseHook,
    ResponseInfo,
    redact_headers,
)
from ..models.base import BastionZeroModel
from ..models.types import DEFAULT_BASE_URL
from ..query import QueryOptions, add_options
from .pipeline import (
    AsyncMiddleware,
    AsyncPipeline,
    Middleware,
    Pipeline,
    SDKRequest,
    SDKResponse,
    compose,
    compose_async,
)

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = f"bastionzero-sdk-python/{__version__}"
MEDIA_TYPE = "application/json"

# Methods that are sent without a request body
_BODYLESS_METHODS = frozenset({"GET", "HEAD", "OPTIONS", "DELETE"})


@dataclass(frozen=True)
class ClientConfig:
    """Read-only configuration shared by the sync and async clients."""

    base_url: str = DEFAULT_BASE_URL
    user_agent: str = DEFAULT_USER_AGENT
    # Sent on every request (e.g. `X-API-KEY`)
    headers: Mapping[str, str] = field(default_factory=dict)
    timeout: float = 30.0
    log_requests: bool = False
    transport: httpx.BaseTransport | None = None
    async_transport: httpx.AsyncBaseTransport | None = None
    on_request: RequestHook | None = None
    on_response: ResponseHook | None = None
    on_error: ErrorHook | None = None


def _encode_body(body: Any) -> bytes:
    if body is None:
        return b""
    if isinstance(body, BastionZeroModel):
        return json.dumps(body.to_request()).encode("utf-8")
    if isinstance(body, BaseModel):
        return body.model_dump_json(by_alias=True, exclude_none=True).encode("utf-8")
    return pydantic_core.to_json(body, by_alias=True, exclude_none=True)


class _RequestBuilder:
    """Request construction and response decoding, independent of I/O."""

    _config: ClientConfig

    def _resolve_url(self, path: str) -> str:
        base = httpx.URL(self._config.base_url)
        return str(base.join(path))

    def build_request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: QueryOptions | None = None,
    ) -> SDKRequest:
        """
        Build a request for `path`, resolved against the base URL.

        Bodyless methods (GET, HEAD, OPTIONS, DELETE) never carry a body. Every
        other method sends `json` encoded as JSON, or an empty body when it is
        None.
        """
        method = method.upper()
        url = add_options(self._resolve_url(path), params)

        # Set semantics: one value per name, whatever case the caller used
        headers = httpx.Headers(self._config.headers)
        content: bytes | None = None
        if method not in _BODYLESS_METHODS:
            content = _encode_body(json)
            headers["Content-Type"] = MEDIA_TYPE
        headers["Accept"] = MEDIA_TYPE
        headers["User-Agent"] = self._config.user_agent
        raw = [(k.decode(headers.encoding), v.decode(headers.encoding)) for k, v in headers.raw]
        return SDKRequest(method=method, url=url, headers=raw, content=content)

    @staticmethod
    def _finish(
        request: SDKRequest,
        response: SDKResponse,
        sink: IO[bytes] | None,
        decode: bool = True,
    ) -> Any:
        if not response.is_success:
            raise ErrorResponse.from_body(
                status_code=response.status_code,
                method=request.method,
                url=request.url,
                reason=response.reason,
                body=response.content,
                response=response.raw,
            )
        if sink is not None:
            sink.write(response.content)
            return None
        if not decode or not response.content.strip():
            return None
        try:
            return json.loads(response.content)
        except ValueError as e:
            raise BastionZeroError(
                f"{request.method} {request.url}: response body is not valid JSON"
            ) from e

    @staticmethod
    def _to_sdk_response(resp: httpx.Response, elapsed: float) -> SDKResponse:
        sdk_response = SDKResponse(
            status_code=resp.status_code,
            headers=list(resp.headers.multi_items()),
            content=resp.content,
            reason=resp.reason_phrase,
            raw=resp,
        )
        sdk_response.context["http_version"] = resp.http_version
        sdk_response.context["elapsed_seconds"] = elapsed
        return sdk_response


# =============================================================================
# Middleware
# =============================================================================


def _request_info(req: SDKRequest) -> RequestInfo:
    return RequestInfo(method=req.method, url=req.url, headers=redact_headers(req.headers))


def _logging_middleware() -> Middleware:
    def middleware(req: SDKRequest, next: Pipeline) -> SDKResponse:
        logger.debug("%s %s", req.method, req.url)
        started = time.monotonic()
        resp = next(req)
        logger.debug("%s %s %.3fs", resp.status_code, req.url, time.monotonic() - started)
        return resp

    return middleware


def _async_logging_middleware() -> AsyncMiddleware:
    async def middleware(req: SDKRequest, next: AsyncPipeline) -> SDKResponse:
        logger.debug("%s %s", req.method, req.url)
        started = time.monotonic()
        resp = await next(req)
        logger.debug("%s %s %.3fs", resp.status_code, req.url, time.monotonic() - started)
        return resp

    return middleware


def _hooks_middleware(config: ClientConfig) -> Middleware:
    def middleware(req: SDKRequest, next: Pipeline) -> SDKResponse:
        info = _request_info(req)
        if config.on_request is not None:
            config.on_request(info)
        started = time.monotonic()
        try:
            resp = next(req)
        except httpx.TransportError as e:
            if config.on_error is not None:
                elapsed_ms = (time.monotonic() - started) * 1000
                config.on_error(ErrorInfo(error=e, elapsed_ms=elapsed_ms, request=info))
            raise
        if config.on_response is not None:
            config.on_response(
                ResponseInfo(
                    status_code=resp.status_code,
                    elapsed_ms=(time.monotonic() - started) * 1000,
                    request=info,
                    headers=dict(resp.headers),
                )
            )
        return resp

    return middleware


def _async_hooks_middleware(config: ClientConfig) -> AsyncMiddleware:
    async def middleware(req: SDKRequest, next: AsyncPipeline) -> SDKResponse:
        info = _request_info(req)
        if config.on_request is not None:
            config.on_request(info)
        started = time.monotonic()
        try:
            resp = await next(req)
        except httpx.TransportError as e:
            if config.on_error is not None:
                elapsed_ms = (time.monotonic() - started) * 1000
                config.on_error(ErrorInfo(error=e, elapsed_ms=elapsed_ms, request=info))
            raise
        if config.on_response is not None:
            config.on_response(
                ResponseInfo(
                    status_code=resp.status_code,
                    elapsed_ms=(time.monotonic() - started) * 1000,
                    request=info,
                    headers=dict(resp.headers),
                )
            )
        return resp

    return middleware


def _has_hooks(config: ClientConfig) -> bool:
    return any(h is not None for h in (config.on_request, config.on_response, config.on_error))


# =============================================================================
# Sync client
# =============================================================================


class HTTPClient(_RequestBuilder):
    """Synchronous HTTP client used by all sync services."""

    def __init__(self, config: ClientConfig):
        self._config = config
        self._client = httpx.Client(
            timeout=config.timeout,
            transport=config.transport,
        )
        middlewares: list[Middleware] = []
        if _has_hooks(config):
            middlewares.append(_hooks_middleware(config))
        if config.log_requests:
            middlewares.append(_logging_middleware())
        self._pipeline = compose(middlewares, self._terminal)

    @property
    def config(self) -> ClientConfig:
        return self._config

    def __enter__(self) -> HTTPClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def _terminal(self, req: SDKRequest) -> SDKResponse:
        started = time.monotonic()
        resp = self._client.request(
            req.method,
            req.url,
            headers=req.headers,
            content=req.content,
        )
        return self._to_sdk_response(resp, time.monotonic() - started)

    def send(
        self,
        request: SDKRequest,
        *,
        sink: IO[bytes] | None = None,
        decode: bool = True,
    ) -> Any:
        """
        Send a request and decode the response.

        Returns the decoded JSON body (None for an empty body). When `sink` is
        given, a successful body is written to it verbatim and None is returned.
        With `decode=False` a successful body is never read, for calls that
        return nothing.
        Raises `ErrorResponse` for any status outside 200-299.
        """
        response = self._pipeline(request)
        return self._finish(request, response, sink, decode)

    # =========================================================================
    # Convenience verbs
    # =========================================================================

    def get(self, path: str, *, params: QueryOptions | None = None) -> Any:
        return self.send(self.build_request("GET", path, params=params))

    def post(self, path: str, *, json: Any = None, decode: bool = True) -> Any:
        return self.send(self.build_request("POST", path, json=json), decode=decode)

    def put(self, path: str, *, json: Any = None, decode: bool = True) -> Any:
        return self.send(self.build_request("PUT", path, json=json), decode=decode)

    def patch(self, path: str, *, json: Any = None, decode: bool = True) -> Any:
        return self.send(self.build_request("PATCH", path, json=json), decode=decode)

    def delete(self, path: str, *, decode: bool = True) -> Any:
        return self.send(self.build_request("DELETE", path), decode=decode)

    def download(
        self,
        path: str,
        sink: IO[bytes],
        *,
        params: QueryOptions | None = None,
    ) -> None:
        """Copy a raw response body into `sink`."""
        self.send(self.build_request("GET", path, params=params), sink=sink)

    def get_text(self, path: str) -> str:
        """Fetch a raw (non-JSON) body as text."""
        buffer = io.BytesIO()
        self.download(path, buffer)
        return buffer.getvalue().decode("utf-8", errors="replace")


# =============================================================================
# Async client
# =============================================================================


class AsyncHTTPClient(_RequestBuilder):
    """Asynchronous HTTP client used by all async services."""

    def __init__(self, config: ClientConfig):
        self._config = config
        self._client = httpx.AsyncClient(
            timeout=config.timeout,
            transport=config.async_transport,
        )
        middlewares: list[AsyncMiddleware] = []
        if _has_hooks(config):
            middlewares.append(_async_hooks_middleware(config))
        if config.log_requests:
            middlewares.append(_async_logging_middleware())
        self._pipeline = compose_async(middlewares, self._terminal)

    @property
    def config(self) -> ClientConfig:
        return self._config

    async def __aenter__(self) -> AsyncHTTPClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    async def _terminal(self, req: SDKRequest) -> SDKResponse:
        started = time.monotonic()
        resp = await self._client.request(
            req.method,
            req.url,
            headers=req.headers,
            content=req.content,
        )
        return self._to_sdk_response(resp, time.monotonic() - started)

    async def send(
        self,
        request: SDKRequest,
        *,
        sink: IO[bytes] | None = None,
        decode: bool = True,
    ) -> Any:
        """Async counterpart of `HTTPClient.send`."""
        response = await self._pipeline(request)
        return self._finish(request, response, sink, decode)

    async def get(self, path: str, *, params: QueryOptions | None = None) -> Any:
        return await self.send(self.build_request("GET", path, params=params))

    async def post(self, path: str, *, json: Any = None, decode: bool = True) -> Any:
        return await self.send(self.build_request("POST", path, json=json), decode=decode)

    async def put(self, path: str, *, json: Any = None, decode: bool = True) -> Any:
        return await self.send(self.build_request("PUT", path, json=json), decode=decode)

    async def patch(self, path: str, *, json: Any = None, decode: bool = True) -> Any:
        return await self.send(self.build_request("PATCH", path, json=json), decode=decode)

    async def delete(self, path: str, *, decode: bool = True) -> Any:
        return await self.send(self.build_request("DELETE", path), decode=decode)

    async def download(
        self,
        path: str,
        sink: IO[bytes],
        *,
        params: QueryOptions | None = None,
    ) -> None:
        await self.send(self.build_request("GET", path, params=params), sink=sink)

    async def get_text(self, path: str) -> str:
        buffer = io.BytesIO()
        await self.download(path, buffer)
        return buffer.getvalue().decode("utf-8", errors="replace")


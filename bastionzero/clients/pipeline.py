"""
Internal request pipeline primitives.

The SDK models requests/responses independently of the underlying HTTP transport
so cross-cutting behavior (logging, hooks) can be implemented as middleware.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, TypeAlias, TypedDict, cast

if TYPE_CHECKING:
    import httpx

Header: TypeAlias = tuple[str, str]


class ResponseContext(TypedDict, total=False):
    http_version: str
    elapsed_seconds: float


@dataclass(slots=True)
class SDKRequest:
    method: str
    url: str
    headers: list[Header] = field(default_factory=list)
    # Encoded JSON body; None for methods that never carry one
    content: bytes | None = None

    def header(self, name: str) -> str | None:
        lowered = name.lower()
        for key, value in self.headers:
            if key.lower() == lowered:
                return value
        return None


@dataclass(slots=True)
class SDKResponse:
    status_code: int
    headers: list[Header]
    content: bytes
    reason: str = ""
    raw: httpx.Response | None = None
    context: ResponseContext = field(default_factory=lambda: cast(ResponseContext, {}))

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code <= 299


Pipeline: TypeAlias = Callable[[SDKRequest], SDKResponse]
AsyncPipeline: TypeAlias = Callable[[SDKRequest], Awaitable[SDKResponse]]


class Middleware(Protocol):
    def __call__(self, req: SDKRequest, next: Pipeline) -> SDKResponse: ...


class AsyncMiddleware(Protocol):
    async def __call__(self, req: SDKRequest, next: AsyncPipeline) -> SDKResponse: ...


def compose(middlewares: Sequence[Middleware], terminal: Pipeline) -> Pipeline:
    pipeline = terminal
    for middleware in reversed(middlewares):
        next_pipeline = pipeline

        def _wrapped(
            req: SDKRequest, *, _mw: Middleware = middleware, _n: Pipeline = next_pipeline
        ) -> SDKResponse:
            return _mw(req, _n)

        pipeline = _wrapped
    return pipeline


def compose_async(middlewares: Sequence[AsyncMiddleware], terminal: AsyncPipeline) -> AsyncPipeline:
    pipeline = terminal
    for middleware in reversed(middlewares):
        next_pipeline = pipeline

        async def _wrapped(
            req: SDKRequest,
            *,
            _mw: AsyncMiddleware = middleware,
            _n: AsyncPipeline = next_pipeline,
        ) -> SDKResponse:
            return await _mw(req, _n)

        pipeline = _wrapped
    return pipeline

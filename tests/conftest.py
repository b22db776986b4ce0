from __future__ import annotations

import json
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Any

import httpx
import pytest

from bastionzero import BastionZero

BASE_URL = "https://bz.example/"
# base64 of "test-secret"
API_SECRET = "dGVzdC1zZWNyZXQ="


@dataclass
class Recorder:
    """Records requests and answers them from a route table or a default."""

    routes: dict[tuple[str, str], httpx.Response] = field(default_factory=dict)
    requests: list[httpx.Request] = field(default_factory=list)

    def add(self, method: str, path: str, response: httpx.Response) -> None:
        self.routes[(method, path)] = response

    def json(self, method: str, path: str, payload: Any, status_code: int = 200) -> None:
        self.add(method, path, httpx.Response(status_code, json=payload))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.routes.get((request.method, request.url.path))
        if response is None:
            pytest.fail(f"Unexpected request: {request.method} {request.url}")
        # fresh copy so a route can answer more than once
        return httpx.Response(
            response.status_code, headers=response.headers, content=response.content
        )

    @property
    def last(self) -> httpx.Request:
        assert self.requests, "no request was sent"
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def make_client(recorder: Recorder) -> Iterator[Callable[..., BastionZero]]:
    clients: list[BastionZero] = []

    def factory(**kwargs: Any) -> BastionZero:
        kwargs.setdefault("base_url", BASE_URL)
        client = BastionZero.from_api_secret(
            API_SECRET, transport=httpx.MockTransport(recorder), **kwargs
        )
        clients.append(client)
        return client

    yield factory
    for c in clients:
        c.close()


@pytest.fixture
def client(make_client: Callable[..., BastionZero]) -> BastionZero:
    return make_client()

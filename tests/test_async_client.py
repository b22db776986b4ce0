from __future__ import annotations

import json

import httpx
import pytest

from bastionzero import AsyncBastionZero, ErrorResponse
from bastionzero.models.environments import CreateEnvironmentRequest
from bastionzero.models.events import AgentStatusChangeEventOptions, ConnectionEventOptions
from bastionzero.models.types import ConnectionEventType

from conftest import API_SECRET, BASE_URL


def _client(handler) -> AsyncBastionZero:
    return AsyncBastionZero.from_api_secret(
        API_SECRET,
        base_url=BASE_URL,
        async_transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_async_list_all_targets() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/v2/targets"
        assert request.headers["X-API-KEY"] == API_SECRET
        return httpx.Response(200, json={"kubernetes": [{"id": "k-1", "name": "prod-eks"}]})

    async with _client(handler) as client:
        resp = await client.targets.list_all()

    assert [t.name for t in resp.all()] == ["prod-eks"]


@pytest.mark.asyncio
async def test_async_environment_create_sends_body() -> None:
    bodies: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(200, json={"id": "env-9"})

    async with _client(handler) as client:
        created = await client.environments.create(
            CreateEnvironmentRequest(name="staging", offline_cleanup_timeout_hours=12)
        )

    assert created.id == "env-9"
    assert bodies == [{"name": "staging", "offlineCleanupTimeoutHours": 12}]


@pytest.mark.asyncio
async def test_async_connection_events() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.params.get_list("connectionEventTypes") == ["Created", "Closed"]
        return httpx.Response(
            200, json=[{"id": "e-1", "connectionEventType": "ClientConnect"}]
        )

    async with _client(handler) as client:
        events = await client.events.list_connection_events(
            ConnectionEventOptions(
                connection_event_types=[ConnectionEventType.CREATED, ConnectionEventType.CLOSED]
            )
        )

    assert events[0].connection_event_type is ConnectionEventType.CLIENT_CONNECT


@pytest.mark.asyncio
async def test_async_errors_raise_error_response() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"errorMsg": "Invalid API key"})

    async with _client(handler) as client:
        with pytest.raises(ErrorResponse) as excinfo:
            await client.policies.list_proxy()

    assert excinfo.value.status_code == 401
    assert "Invalid API key" in str(excinfo.value)


@pytest.mark.asyncio
async def test_async_close_connection_patches() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, content=b"Closed")

    async with _client(handler) as client:
        assert await client.connections.close("c-7") is None
        assert await client.environments.delete("env-1") is None

    assert seen[0].method == "PATCH"
    assert seen[0].url.path == "/api/v2/connections/c-7/close"
    assert seen[1].method == "DELETE"


@pytest.mark.asyncio
async def test_async_agent_status_change_events_require_target_id() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        pytest.fail(f"Unexpected request: {request.method} {request.url}")

    async with _client(handler) as client:
        with pytest.raises(ValueError, match="target_id"):
            await client.events.list_agent_status_change_events(
                AgentStatusChangeEventOptions(target_id="")
            )

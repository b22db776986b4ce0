"""
Event service: audit trails for subjects, connections, commands, Kubernetes
and agent status changes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..models.base import validate_list
from ..models.events import (
    AgentStatusChangeEvent,
    AgentStatusChangeEventOptions,
    CommandEvent,
    CommandEventOptions,
    ConnectionEvent,
    ConnectionEventOptions,
    KubernetesEvent,
    SubjectEvent,
    SubjectEventOptions,
)

if TYPE_CHECKING:
    from ..clients.http import AsyncHTTPClient, HTTPClient

BASE_PATH = "api/v2/events"


def _require_target_id(options: AgentStatusChangeEventOptions | None) -> None:
    if options is None:
        raise ValueError("options are required")
    if not options.target_id:
        raise ValueError("options.target_id is required")


class EventService:
    """
    Service for reading audit events.

    Example:
        ```python
        from datetime import datetime, timedelta, timezone

        since = datetime.now(timezone.utc) - timedelta(days=1)
        events = client.events.list_connection_events(
            ConnectionEventOptions(start_timestamp=since, event_count=50)
        )
        ```
    """

    def __init__(self, client: HTTPClient):
        self._client = client

    def list_subject_events(
        self, options: SubjectEventOptions | None = None
    ) -> list[SubjectEvent]:
        data = self._client.get(f"{BASE_PATH}/subject", params=options)
        return validate_list(SubjectEvent, data)

    def list_connection_events(
        self, options: ConnectionEventOptions | None = None
    ) -> list[ConnectionEvent]:
        data = self._client.get(f"{BASE_PATH}/connection", params=options)
        return validate_list(ConnectionEvent, data)

    def list_command_events(
        self, options: CommandEventOptions | None = None
    ) -> list[CommandEvent]:
        data = self._client.get(f"{BASE_PATH}/command", params=options)
        return validate_list(CommandEvent, data)

    def list_kubernetes_events(self) -> list[KubernetesEvent]:
        return validate_list(KubernetesEvent, self._client.get(f"{BASE_PATH}/kube"))

    def list_agent_status_change_events(
        self, options: AgentStatusChangeEventOptions
    ) -> list[AgentStatusChangeEvent]:
        """Status transitions of one target's agent. `options.target_id` is required."""
        _require_target_id(options)
        data = self._client.get(f"{BASE_PATH}/agent-status-change", params=options)
        return validate_list(AgentStatusChangeEvent, data)


class AsyncEventService:
    """Async version of EventService."""

    def __init__(self, client: AsyncHTTPClient):
        self._client = client

    async def list_subject_events(
        self, options: SubjectEventOptions | None = None
    ) -> list[SubjectEvent]:
        data = await self._client.get(f"{BASE_PATH}/subject", params=options)
        return validate_list(SubjectEvent, data)

    async def list_connection_events(
        self, options: ConnectionEventOptions | None = None
    ) -> list[ConnectionEvent]:
        data = await self._client.get(f"{BASE_PATH}/connection", params=options)
        return validate_list(ConnectionEvent, data)

    async def list_command_events(
        self, options: CommandEventOptions | None = None
    ) -> list[CommandEvent]:
        data = await self._client.get(f"{BASE_PATH}/command", params=options)
        return validate_list(CommandEvent, data)

    async def list_kubernetes_events(self) -> list[KubernetesEvent]:
        return validate_list(KubernetesEvent, await self._client.get(f"{BASE_PATH}/kube"))

    async def list_agent_status_change_events(
        self, options: AgentStatusChangeEventOptions
    ) -> list[AgentStatusChangeEvent]:
        _require_target_id(options)
        data = await self._client.get(f"{BASE_PATH}/agent-status-change", params=options)
        return validate_list(AgentStatusChangeEvent, data)

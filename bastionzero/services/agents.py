"""
Agent service.
"""

from __future__ import annotations

import builtins
from typing import TYPE_CHECKING

from ..models.agents import AgentDetails, ListAgentsOptions
from ..models.base import validate_list

if TYPE_CHECKING:
    from ..clients.http import HTTPClient

BASE_PATH = "api/v2/agents"


class AgentService:
    def __init__(self, client: HTTPClient):
        self._client = client

    def list(self, options: ListAgentsOptions | None = None) -> builtins.list[AgentDetails]:
        """
        List agents, optionally filtered.

        Example:
            ```python
            online = client.agents.list(
                ListAgentsOptions(agent_statuses=[AgentStatus.ONLINE])
            )
            ```
        """
        return validate_list(AgentDetails, self._client.get(BASE_PATH, params=options))

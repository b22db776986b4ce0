"""
Agent models.
"""

from __future__ import annotations

from pydantic import Field

from ..query import QueryOptions
from .base import BastionZeroModel
from .types import AgentStatus, AgentType, Timestamp


class ControlChannelSummary(BastionZeroModel):
    """The control channel an agent currently holds with a connection node."""

    control_channel_id: str = ""
    connection_node_id: str = ""
    start_time: Timestamp | None = None
    end_time: Timestamp | None = None


class AgentSummary(BastionZeroModel):
    """Agent information embedded in target responses."""

    id: str = ""
    name: str = ""
    type: AgentType | None = None
    status: AgentStatus | None = None
    version: str = ""
    region: str = ""
    public_key: str = ""
    last_status_update: Timestamp | None = None


class AgentDetails(BastionZeroModel):
    id: str = ""
    name: str = ""
    agent_type: AgentType | None = Field(None, alias="type")
    agent_status: AgentStatus | None = Field(None, alias="status")
    last_status_update: Timestamp | None = None
    version: str = ""
    region: str = ""
    public_key: str = ""
    control_channel: ControlChannelSummary | None = None
    environment_id: str = ""
    environment_name: str = ""


class ListAgentsOptions(QueryOptions):
    agent_types: list[AgentType] | None = Field(None, alias="agentTypes")
    agent_statuses: list[AgentStatus] | None = Field(None, alias="agentStatuses")
    environment_name: str | None = Field(None, alias="environmentName")
    name: str | None = None


__all__ = ["AgentDetails", "AgentSummary", "ControlChannelSummary", "ListAgentsOptions"]

"""
Audit event models and their list filters.
"""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar

from pydantic import Field

from ..query import QueryOptions
from .base import BastionZeroModel
from .types import ConnectionEventType, SubjectType, TargetType, Timestamp


class SubjectEvent(BastionZeroModel):
    """An API call made by a subject."""

    id: str = ""
    organization_id: str = ""
    subject_id: str = ""
    subject_type: SubjectType | None = None
    subject_name: str = ""
    is_admin: bool = False
    service_action: str = ""
    resource: str = ""
    evaluation: bool = False
    timestamp: Timestamp | None = None
    ip_address: str = ""
    context: str = ""


class ConnectionEvent(BastionZeroModel):
    id: str = ""
    connection_id: str = ""
    subject_id: str = ""
    subject_type: SubjectType | None = None
    subject_name: str = ""
    organization_id: str = ""
    session_id: str = ""
    session_name: str = ""
    target_id: str = ""
    target_type: str = ""
    target_name: str = ""
    target_user: str = ""
    environment_id: str = ""
    environment_name: str = ""
    timestamp: Timestamp | None = None
    connection_event_type: ConnectionEventType | None = None
    reason: str = ""
    connection_node_id: str = ""


class CommandEvent(BastionZeroModel):
    """A shell command typed during a connection."""

    id: str = ""
    connection_id: str = ""
    target_id: str = ""
    target_type: str = ""
    target_name: str = ""
    subject_id: str = ""
    subject_type: SubjectType | None = None
    subject_name: str = ""
    organization_id: str = ""
    timestamp: Timestamp | None = None
    target_user: str = ""
    environment_id: str = ""
    environment_name: str = ""
    command: str = ""


class KubernetesEventEndpoint(BastionZeroModel):
    id: str = ""
    time_created: Timestamp | None = None
    event: str = ""


class KubernetesEventExecCommand(BastionZeroModel):
    id: str = ""
    time_created: Timestamp | None = None
    event: str = ""


class KubernetesEvent(BastionZeroModel):
    id: str = ""
    organization_id: str = ""
    creation_date: Timestamp | None = None
    role: str = ""
    target_groups: list[str] = Field(default_factory=list)
    endpoints: list[KubernetesEventEndpoint] = Field(default_factory=list)
    exec_commands: list[KubernetesEventExecCommand] = Field(default_factory=list)
    kube_english_command: str = ""
    status_code: int = 0
    user_id: str = ""
    cluster_id: str = ""
    target_name: str = ""
    user_email: str = ""


class AgentStatusChangeEvent(BastionZeroModel):
    status_change: str = ""
    timestamp: Timestamp | None = Field(None, alias="timeStamp")
    reason: str = ""
    agent_public_key: str = ""


# =============================================================================
# Options
# =============================================================================


class SubjectEventOptions(QueryOptions):
    subject_ids: list[str] | None = Field(None, alias="subjectIds")
    subject_types: list[SubjectType] | None = Field(None, alias="subjectTypes")
    subject_names: list[str] | None = Field(None, alias="subjectNames")
    is_admin: bool | None = Field(None, alias="isAdmin")
    ip_addresses: list[str] | None = Field(None, alias="ipAddresses")
    start_timestamp: datetime | None = Field(None, alias="startTimestamp")
    end_timestamp: datetime | None = Field(None, alias="endTimestamp")
    event_count: int | None = Field(None, alias="eventCount")
    service_actions: list[str] | None = Field(None, alias="serviceActions")
    evaluation: bool | None = None

    # Pointer-style booleans: an explicit False is still a filter
    keep_empty: ClassVar[frozenset[str]] = frozenset({"is_admin", "evaluation"})


class _SessionEventOptions(QueryOptions):
    subject_ids: list[str] | None = Field(None, alias="subjectIds")
    subject_types: list[SubjectType] | None = Field(None, alias="subjectTypes")
    # Filtered server side by subject name under the `userNames` key
    subject_names: list[str] | None = Field(None, alias="userNames")
    is_admin: bool | None = Field(None, alias="isAdmin")
    ip_addresses: list[str] | None = Field(None, alias="ipAddresses")
    start_timestamp: datetime | None = Field(None, alias="startTimestamp")
    end_timestamp: datetime | None = Field(None, alias="endTimestamp")
    event_count: int | None = Field(None, alias="eventCount")
    connection_ids: list[str] | None = Field(None, alias="connectionIds")
    space_ids: list[str] | None = Field(None, alias="spaceIds")
    space_names: list[str] | None = Field(None, alias="spaceNames")
    target_ids: list[str] | None = Field(None, alias="targetIds")
    target_names: list[str] | None = Field(None, alias="targetNames")
    target_types: list[TargetType] | None = Field(None, alias="targetTypes")
    target_users: list[str] | None = Field(None, alias="targetUsers")
    environment_ids: list[str] | None = Field(None, alias="environmentIds")
    environment_names: list[str] | None = Field(None, alias="environmentNames")

    keep_empty: ClassVar[frozenset[str]] = frozenset({"is_admin"})


class ConnectionEventOptions(_SessionEventOptions):
    connection_event_types: list[ConnectionEventType] | None = Field(
        None, alias="connectionEventTypes"
    )
    connection_node_ids: list[str] | None = Field(None, alias="connectionNodeIds")


class CommandEventOptions(_SessionEventOptions):
    command_search: str | None = Field(None, alias="commandSearch")


class AgentStatusChangeEventOptions(QueryOptions):
    target_id: str = Field(alias="targetId")
    start_timestamp: datetime | None = Field(None, alias="startTimestamp")
    end_timestamp: datetime | None = Field(None, alias="endTimestamp")

    keep_empty: ClassVar[frozenset[str]] = frozenset({"target_id"})


__all__ = [
    "AgentStatusChangeEvent",
    "AgentStatusChangeEventOptions",
    "CommandEvent",
    "CommandEventOptions",
    "ConnectionEvent",
    "ConnectionEventOptions",
    "KubernetesEvent",
    "KubernetesEventEndpoint",
    "KubernetesEventExecCommand",
    "SubjectEvent",
    "SubjectEventOptions",
]

"""
Connection models.

A connection is an authorized session between a subject and a target. Each
connection kind shares the common `Connection` fields.
"""

from __future__ import annotations

from pydantic import Field

from ..query import QueryOptions
from .base import BastionZeroModel
from .types import (
    ConnectionState,
    DynamicAccessTargetState,
    TargetType,
    Timestamp,
    VerbType,
)


class Connection(BastionZeroModel):
    id: str = ""
    time_created: Timestamp | None = None
    state: ConnectionState | None = None
    # The API uses a capitalised ID suffix for this key
    target_id: str = Field("", alias="targetID")
    target_type: TargetType | None = None
    subject_id: str = ""


class ShellConnection(Connection):
    space_id: str = ""
    target_user: str = ""
    session_recording_available: bool = False
    session_recording: bool = False
    input_recording: bool = False


class KubeConnection(Connection):
    target_user: str = ""
    target_groups: list[str] = Field(default_factory=list)
    target_name: str = ""


class DbConnection(Connection):
    remote_host: str = ""
    remote_port: int = 0
    target_name: str = ""
    target_user: str = ""


class RDPConnection(Connection):
    remote_host: str = ""
    remote_port: int = 0
    target_name: str = ""


class SQLServerConnection(Connection):
    remote_host: str = ""
    remote_port: int = 0
    target_name: str = ""


class SSHConnection(Connection):
    target_user: str = ""
    remote_host: str = ""
    remote_port: int = 0


class WebConnection(Connection):
    remote_host: str = ""
    remote_port: int = 0
    target_name: str = ""


class DynamicAccessConnection(BastionZeroModel):
    id: str = ""
    connection_state: ConnectionState | None = None
    dynamic_access_target_state: DynamicAccessTargetState | None = None
    provisioning_server_unique_id: str = ""
    provisioning_server_error_message: str = ""


# =============================================================================
# Requests / responses
# =============================================================================


class CreateConnectionResponse(BastionZeroModel):
    connection_id: str = ""


class CreateShellConnectionRequest(BastionZeroModel):
    space_id: str = ""
    target_id: str = ""
    target_type: TargetType = TargetType.BZERO
    target_user: str = ""


class CreateSSHConnectionRequest(BastionZeroModel):
    target_id: str = ""
    target_user: str = ""
    remote_host: str = ""
    remote_port: int = 0
    scp_only: bool = False


class CreateKubeConnectionRequest(BastionZeroModel):
    target_user: str = ""
    target_groups: list[str] = Field(default_factory=list)
    target_id: str = ""


class CreateDbConnectionRequest(BastionZeroModel):
    target_id: str = ""
    target_user: str | None = None


class CreateWebConnectionRequest(BastionZeroModel):
    target_id: str = ""


class CreateUniversalConnectionRequest(BastionZeroModel):
    """
    Open a connection to a target identified by ID, or by name plus
    environment.
    """

    target_id: str | None = None
    target_name: str | None = None
    target_user: str | None = None
    environment_id: str | None = Field(None, alias="envId")
    environment_name: str | None = Field(None, alias="envName")
    target_groups: list[str] | None = None
    target_type: TargetType | None = None
    verb_type: VerbType | None = None


class CreateUniversalSSHConnectionRequest(BastionZeroModel):
    target_id: str | None = None
    target_name: str | None = None
    target_user: str = ""
    remote_host: str = ""
    remote_port: int = 0
    environment_name: str | None = None


class ConnectionAuthDetails(BastionZeroModel):
    connection_node_id: str = ""
    auth_token: str = ""
    connection_service_url: str = ""
    region: str = ""


class CreateUniversalConnectionResponse(BastionZeroModel):
    connection_id: str = ""
    target_id: str = ""
    target_name: str = ""
    target_user: str = ""
    target_type: TargetType | None = None
    verb_type: VerbType | None = None
    agent_public_key: str = ""
    agent_version: str = ""
    connection_auth_details: ConnectionAuthDetails = Field(default_factory=ConnectionAuthDetails)
    ssh_scp_only: bool = False
    split_cert: bool = False


class ListConnectionOptions(QueryOptions):
    connection_state: ConnectionState | None = Field(None, alias="connectionState")
    user_email: str | None = Field(None, alias="userEmail")


__all__ = [
    "Connection",
    "ConnectionAuthDetails",
    "CreateConnectionResponse",
    "CreateDbConnectionRequest",
    "CreateKubeConnectionRequest",
    "CreateSSHConnectionRequest",
    "CreateShellConnectionRequest",
    "CreateUniversalConnectionRequest",
    "CreateUniversalConnectionResponse",
    "CreateUniversalSSHConnectionRequest",
    "CreateWebConnectionRequest",
    "DbConnection",
    "DynamicAccessConnection",
    "KubeConnection",
    "ListConnectionOptions",
    "RDPConnection",
    "SQLServerConnection",
    "SSHConnection",
    "ShellConnection",
    "WebConnection",
]

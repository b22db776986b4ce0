"""
Target models.

Targets returned by the all-targets endpoint are grouped by the kind of access
they allow (shell, SSH, file transfer, database, ...). Each of those shares the
common `Target` fields. The per-type endpoints (`bzero`, `kube`, `web`) return
their own shapes.
"""

from __future__ import annotations

from typing import ClassVar

from pydantic import Field

from ..query import QueryOptions
from .agents import AgentSummary, ControlChannelSummary
from .base import BastionZeroModel, Port
from .connections import (
    DbConnection,
    KubeConnection,
    RDPConnection,
    ShellConnection,
    SQLServerConnection,
    SSHConnection,
    WebConnection,
)
from .policies import PolicyTargetUser, PolicyVerb
from .types import (
    ConnectionState,
    DynamicAccessConfigurationStatus,
    TargetStatus,
    Timestamp,
)


class AccessDetails(BastionZeroModel):
    jit: bool = False
    access_expiration_time: Timestamp | None = None


class Target(BastionZeroModel):
    """Fields shared by every kind of target."""

    id: str = ""
    name: str = ""
    status: TargetStatus | None = None
    environment_id: str = ""
    environment_name: str = ""
    agent: AgentSummary | None = None
    access_details: AccessDetails | None = None


class DatabaseAuthenticationConfig(BastionZeroModel):
    """
    How the agent authenticates to a database.

    Values come from `DatabaseAuthenticationType`, `CloudServiceProvider` and
    `DatabaseEngine`; the supported combinations are listed by
    `TargetService.list_database_authentication_configs()`.
    """

    authentication_type: str | None = None
    cloud_service_provider: str | None = None
    database: str | None = None
    label: str | None = None


class DatabaseTarget(Target):
    proxy_agent_id: str = ""
    proxy_agent_name: str = ""
    remote_host: str = ""
    remote_port: Port = Field(default_factory=Port)
    local_host: str = ""
    local_port: Port | None = None
    is_split_cert: bool = Field(False, alias="splitCert")
    database_type: str | None = None
    allowed_target_users: list[PolicyTargetUser] = Field(default_factory=list)
    connections: list[DbConnection] = Field(default_factory=list)
    database_authentication_config: DatabaseAuthenticationConfig = Field(
        default_factory=DatabaseAuthenticationConfig
    )


class FileTransferTarget(Target):
    allowed_target_users: list[PolicyTargetUser] = Field(default_factory=list)


class KubeTarget(Target):
    allowed_cluster_users: list[str] = Field(default_factory=list)
    allowed_cluster_groups: list[str] = Field(default_factory=list)
    valid_cluster_users: list[str] = Field(default_factory=list)
    connections: list[KubeConnection] = Field(default_factory=list)


class RDPTarget(Target):
    remote_host: str = ""
    remote_port: Port = Field(default_factory=Port)
    connections: list[RDPConnection] = Field(default_factory=list)


class ShellTarget(Target):
    dynamic_access: bool = False
    allowed_target_users: list[PolicyTargetUser] = Field(default_factory=list)
    connections: list[ShellConnection] = Field(default_factory=list)


class SQLServerTarget(Target):
    remote_host: str = ""
    remote_port: Port = Field(default_factory=Port)
    connections: list[SQLServerConnection] = Field(default_factory=list)


class SSHTarget(Target):
    allowed_target_users: list[PolicyTargetUser] = Field(default_factory=list)
    connections: list[SSHConnection] = Field(default_factory=list)


class WebTarget(Target):
    proxy_agent_id: str = ""
    proxy_agent_name: str = ""
    remote_host: str = ""
    remote_port: Port = Field(default_factory=Port)
    local_host: str = ""
    local_port: Port | None = None
    connections: list[WebConnection] = Field(default_factory=list)


class AllTargetsResponse(BastionZeroModel):
    """Every target the caller can see, grouped by access kind."""

    db: list[DatabaseTarget] = Field(default_factory=list)
    kubernetes: list[KubeTarget] = Field(default_factory=list)
    file_transfer: list[FileTransferTarget] = Field(default_factory=list)
    rdp: list[RDPTarget] = Field(default_factory=list)
    shell: list[ShellTarget] = Field(default_factory=list)
    ssh: list[SSHTarget] = Field(default_factory=list)
    sql_server: list[SQLServerTarget] = Field(default_factory=list)
    web: list[WebTarget] = Field(default_factory=list)

    def all(self) -> list[Target]:
        """Flatten every group into a single list, in response order."""
        return [
            *self.db,
            *self.kubernetes,
            *self.file_transfer,
            *self.rdp,
            *self.shell,
            *self.ssh,
            *self.sql_server,
            *self.web,
        ]


class BzeroTarget(BastionZeroModel):
    id: str = ""
    name: str = ""
    status: TargetStatus | None = None
    environment_id: str = ""
    last_agent_update: Timestamp | None = None
    agent_version: str = ""
    region: str = ""
    agent_public_key: str = ""
    allowed_target_users: list[PolicyTargetUser] = Field(default_factory=list)
    allowed_verbs: list[PolicyVerb] = Field(default_factory=list)
    control_channel: ControlChannelSummary | None = None


class ClusterTarget(BastionZeroModel):
    id: str = ""
    name: str = ""
    status: TargetStatus | None = None
    environment_id: str = ""
    last_agent_update: Timestamp | None = None
    agent_version: str = ""
    region: str = ""
    agent_public_key: str = ""
    allowed_cluster_users: list[str] = Field(default_factory=list)
    allowed_cluster_groups: list[str] = Field(default_factory=list)
    valid_cluster_users: list[str] = Field(default_factory=list)
    control_channel: ControlChannelSummary | None = None


class WebTargetSummary(BastionZeroModel):
    """Web target as returned by the `web` endpoints."""

    id: str = ""
    name: str = ""
    status: TargetStatus | None = None
    proxy_target_id: str = ""
    last_agent_update: Timestamp | None = None
    agent_version: str = ""
    remote_host: str = ""
    remote_port: Port = Field(default_factory=Port)
    local_port: Port = Field(default_factory=Port)
    local_host: str = ""
    environment_id: str = ""
    region: str = ""
    agent_public_key: str = ""


class DynamicAccessConfiguration(BastionZeroModel):
    """Webhooks that provision and tear down dynamic access targets (DATs)."""

    id: str = ""
    name: str = ""
    environment_id: str = ""
    start_webhook: str = ""
    stop_webhook: str = ""
    health_webhook: str = ""
    allowed_target_users: list[PolicyTargetUser] = Field(default_factory=list)
    allowed_verbs: list[PolicyVerb] = Field(default_factory=list)
    status: DynamicAccessConfigurationStatus | None = None


# =============================================================================
# Requests / responses
# =============================================================================


class CreateDatabaseTargetRequest(BastionZeroModel):
    target_name: str = ""
    proxy_target_id: str = ""
    remote_host: str = ""
    remote_port: Port = Field(default_factory=Port)
    local_port: Port | None = None
    local_host: str | None = None
    is_split_cert: bool | None = Field(None, alias="splitCert")
    database_type: str | None = None
    environment_id: str | None = None
    environment_name: str | None = None
    database_authentication_config: DatabaseAuthenticationConfig | None = None


class CreateDatabaseTargetResponse(BastionZeroModel):
    target_id: str = ""


class ModifyDatabaseTargetRequest(BastionZeroModel):
    target_name: str | None = None
    proxy_target_id: str | None = None
    remote_host: str | None = None
    remote_port: Port | None = None
    local_port: Port | None = None
    local_host: str | None = None
    is_split_cert: bool | None = Field(None, alias="splitCert")
    database_type: str | None = None
    environment_id: str | None = None
    database_authentication_config: DatabaseAuthenticationConfig | None = None


class ListSplitCertDatabaseTypesResponse(BastionZeroModel):
    databases: list[str] = Field(default_factory=list)


class CreateDynamicAccessConfigurationRequest(BastionZeroModel):
    name: str = ""
    start_webhook: str = ""
    stop_webhook: str = ""
    health_webhook: str = ""
    environment_id: str = ""
    shared_secret: str | None = None


class CreateDynamicAccessConfigurationResponse(BastionZeroModel):
    id: str = ""


class ModifyDynamicAccessConfigurationRequest(BastionZeroModel):
    name: str | None = None
    start_webhook: str | None = None
    stop_webhook: str | None = None
    health_webhook: str | None = None
    shared_secret: str | None = None


class ListAllTargetsOptions(QueryOptions):
    """Filters for the all-targets endpoint."""

    keep_empty: ClassVar[frozenset[str]] = frozenset({"all_targets_in_org", "user_email"})

    connection_states: ConnectionState | None = Field(None, alias="connectionStates")
    # Admins only: list every target in the organization
    all_targets_in_org: bool = Field(False, alias="allTargetsInOrg")
    # Admins only: list the targets this user can access
    user_email: str = Field("", alias="userEmail")


class ListDatabaseTargetsOptions(QueryOptions):
    target_names: list[str] | None = Field(None, alias="targetNames")
    target_ids: list[str] | None = Field(None, alias="targetIds")
    environment_name: str | None = Field(None, alias="envName")
    environment_id: str | None = Field(None, alias="envId")


__all__ = [
    "AccessDetails",
    "AllTargetsResponse",
    "BzeroTarget",
    "ClusterTarget",
    "CreateDatabaseTargetRequest",
    "CreateDatabaseTargetResponse",
    "CreateDynamicAccessConfigurationRequest",
    "CreateDynamicAccessConfigurationResponse",
    "DatabaseAuthenticationConfig",
    "DatabaseTarget",
    "DynamicAccessConfiguration",
    "FileTransferTarget",
    "KubeTarget",
    "ListAllTargetsOptions",
    "ListDatabaseTargetsOptions",
    "ListSplitCertDatabaseTypesResponse",
    "ModifyDatabaseTargetRequest",
    "ModifyDynamicAccessConfigurationRequest",
    "RDPTarget",
    "SQLServerTarget",
    "SSHTarget",
    "ShellTarget",
    "Target",
    "WebTarget",
    "WebTargetSummary",
]

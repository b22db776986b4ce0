"""
BastionZero data models.

All Pydantic models and type definitions are available from this module.
"""

from __future__ import annotations

# Agents
from .agents import AgentDetails, AgentSummary, ControlChannelSummary, ListAgentsOptions

# Base
from .base import BastionZeroModel, Port

# Connections
from .connections import (
    Connection,
    ConnectionAuthDetails,
    CreateConnectionResponse,
    CreateDbConnectionRequest,
    CreateKubeConnectionRequest,
    CreateShellConnectionRequest,
    CreateSSHConnectionRequest,
    CreateUniversalConnectionRequest,
    CreateUniversalConnectionResponse,
    CreateUniversalSSHConnectionRequest,
    CreateWebConnectionRequest,
    DbConnection,
    DynamicAccessConnection,
    KubeConnection,
    ListConnectionOptions,
    RDPConnection,
    ShellConnection,
    SQLServerConnection,
    SSHConnection,
    WebConnection,
)

# Environments
from .environments import (
    CreateEnvironmentRequest,
    CreateEnvironmentResponse,
    Environment,
    ModifyEnvironmentRequest,
    TargetSummary,
)

# Events
from .events import (
    AgentStatusChangeEvent,
    AgentStatusChangeEventOptions,
    CommandEvent,
    CommandEventOptions,
    ConnectionEvent,
    ConnectionEventOptions,
    KubernetesEvent,
    KubernetesEventEndpoint,
    KubernetesEventExecCommand,
    SubjectEvent,
    SubjectEventOptions,
)

# MFA, GitHub actions, Okta, autodiscovery, session recordings
from .misc import (
    AuthorizedGitHubAction,
    BzeroBashAutodiscoveryOptions,
    BzeroBashAutodiscoveryScript,
    ClearMFASecretRequest,
    CreateAuthorizedGitHubActionRequest,
    DisableMFARequest,
    EnableMFARequest,
    ListOktaPublicKeysResponse,
    MFAStatus,
    OktaPublicKey,
    ResetMFASecretRequest,
    ResetMFASecretResponse,
    SessionRecording,
)

# Organization
from .organization import (
    BZCertValidationInfo,
    EnableGlobalRegistrationKeyRequest,
    Group,
    IdentityProvider,
    Organization,
    RegistrationKeySettings,
    SlackIntegration,
)

# Policies
from .policies import (
    ChildPolicy,
    JITPolicy,
    KubernetesPolicy,
    ListPolicyOptions,
    OrganizationControlsPolicy,
    Policy,
    PolicyCluster,
    PolicyClusterGroup,
    PolicyClusterUser,
    PolicyEnvironment,
    PolicyGroup,
    PolicySubject,
    PolicyTarget,
    PolicyTargetUser,
    PolicyVerb,
    ProxyPolicy,
    SessionRecordingPolicy,
    TargetConnectPolicy,
)

# Subjects
from .subjects import (
    ApiKey,
    CreateApiKeyRequest,
    CreateApiKeyResponse,
    CreateServiceAccountRequest,
    CreateServiceAccountResponse,
    ModifyApiKeyRequest,
    ModifyRoleRequest,
    ModifyServiceAccountRequest,
    ServiceAccount,
    Subject,
    User,
)

# Targets
from .targets import (
    AccessDetails,
    AllTargetsResponse,
    BzeroTarget,
    ClusterTarget,
    CreateDatabaseTargetRequest,
    CreateDatabaseTargetResponse,
    CreateDynamicAccessConfigurationRequest,
    CreateDynamicAccessConfigurationResponse,
    DatabaseAuthenticationConfig,
    DatabaseTarget,
    DynamicAccessConfiguration,
    FileTransferTarget,
    KubeTarget,
    ListAllTargetsOptions,
    ListDatabaseTargetsOptions,
    ListSplitCertDatabaseTypesResponse,
    ModifyDatabaseTargetRequest,
    ModifyDynamicAccessConfigurationRequest,
    RDPTarget,
    ShellTarget,
    SQLServerTarget,
    SSHTarget,
    Target,
    WebTarget,
    WebTargetSummary,
)

# Types
from .types import (
    AgentStatus,
    AgentType,
    CloudServiceProvider,
    ConnectionEventType,
    ConnectionState,
    ConnectionType,
    DatabaseAuthenticationType,
    DatabaseEngine,
    DynamicAccessConfigurationStatus,
    DynamicAccessTargetState,
    OpenStrEnum,
    PolicyType,
    RoleType,
    SubjectType,
    TargetNameOption,
    TargetStatus,
    TargetType,
    Timestamp,
    VerbType,
)

__all__ = [
    # Base
    "BastionZeroModel",
    "Port",
    # Agents
    "AgentDetails",
    "AgentSummary",
    "ControlChannelSummary",
    "ListAgentsOptions",
    # Connections
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
    # Environments
    "CreateEnvironmentRequest",
    "CreateEnvironmentResponse",
    "Environment",
    "ModifyEnvironmentRequest",
    "TargetSummary",
    # Events
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
    # Misc
    "AuthorizedGitHubAction",
    "BzeroBashAutodiscoveryOptions",
    "BzeroBashAutodiscoveryScript",
    "ClearMFASecretRequest",
    "CreateAuthorizedGitHubActionRequest",
    "DisableMFARequest",
    "EnableMFARequest",
    "ListOktaPublicKeysResponse",
    "MFAStatus",
    "OktaPublicKey",
    "ResetMFASecretRequest",
    "ResetMFASecretResponse",
    "SessionRecording",
    # Organization
    "BZCertValidationInfo",
    "EnableGlobalRegistrationKeyRequest",
    "Group",
    "IdentityProvider",
    "Organization",
    "RegistrationKeySettings",
    "SlackIntegration",
    # Policies
    "ChildPolicy",
    "JITPolicy",
    "KubernetesPolicy",
    "ListPolicyOptions",
    "OrganizationControlsPolicy",
    "Policy",
    "PolicyCluster",
    "PolicyClusterGroup",
    "PolicyClusterUser",
    "PolicyEnvironment",
    "PolicyGroup",
    "PolicySubject",
    "PolicyTarget",
    "PolicyTargetUser",
    "PolicyVerb",
    "ProxyPolicy",
    "SessionRecordingPolicy",
    "TargetConnectPolicy",
    # Subjects
    "ApiKey",
    "CreateApiKeyRequest",
    "CreateApiKeyResponse",
    "CreateServiceAccountRequest",
    "CreateServiceAccountResponse",
    "ModifyApiKeyRequest",
    "ModifyRoleRequest",
    "ModifyServiceAccountRequest",
    "ServiceAccount",
    "Subject",
    "User",
    # Targets
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
    # Types
    "AgentStatus",
    "AgentType",
    "CloudServiceProvider",
    "ConnectionEventType",
    "ConnectionState",
    "ConnectionType",
    "DatabaseAuthenticationType",
    "DatabaseEngine",
    "DynamicAccessConfigurationStatus",
    "DynamicAccessTargetState",
    "OpenStrEnum",
    "PolicyType",
    "RoleType",
    "SubjectType",
    "TargetNameOption",
    "TargetStatus",
    "TargetType",
    "Timestamp",
    "VerbType",
]

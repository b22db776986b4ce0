"""
Shared type definitions: enumerations and timestamp handling.

Enumerations are "open": values the SDK does not know yet are accepted and
surface as pseudo-members named `UNKNOWN_<VALUE>`, so a newer API never breaks
decoding of an older client.
"""

from __future__ import annotations

import re
from datetime import datetime
from enum import Enum
from typing import Annotated, Any

from pydantic import PlainSerializer

from ..query import format_timestamp

DEFAULT_BASE_URL = "https://cloud.bastionzero.com/"

_UNKNOWN_NAME_RE = re.compile(r"[^0-9A-Za-z]+")


class OpenStrEnum(str, Enum):
    """String enum that tolerates values it does not declare."""

    @classmethod
    def _missing_(cls, value: object) -> Any:
        if not isinstance(value, str):
            return None
        member = str.__new__(cls, value)
        member._name_ = "UNKNOWN_" + _UNKNOWN_NAME_RE.sub("_", value).strip("_").upper()
        member._value_ = value
        return member

    def __str__(self) -> str:
        return str(self.value)


# Times the API expects in UTC (e.g. policy expiry) are always sent as `...Z`.
Timestamp = Annotated[
    datetime,
    PlainSerializer(format_timestamp, return_type=str, when_used="json"),
]


# =============================================================================
# Enumerations
# =============================================================================


class TargetType(OpenStrEnum):
    BZERO = "Bzero"
    CLUSTER = "Cluster"
    DYNAMIC_ACCESS_CONFIG = "DynamicAccessConfig"
    WEB = "Web"
    DB = "Db"


class TargetStatus(OpenStrEnum):
    NOT_ACTIVATED = "NotActivated"
    OFFLINE = "Offline"
    ONLINE = "Online"
    TERMINATED = "Terminated"
    ERROR = "Error"
    RESTARTING = "Restarting"


class SubjectType(OpenStrEnum):
    USER = "User"
    API_KEY = "ApiKey"
    SERVICE_ACCOUNT = "ServiceAccount"


class RoleType(OpenStrEnum):
    USER = "User"
    ADMIN = "Admin"


class PolicyType(OpenStrEnum):
    TARGET_CONNECT = "TargetConnect"
    ORGANIZATION_CONTROLS = "OrganizationControls"
    SESSION_RECORDING = "SessionRecording"
    KUBERNETES = "Kubernetes"
    PROXY = "Proxy"
    JUST_IN_TIME = "JustInTime"


class VerbType(OpenStrEnum):
    """Action allowed by a target connect policy."""

    SHELL = "Shell"
    FILE_TRANSFER = "FileTransfer"
    TUNNEL = "Tunnel"
    RDP = "RDP"
    SQL_SERVER = "SQLServer"


class ConnectionState(OpenStrEnum):
    OPEN = "Open"
    CLOSED = "Closed"
    ERROR = "Error"
    PENDING = "Pending"


class ConnectionType(OpenStrEnum):
    SHELL = "Shell"
    DYNAMIC = "Dynamic"
    KUBE = "Kube"
    WEB = "Web"
    DB = "Db"
    SSH = "Ssh"


class DynamicAccessTargetState(OpenStrEnum):
    """Provisioning state of a dynamic access target (DAT)."""

    STARTING = "Starting"
    STARTED = "Started"
    START_ERROR = "StartError"
    STOPPING = "Stopping"
    STOPPED = "Stopped"
    STOP_ERROR = "StopError"


class DynamicAccessConfigurationStatus(OpenStrEnum):
    OFFLINE = "Offline"
    ONLINE = "Online"


class ConnectionEventType(OpenStrEnum):
    CREATED = "Created"
    CLOSED = "Closed"
    CLIENT_CONNECT = "ClientConnect"
    CLIENT_DISCONNECT = "ClientDisconnect"
    SHELL_CONNECT = "ShellConnect"
    SHELL_DISCONNECT = "ShellDisconnect"


class AgentType(OpenStrEnum):
    CLUSTER = "Cluster"
    LINUX = "Linux"
    WINDOWS = "Windows"


class AgentStatus(OpenStrEnum):
    NOT_ACTIVATED = "NotActivated"
    OFFLINE = "Offline"
    ONLINE = "Online"
    TERMINATED = "Terminated"
    ERROR = "Error"
    RESTARTING = "Restarting"


class TargetNameOption(OpenStrEnum):
    """Naming scheme for targets registered by an autodiscovery script."""

    TIMESTAMP = "Timestamp"
    DIGITAL_OCEAN_METADATA = "DigitalOceanMetadata"
    AWS_EC2_METADATA = "AwsEc2Metadata"
    BASH_HOST_NAME = "BashHostName"


class DatabaseAuthenticationType(OpenStrEnum):
    DEFAULT = "Default"
    SPLIT_CERT = "SplitCert"
    SERVICE_ACCOUNT_INJECTION = "ServiceAccountInjection"


class CloudServiceProvider(OpenStrEnum):
    AWS = "AWS"
    GCP = "GCP"


class DatabaseEngine(OpenStrEnum):
    COCKROACH_DB = "CockroachDB"
    MICROSOFT_SQL_SERVER = "MicrosoftSQLServer"
    MONGO_DB = "MongoDB"
    MYSQL = "MySQL"
    POSTGRES = "Postgres"


__all__ = [
    "DEFAULT_BASE_URL",
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
    "format_timestamp",
]

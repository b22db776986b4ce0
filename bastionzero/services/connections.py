"""
Connection service.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..models.base import validate_list
from ..models.connections import (
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
)

if TYPE_CHECKING:
    from ..clients.http import AsyncHTTPClient, HTTPClient

BASE_PATH = "api/v2/connections"
SHELL_PATH = f"{BASE_PATH}/shell"
SSH_PATH = f"{BASE_PATH}/ssh"
KUBE_PATH = f"{BASE_PATH}/kube"
DB_PATH = f"{BASE_PATH}/db"
RDP_PATH = f"{BASE_PATH}/rdp"
SQL_SERVER_PATH = f"{BASE_PATH}/sqlserver"
WEB_PATH = f"{BASE_PATH}/web"
DYNAMIC_ACCESS_PATH = f"{BASE_PATH}/dynamic-access"
UNIVERSAL_PATH = f"{BASE_PATH}/universal"


class ConnectionService:
    """
    Service for creating, inspecting and closing connections.

    Most callers should prefer `create_universal`, which resolves the target by
    ID or by name and environment.
    """

    def __init__(self, client: HTTPClient):
        self._client = client

    # =========================================================================
    # Shell / SSH
    # =========================================================================

    def create_shell(self, request: CreateShellConnectionRequest) -> CreateConnectionResponse:
        data = self._client.post(SHELL_PATH, json=request)
        return CreateConnectionResponse.model_validate(data or {})

    def get_shell(self, connection_id: str) -> ShellConnection:
        data = self._client.get(f"{SHELL_PATH}/{connection_id}")
        return ShellConnection.model_validate(data or {})

    def create_ssh(self, request: CreateSSHConnectionRequest) -> CreateConnectionResponse:
        data = self._client.post(SSH_PATH, json=request)
        return CreateConnectionResponse.model_validate(data or {})

    # =========================================================================
    # Kube / Db / Web
    # =========================================================================

    def create_kube(self, request: CreateKubeConnectionRequest) -> CreateConnectionResponse:
        data = self._client.post(KUBE_PATH, json=request)
        return CreateConnectionResponse.model_validate(data or {})

    def list_kube(self, options: ListConnectionOptions | None = None) -> list[KubeConnection]:
        return validate_list(KubeConnection, self._client.get(KUBE_PATH, params=options))

    def create_db(self, request: CreateDbConnectionRequest) -> CreateConnectionResponse:
        data = self._client.post(DB_PATH, json=request)
        return CreateConnectionResponse.model_validate(data or {})

    def list_db(self, options: ListConnectionOptions | None = None) -> list[DbConnection]:
        return validate_list(DbConnection, self._client.get(DB_PATH, params=options))

    def create_web(self, request: CreateWebConnectionRequest) -> CreateConnectionResponse:
        data = self._client.post(WEB_PATH, json=request)
        return CreateConnectionResponse.model_validate(data or {})

    # =========================================================================
    # RDP / SQL Server
    # =========================================================================

    def list_rdp(self, options: ListConnectionOptions | None = None) -> list[RDPConnection]:
        return validate_list(RDPConnection, self._client.get(RDP_PATH, params=options))

    def list_sql_server(
        self, options: ListConnectionOptions | None = None
    ) -> list[SQLServerConnection]:
        data = self._client.get(SQL_SERVER_PATH, params=options)
        return validate_list(SQLServerConnection, data)

    # =========================================================================
    # Dynamic access / universal
    # =========================================================================

    def get_dynamic_access(self, connection_id: str) -> DynamicAccessConnection:
        data = self._client.get(f"{DYNAMIC_ACCESS_PATH}/{connection_id}")
        return DynamicAccessConnection.model_validate(data or {})

    def create_universal(
        self, request: CreateUniversalConnectionRequest
    ) -> CreateUniversalConnectionResponse:
        data = self._client.post(UNIVERSAL_PATH, json=request)
        return CreateUniversalConnectionResponse.model_validate(data or {})

    def create_universal_ssh(
        self, request: CreateUniversalSSHConnectionRequest
    ) -> CreateUniversalConnectionResponse:
        data = self._client.post(f"{UNIVERSAL_PATH}/ssh", json=request)
        return CreateUniversalConnectionResponse.model_validate(data or {})

    def close(self, connection_id: str) -> None:
        """Close a connection of any kind."""
        self._client.patch(f"{BASE_PATH}/{connection_id}/close", decode=False)


# =============================================================================
# Async Connection Service
# =============================================================================


class AsyncConnectionService:
    """Async version of ConnectionService."""

    def __init__(self, client: AsyncHTTPClient):
        self._client = client

    async def create_shell(
        self, request: CreateShellConnectionRequest
    ) -> CreateConnectionResponse:
        data = await self._client.post(SHELL_PATH, json=request)
        return CreateConnectionResponse.model_validate(data or {})

    async def get_shell(self, connection_id: str) -> ShellConnection:
        data = await self._client.get(f"{SHELL_PATH}/{connection_id}")
        return ShellConnection.model_validate(data or {})

    async def create_ssh(self, request: CreateSSHConnectionRequest) -> CreateConnectionResponse:
        data = await self._client.post(SSH_PATH, json=request)
        return CreateConnectionResponse.model_validate(data or {})

    async def create_kube(self, request: CreateKubeConnectionRequest) -> CreateConnectionResponse:
        data = await self._client.post(KUBE_PATH, json=request)
        return CreateConnectionResponse.model_validate(data or {})

    async def list_kube(
        self, options: ListConnectionOptions | None = None
    ) -> list[KubeConnection]:
        return validate_list(KubeConnection, await self._client.get(KUBE_PATH, params=options))

    async def create_db(self, request: CreateDbConnectionRequest) -> CreateConnectionResponse:
        data = await self._client.post(DB_PATH, json=request)
        return CreateConnectionResponse.model_validate(data or {})

    async def list_db(self, options: ListConnectionOptions | None = None) -> list[DbConnection]:
        return validate_list(DbConnection, await self._client.get(DB_PATH, params=options))

    async def create_web(self, request: CreateWebConnectionRequest) -> CreateConnectionResponse:
        data = await self._client.post(WEB_PATH, json=request)
        return CreateConnectionResponse.model_validate(data or {})

    async def list_rdp(self, options: ListConnectionOptions | None = None) -> list[RDPConnection]:
        return validate_list(RDPConnection, await self._client.get(RDP_PATH, params=options))

    async def list_sql_server(
        self, options: ListConnectionOptions | None = None
    ) -> list[SQLServerConnection]:
        data = await self._client.get(SQL_SERVER_PATH, params=options)
        return validate_list(SQLServerConnection, data)

    async def get_dynamic_access(self, connection_id: str) -> DynamicAccessConnection:
        data = await self._client.get(f"{DYNAMIC_ACCESS_PATH}/{connection_id}")
        return DynamicAccessConnection.model_validate(data or {})

    async def create_universal(
        self, request: CreateUniversalConnectionRequest
    ) -> CreateUniversalConnectionResponse:
        data = await self._client.post(UNIVERSAL_PATH, json=request)
        return CreateUniversalConnectionResponse.model_validate(data or {})

    async def create_universal_ssh(
        self, request: CreateUniversalSSHConnectionRequest
    ) -> CreateUniversalConnectionResponse:
        data = await self._client.post(f"{UNIVERSAL_PATH}/ssh", json=request)
        return CreateUniversalConnectionResponse.model_validate(data or {})

    async def close(self, connection_id: str) -> None:
        await self._client.patch(f"{BASE_PATH}/{connection_id}/close", decode=False)

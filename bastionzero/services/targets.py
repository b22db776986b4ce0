"""
Target service.

Covers the all-targets view plus the per-type collections under
`api/v2/targets`: bzero, kube (cluster), web, database and dynamic access
configurations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..models.base import validate_list
from ..models.targets import (
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
    ListAllTargetsOptions,
    ListDatabaseTargetsOptions,
    ListSplitCertDatabaseTypesResponse,
    ModifyDatabaseTargetRequest,
    ModifyDynamicAccessConfigurationRequest,
    WebTargetSummary,
)

if TYPE_CHECKING:
    from ..clients.http import AsyncHTTPClient, HTTPClient

BASE_PATH = "api/v2/targets"
BZERO_PATH = f"{BASE_PATH}/bzero"
KUBE_PATH = f"{BASE_PATH}/kube"
WEB_PATH = f"{BASE_PATH}/web"
DATABASE_PATH = f"{BASE_PATH}/database"
DYNAMIC_ACCESS_PATH = f"{BASE_PATH}/dynamic-access"


class TargetService:
    """
    Service for listing and managing targets.

    Example:
        ```python
        targets = client.targets.list_all()
        for target in targets.shell:
            print(target.name, target.status)
        ```
    """

    def __init__(self, client: HTTPClient):
        self._client = client

    # =========================================================================
    # All targets
    # =========================================================================

    def list_all(self, options: ListAllTargetsOptions | None = None) -> AllTargetsResponse:
        """
        List every target the caller can access, grouped by access kind.

        Admins can pass `ListAllTargetsOptions(all_targets_in_org=True)` or a
        `user_email` to see other users' targets.
        """
        data = self._client.get(BASE_PATH, params=options)
        return AllTargetsResponse.model_validate(data or {})

    # =========================================================================
    # Bzero / Kube / Web
    # =========================================================================

    def list_bzero(self) -> list[BzeroTarget]:
        return validate_list(BzeroTarget, self._client.get(BZERO_PATH))

    def get_bzero(self, target_id: str) -> BzeroTarget:
        data = self._client.get(f"{BZERO_PATH}/{target_id}")
        return BzeroTarget.model_validate(data or {})

    def list_kube(self) -> list[ClusterTarget]:
        return validate_list(ClusterTarget, self._client.get(KUBE_PATH))

    def get_kube(self, target_id: str) -> ClusterTarget:
        data = self._client.get(f"{KUBE_PATH}/{target_id}")
        return ClusterTarget.model_validate(data or {})

    def list_web(self) -> list[WebTargetSummary]:
        return validate_list(WebTargetSummary, self._client.get(WEB_PATH))

    def get_web(self, target_id: str) -> WebTargetSummary:
        data = self._client.get(f"{WEB_PATH}/{target_id}")
        return WebTargetSummary.model_validate(data or {})

    # =========================================================================
    # Database
    # =========================================================================

    def list_databases(
        self, options: ListDatabaseTargetsOptions | None = None
    ) -> list[DatabaseTarget]:
        """List database targets, optionally filtered by name, ID or environment."""
        return validate_list(DatabaseTarget, self._client.get(DATABASE_PATH, params=options))

    def create_database(self, request: CreateDatabaseTargetRequest) -> CreateDatabaseTargetResponse:
        data = self._client.post(DATABASE_PATH, json=request)
        return CreateDatabaseTargetResponse.model_validate(data or {})

    def get_database(self, target_id: str) -> DatabaseTarget:
        data = self._client.get(f"{DATABASE_PATH}/{target_id}")
        return DatabaseTarget.model_validate(data or {})

    def delete_database(self, target_id: str) -> None:
        self._client.delete(f"{DATABASE_PATH}/{target_id}", decode=False)

    def modify_database(
        self, target_id: str, request: ModifyDatabaseTargetRequest
    ) -> DatabaseTarget:
        data = self._client.patch(f"{DATABASE_PATH}/{target_id}", json=request)
        return DatabaseTarget.model_validate(data or {})

    def list_split_cert_database_types(self) -> ListSplitCertDatabaseTypesResponse:
        """Database engines that support split-cert authentication."""
        data = self._client.get(f"{DATABASE_PATH}/supported-databases")
        return ListSplitCertDatabaseTypesResponse.model_validate(data or {})

    def list_database_authentication_configs(self) -> list[DatabaseAuthenticationConfig]:
        data = self._client.get(f"{DATABASE_PATH}/supported-database-configs")
        return validate_list(DatabaseAuthenticationConfig, data)

    # =========================================================================
    # Dynamic access configurations
    # =========================================================================

    def list_dynamic_access_configs(self) -> list[DynamicAccessConfiguration]:
        return validate_list(DynamicAccessConfiguration, self._client.get(DYNAMIC_ACCESS_PATH))

    def create_dynamic_access_config(
        self, request: CreateDynamicAccessConfigurationRequest
    ) -> CreateDynamicAccessConfigurationResponse:
        data = self._client.post(DYNAMIC_ACCESS_PATH, json=request)
        return CreateDynamicAccessConfigurationResponse.model_validate(data or {})

    def get_dynamic_access_config(self, config_id: str) -> DynamicAccessConfiguration:
        data = self._client.get(f"{DYNAMIC_ACCESS_PATH}/{config_id}")
        return DynamicAccessConfiguration.model_validate(data or {})

    def delete_dynamic_access_config(self, config_id: str) -> None:
        self._client.delete(f"{DYNAMIC_ACCESS_PATH}/{config_id}", decode=False)

    def modify_dynamic_access_config(
        self, config_id: str, request: ModifyDynamicAccessConfigurationRequest
    ) -> None:
        self._client.patch(f"{DYNAMIC_ACCESS_PATH}/{config_id}", json=request, decode=False)


# =============================================================================
# Async Target Service
# =============================================================================


class AsyncTargetService:
    """Async version of TargetService."""

    def __init__(self, client: AsyncHTTPClient):
        self._client = client

    async def list_all(self, options: ListAllTargetsOptions | None = None) -> AllTargetsResponse:
        data = await self._client.get(BASE_PATH, params=options)
        return AllTargetsResponse.model_validate(data or {})

    async def list_bzero(self) -> list[BzeroTarget]:
        return validate_list(BzeroTarget, await self._client.get(BZERO_PATH))

    async def get_bzero(self, target_id: str) -> BzeroTarget:
        data = await self._client.get(f"{BZERO_PATH}/{target_id}")
        return BzeroTarget.model_validate(data or {})

    async def list_kube(self) -> list[ClusterTarget]:
        return validate_list(ClusterTarget, await self._client.get(KUBE_PATH))

    async def get_kube(self, target_id: str) -> ClusterTarget:
        data = await self._client.get(f"{KUBE_PATH}/{target_id}")
        return ClusterTarget.model_validate(data or {})

    async def list_web(self) -> list[WebTargetSummary]:
        return validate_list(WebTargetSummary, await self._client.get(WEB_PATH))

    async def get_web(self, target_id: str) -> WebTargetSummary:
        data = await self._client.get(f"{WEB_PATH}/{target_id}")
        return WebTargetSummary.model_validate(data or {})

    async def list_databases(
        self, options: ListDatabaseTargetsOptions | None = None
    ) -> list[DatabaseTarget]:
        data = await self._client.get(DATABASE_PATH, params=options)
        return validate_list(DatabaseTarget, data)

    async def create_database(
        self, request: CreateDatabaseTargetRequest
    ) -> CreateDatabaseTargetResponse:
        data = await self._client.post(DATABASE_PATH, json=request)
        return CreateDatabaseTargetResponse.model_validate(data or {})

    async def get_database(self, target_id: str) -> DatabaseTarget:
        data = await self._client.get(f"{DATABASE_PATH}/{target_id}")
        return DatabaseTarget.model_validate(data or {})

    async def delete_database(self, target_id: str) -> None:
        await self._client.delete(f"{DATABASE_PATH}/{target_id}", decode=False)

    async def modify_database(
        self, target_id: str, request: ModifyDatabaseTargetRequest
    ) -> DatabaseTarget:
        data = await self._client.patch(f"{DATABASE_PATH}/{target_id}", json=request)
        return DatabaseTarget.model_validate(data or {})

    async def list_split_cert_database_types(self) -> ListSplitCertDatabaseTypesResponse:
        data = await self._client.get(f"{DATABASE_PATH}/supported-databases")
        return ListSplitCertDatabaseTypesResponse.model_validate(data or {})

    async def list_database_authentication_configs(self) -> list[DatabaseAuthenticationConfig]:
        data = await self._client.get(f"{DATABASE_PATH}/supported-database-configs")
        return validate_list(DatabaseAuthenticationConfig, data)

    async def list_dynamic_access_configs(self) -> list[DynamicAccessConfiguration]:
        data = await self._client.get(DYNAMIC_ACCESS_PATH)
        return validate_list(DynamicAccessConfiguration, data)

    async def create_dynamic_access_config(
        self, request: CreateDynamicAccessConfigurationRequest
    ) -> CreateDynamicAccessConfigurationResponse:
        data = await self._client.post(DYNAMIC_ACCESS_PATH, json=request)
        return CreateDynamicAccessConfigurationResponse.model_validate(data or {})

    async def get_dynamic_access_config(self, config_id: str) -> DynamicAccessConfiguration:
        data = await self._client.get(f"{DYNAMIC_ACCESS_PATH}/{config_id}")
        return DynamicAccessConfiguration.model_validate(data or {})

    async def delete_dynamic_access_config(self, config_id: str) -> None:
        await self._client.delete(f"{DYNAMIC_ACCESS_PATH}/{config_id}", decode=False)

    async def modify_dynamic_access_config(
        self, config_id: str, request: ModifyDynamicAccessConfigurationRequest
    ) -> None:
        await self._client.patch(f"{DYNAMIC_ACCESS_PATH}/{config_id}", json=request, decode=False)

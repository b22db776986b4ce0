"""
Service account service.
"""

from __future__ import annotations

import builtins
from typing import TYPE_CHECKING

from ..models.base import validate_list
from ..models.subjects import (
    CreateServiceAccountRequest,
    CreateServiceAccountResponse,
    ModifyServiceAccountRequest,
    ServiceAccount,
)

if TYPE_CHECKING:
    from ..clients.http import HTTPClient

BASE_PATH = "api/v2/service-accounts"


class ServiceAccountService:
    """
    Service for service accounts: non-human subjects that authenticate with a
    JWKS URL.
    """

    def __init__(self, client: HTTPClient):
        self._client = client

    def list(self) -> builtins.list[ServiceAccount]:
        return validate_list(ServiceAccount, self._client.get(BASE_PATH))

    def create(self, request: CreateServiceAccountRequest) -> CreateServiceAccountResponse:
        """
        Create a service account.

        Returns:
            The new account plus its MFA secret. The secret is only returned
            once.
        """
        data = self._client.post(BASE_PATH, json=request)
        return CreateServiceAccountResponse.model_validate(data or {})

    def get(self, service_account_id: str) -> ServiceAccount:
        data = self._client.get(f"{BASE_PATH}/{service_account_id}")
        return ServiceAccount.model_validate(data or {})

    def modify(
        self, service_account_id: str, request: ModifyServiceAccountRequest
    ) -> ServiceAccount:
        data = self._client.patch(f"{BASE_PATH}/{service_account_id}", json=request)
        return ServiceAccount.model_validate(data or {})

    def me(self) -> ServiceAccount:
        data = self._client.get(f"{BASE_PATH}/me")
        return ServiceAccount.model_validate(data or {})

    def invalidate_jwks_url_cache(self, service_account_id: str) -> None:
        self._client.patch(f"{BASE_PATH}/invalidate-cache/{service_account_id}", decode=False)

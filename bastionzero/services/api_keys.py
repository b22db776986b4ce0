"""
API key service.
"""

from __future__ import annotations

import builtins
from typing import TYPE_CHECKING

from ..models.base import validate_list
from ..models.subjects import (
    ApiKey,
    CreateApiKeyRequest,
    CreateApiKeyResponse,
    ModifyApiKeyRequest,
)

if TYPE_CHECKING:
    from ..clients.http import HTTPClient

BASE_PATH = "api/v2/api-keys"


class ApiKeyService:
    """Service for organization-wide API keys and registration keys."""

    def __init__(self, client: HTTPClient):
        self._client = client

    def list(self) -> builtins.list[ApiKey]:
        return validate_list(ApiKey, self._client.get(BASE_PATH))

    def create(self, request: CreateApiKeyRequest) -> CreateApiKeyResponse:
        """Create a key. The secret is only present in this response."""
        data = self._client.post(BASE_PATH, json=request)
        return CreateApiKeyResponse.model_validate(data or {})

    def get(self, api_key_id: str) -> ApiKey:
        data = self._client.get(f"{BASE_PATH}/{api_key_id}")
        return ApiKey.model_validate(data or {})

    def delete(self, api_key_id: str) -> None:
        self._client.delete(f"{BASE_PATH}/{api_key_id}", decode=False)

    def modify(self, api_key_id: str, request: ModifyApiKeyRequest) -> ApiKey:
        data = self._client.patch(f"{BASE_PATH}/{api_key_id}", json=request)
        return ApiKey.model_validate(data or {})

"""
Environment service.
"""

from __future__ import annotations

import builtins
from typing import TYPE_CHECKING

from ..models.base import validate_list
from ..models.environments import (
    CreateEnvironmentRequest,
    CreateEnvironmentResponse,
    Environment,
    ModifyEnvironmentRequest,
)

if TYPE_CHECKING:
    from ..clients.http import AsyncHTTPClient, HTTPClient

BASE_PATH = "api/v2/environments"


class EnvironmentService:
    """Service for managing environments."""

    def __init__(self, client: HTTPClient):
        self._client = client

    def list(self) -> builtins.list[Environment]:
        return validate_list(Environment, self._client.get(BASE_PATH))

    def create(self, request: CreateEnvironmentRequest) -> CreateEnvironmentResponse:
        """
        Create an environment.

        Args:
            request: Name, optional description and the offline cleanup timeout
                (hours; always sent, 0 disables cleanup)

        Returns:
            The new environment's ID.
        """
        data = self._client.post(BASE_PATH, json=request)
        return CreateEnvironmentResponse.model_validate(data or {})

    def get(self, environment_id: str) -> Environment:
        data = self._client.get(f"{BASE_PATH}/{environment_id}")
        return Environment.model_validate(data or {})

    def delete(self, environment_id: str) -> None:
        self._client.delete(f"{BASE_PATH}/{environment_id}", decode=False)

    def modify(self, environment_id: str, request: ModifyEnvironmentRequest) -> None:
        self._client.patch(f"{BASE_PATH}/{environment_id}", json=request, decode=False)


class AsyncEnvironmentService:
    """Async version of EnvironmentService."""

    def __init__(self, client: AsyncHTTPClient):
        self._client = client

    async def list(self) -> builtins.list[Environment]:
        return validate_list(Environment, await self._client.get(BASE_PATH))

    async def create(self, request: CreateEnvironmentRequest) -> CreateEnvironmentResponse:
        data = await self._client.post(BASE_PATH, json=request)
        return CreateEnvironmentResponse.model_validate(data or {})

    async def get(self, environment_id: str) -> Environment:
        data = await self._client.get(f"{BASE_PATH}/{environment_id}")
        return Environment.model_validate(data or {})

    async def delete(self, environment_id: str) -> None:
        await self._client.delete(f"{BASE_PATH}/{environment_id}", decode=False)

    async def modify(self, environment_id: str, request: ModifyEnvironmentRequest) -> None:
        await self._client.patch(f"{BASE_PATH}/{environment_id}", json=request, decode=False)

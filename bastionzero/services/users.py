"""
User service.
"""

from __future__ import annotations

import builtins
from typing import TYPE_CHECKING

from ..models.base import validate_list
from ..models.subjects import ModifyRoleRequest, User

if TYPE_CHECKING:
    from ..clients.http import HTTPClient

BASE_PATH = "api/v2/users"


class UserService:
    """Service for users of the caller's organization."""

    def __init__(self, client: HTTPClient):
        self._client = client

    def me(self) -> User:
        """The user the client is authenticated as."""
        data = self._client.get(f"{BASE_PATH}/me")
        return User.model_validate(data or {})

    def get(self, user_id_or_email: str) -> User:
        data = self._client.get(f"{BASE_PATH}/{user_id_or_email}")
        return User.model_validate(data or {})

    def delete(self, user_id: str) -> None:
        self._client.delete(f"{BASE_PATH}/{user_id}", decode=False)

    def modify_role(self, user_id: str, request: ModifyRoleRequest) -> None:
        self._client.patch(f"{BASE_PATH}/{user_id}", json=request, decode=False)

    def list(self) -> builtins.list[User]:
        return validate_list(User, self._client.get(BASE_PATH))

    def close_connections(self, user_id: str) -> None:
        """Close every open connection owned by the user."""
        self._client.patch(f"{BASE_PATH}/{user_id}/close-connections", decode=False)

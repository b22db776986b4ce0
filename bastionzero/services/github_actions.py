"""
Authorized GitHub action service.
"""

from __future__ import annotations

import builtins
from typing import TYPE_CHECKING

from ..models.base import validate_list
from ..models.misc import AuthorizedGitHubAction, CreateAuthorizedGitHubActionRequest

if TYPE_CHECKING:
    from ..clients.http import HTTPClient

BASE_PATH = "api/v2/github-actions"


class GitHubActionService:
    """GitHub actions allowed to authenticate to the organization."""

    def __init__(self, client: HTTPClient):
        self._client = client

    def list(self) -> builtins.list[AuthorizedGitHubAction]:
        return validate_list(AuthorizedGitHubAction, self._client.get(BASE_PATH))

    def create(self, request: CreateAuthorizedGitHubActionRequest) -> AuthorizedGitHubAction:
        data = self._client.post(BASE_PATH, json=request)
        return AuthorizedGitHubAction.model_validate(data or {})

    def get(self, action_id: str) -> AuthorizedGitHubAction:
        data = self._client.get(f"{BASE_PATH}/{action_id}")
        return AuthorizedGitHubAction.model_validate(data or {})

    def delete(self, action_id: str) -> None:
        self._client.delete(f"{BASE_PATH}/{action_id}", decode=False)

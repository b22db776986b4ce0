"""
Subject service.

Subjects are the union of users, API keys and service accounts.
"""

from __future__ import annotations

import builtins
from typing import TYPE_CHECKING

from ..models.base import validate_list
from ..models.subjects import ModifyRoleRequest, Subject

if TYPE_CHECKING:
    from ..clients.http import HTTPClient

BASE_PATH = "api/v2/subjects"


class SubjectService:
    def __init__(self, client: HTTPClient):
        self._client = client

    def me(self) -> Subject:
        data = self._client.get(f"{BASE_PATH}/me")
        return Subject.model_validate(data or {})

    def get(self, subject_id_or_email: str) -> Subject:
        data = self._client.get(f"{BASE_PATH}/{subject_id_or_email}")
        return Subject.model_validate(data or {})

    def modify_role(self, subject_id: str, request: ModifyRoleRequest) -> None:
        self._client.patch(f"{BASE_PATH}/{subject_id}", json=request, decode=False)

    def list(self) -> builtins.list[Subject]:
        return validate_list(Subject, self._client.get(BASE_PATH))

    def close_connections(self, subject_id: str) -> None:
        self._client.patch(f"{BASE_PATH}/{subject_id}/close-connections", decode=False)

"""
Subject models: users, API keys and service accounts.

All three are subjects that policies can grant access to; `Subject` is the
generic view returned by the subjects endpoints.
"""

from __future__ import annotations

from typing import ClassVar

from pydantic import Field

from .base import BastionZeroModel
from .types import RoleType, SubjectType, Timestamp


class Subject(BastionZeroModel):
    id: str = ""
    organization_id: str = ""
    email: str = ""
    is_admin: bool = False
    last_login: Timestamp | None = None
    time_created: Timestamp | None = None
    type: SubjectType | None = None

    @property
    def subject_type(self) -> SubjectType | None:
        return self.type


class User(BastionZeroModel):
    subject_type: ClassVar[SubjectType] = SubjectType.USER

    id: str = ""
    organization_id: str = ""
    full_name: str = ""
    email: str = ""
    is_admin: bool = False
    time_created: Timestamp | None = None
    last_login: Timestamp | None = None


class ApiKey(BastionZeroModel):
    subject_type: ClassVar[SubjectType] = SubjectType.API_KEY

    id: str = ""
    name: str = ""
    time_created: Timestamp | None = None
    is_registration_key: bool = False


class ServiceAccount(BastionZeroModel):
    subject_type: ClassVar[SubjectType] = SubjectType.SERVICE_ACCOUNT

    id: str = ""
    organization_id: str = ""
    email: str = ""
    external_id: str = ""
    jwks_url: str = ""
    jwks_url_pattern: str = ""
    is_admin: bool = False
    time_created: Timestamp | None = None
    last_login: Timestamp | None = None
    created_by: str = ""
    enabled: bool = False


# =============================================================================
# Requests / responses
# =============================================================================


class ModifyRoleRequest(BastionZeroModel):
    role: RoleType = RoleType.USER


class CreateApiKeyRequest(BastionZeroModel):
    name: str | None = None
    # Always sent
    is_registration_key: bool = False


class CreateApiKeyResponse(BastionZeroModel):
    api_key_details: ApiKey = Field(default_factory=ApiKey)
    secret: str = ""


class ModifyApiKeyRequest(BastionZeroModel):
    name: str | None = None


class CreateServiceAccountRequest(BastionZeroModel):
    email: str = ""
    jwks_url: str = ""
    jwks_url_pattern: str = ""
    external_id: str = ""


class CreateServiceAccountResponse(BastionZeroModel):
    service_account_summary: ServiceAccount = Field(default_factory=ServiceAccount)
    mfa_secret: str = ""


class ModifyServiceAccountRequest(BastionZeroModel):
    is_admin: bool | None = None
    enabled: bool | None = None


__all__ = [
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
]

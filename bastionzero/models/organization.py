"""
Organization models.
"""

from __future__ import annotations

from pydantic import Field

from .base import BastionZeroModel
from .types import Timestamp


class Organization(BastionZeroModel):
    id: str = ""
    name: str = ""
    is_single_user_organization: bool = False
    time_created: Timestamp | None = None


class BZCertValidationInfo(BastionZeroModel):
    """Identity provider details used to validate BastionZero certificates."""

    org_idp_provider: str = ""
    org_idp_issuer_id: str = ""


class Group(BastionZeroModel):
    """A group synced from the organization's identity provider."""

    id: str = Field("", alias="idPGroupId")
    name: str = ""


class SlackIntegration(BastionZeroModel):
    team_name: str = ""
    admin_email: str = ""
    creation_date: Timestamp | None = None
    last_update_date: Timestamp | None = None


class RegistrationKeySettings(BastionZeroModel):
    global_registration_key_enforced: bool = False
    default_global_registration_key: str | None = None


class EnableGlobalRegistrationKeyRequest(BastionZeroModel):
    default_registration_key_id: str = ""


class IdentityProvider(BastionZeroModel):
    identity_provider_type: str = ""
    identity_provider_id: str = ""


__all__ = [
    "BZCertValidationInfo",
    "EnableGlobalRegistrationKeyRequest",
    "Group",
    "IdentityProvider",
    "Organization",
    "RegistrationKeySettings",
    "SlackIntegration",
]

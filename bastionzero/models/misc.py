"""
Models for the smaller services: MFA, GitHub actions, Okta public keys,
autodiscovery scripts and session recordings.
"""

from __future__ import annotations

from typing import ClassVar

from pydantic import Field

from ..query import QueryOptions
from .base import BastionZeroModel
from .types import ConnectionState, TargetNameOption, TargetType, Timestamp

# =============================================================================
# MFA
# =============================================================================


class ResetMFASecretRequest(BastionZeroModel):
    force_setup: bool = False


class ResetMFASecretResponse(BastionZeroModel):
    mfa_secret_url: str = ""


class ClearMFASecretRequest(BastionZeroModel):
    user_id: str = ""


class EnableMFARequest(BastionZeroModel):
    user_id: str = ""


class DisableMFARequest(BastionZeroModel):
    user_id: str = ""


class MFAStatus(BastionZeroModel):
    enabled: bool = False
    verified: bool = False
    session_verified: bool | None = None
    grace_period_end_time: Timestamp | None = None


# =============================================================================
# GitHub actions
# =============================================================================


class AuthorizedGitHubAction(BastionZeroModel):
    id: str = ""
    organization_id: str = ""
    time_created: Timestamp | None = None
    created_by: str = ""
    github_action_id: str = Field("", alias="githubActionId")


class CreateAuthorizedGitHubActionRequest(BastionZeroModel):
    github_action_id: str = Field("", alias="githubActionId")


# =============================================================================
# Okta public keys
# =============================================================================


class OktaPublicKey(BastionZeroModel):
    """A JSON Web Key published for Okta token validation."""

    kty: str = ""
    e: str = ""
    kid: str = ""
    n: str = ""


class ListOktaPublicKeysResponse(BastionZeroModel):
    keys: list[OktaPublicKey] = Field(default_factory=list)


# =============================================================================
# Autodiscovery scripts
# =============================================================================


class BzeroBashAutodiscoveryOptions(QueryOptions):
    target_name_option: TargetNameOption = Field(alias="targetNameOption")
    environment_id: str = Field("", alias="environmentId")

    keep_empty: ClassVar[frozenset[str]] = frozenset({"target_name_option", "environment_id"})


class BzeroBashAutodiscoveryScript(BastionZeroModel):
    script: str = Field("", alias="autodiscoveryScript")


# =============================================================================
# Session recordings
# =============================================================================


class SessionRecording(BastionZeroModel):
    connection_id: str = ""
    time_created: Timestamp | None = None
    connection_state: ConnectionState | None = None
    target_id: str = ""
    target_type: TargetType | None = None
    target_name: str = ""
    target_user: str = ""
    input_recorded: bool = False
    subject_id: str = ""
    # Bytes
    size: int = 0


__all__ = [
    "AuthorizedGitHubAction",
    "BzeroBashAutodiscoveryOptions",
    "BzeroBashAutodiscoveryScript",
    "ClearMFASecretRequest",
    "CreateAuthorizedGitHubActionRequest",
    "DisableMFARequest",
    "EnableMFARequest",
    "ListOktaPublicKeysResponse",
    "MFAStatus",
    "OktaPublicKey",
    "ResetMFASecretRequest",
    "ResetMFASecretResponse",
    "SessionRecording",
]

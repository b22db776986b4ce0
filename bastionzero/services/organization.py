"""
Organization service.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..models.base import validate_list
from ..models.organization import (
    BZCertValidationInfo,
    EnableGlobalRegistrationKeyRequest,
    Group,
    IdentityProvider,
    Organization,
    RegistrationKeySettings,
    SlackIntegration,
)

if TYPE_CHECKING:
    from ..clients.http import HTTPClient

BASE_PATH = "api/v2/organization"
GROUPS_PATH = f"{BASE_PATH}/groups"
REGISTRATION_KEY_PATH = f"{BASE_PATH}/registration-key"


class OrganizationService:
    """Service for the caller's organization and its identity provider setup."""

    def __init__(self, client: HTTPClient):
        self._client = client

    def get(self) -> Organization:
        data = self._client.get(BASE_PATH)
        return Organization.model_validate(data or {})

    def get_bzcert_validation_info(self) -> BZCertValidationInfo:
        """Information needed to validate BZCerts issued for the organization."""
        data = self._client.get(f"{BASE_PATH}/bzcert-validation-info")
        return BZCertValidationInfo.model_validate(data or {})

    # =========================================================================
    # Groups
    # =========================================================================

    def list_groups(self) -> list[Group]:
        """Groups synced from the identity provider."""
        return validate_list(Group, self._client.get(GROUPS_PATH))

    def fetch_groups(self) -> list[Group]:
        """Query the identity provider directly for the organization's groups."""
        return validate_list(Group, self._client.post(f"{GROUPS_PATH}/fetch"))

    def fetch_user_groups(self, user_id: str) -> list[Group]:
        data = self._client.post(f"{BASE_PATH}/groups-memberships/fetch/{user_id}")
        return validate_list(Group, data)

    def delete_idp_group_credentials(self) -> None:
        self._client.delete(f"{GROUPS_PATH}/credentials", decode=False)

    def invalidate_keycloak_provider_cache(self) -> None:
        self._client.post(f"{BASE_PATH}/invalidate-keycloak", decode=False)

    # =========================================================================
    # Integrations / registration keys
    # =========================================================================

    def get_slack_integration(self) -> SlackIntegration:
        data = self._client.get(f"{BASE_PATH}/integrations/slack")
        return SlackIntegration.model_validate(data or {})

    def get_registration_key_settings(self) -> RegistrationKeySettings:
        data = self._client.get(f"{REGISTRATION_KEY_PATH}/settings")
        return RegistrationKeySettings.model_validate(data or {})

    def enable_global_registration_key(
        self, request: EnableGlobalRegistrationKeyRequest
    ) -> RegistrationKeySettings:
        """Require every new agent to register with the given default key."""
        data = self._client.post(f"{REGISTRATION_KEY_PATH}/enable-enforce-global-key", json=request)
        return RegistrationKeySettings.model_validate(data or {})

    def disable_global_registration_key(self) -> RegistrationKeySettings:
        data = self._client.post(f"{REGISTRATION_KEY_PATH}/disable-enforce-global-key")
        return RegistrationKeySettings.model_validate(data or {})

    def get_identity_provider(self) -> IdentityProvider:
        data = self._client.get(f"{BASE_PATH}/identity-provider")
        return IdentityProvider.model_validate(data or {})

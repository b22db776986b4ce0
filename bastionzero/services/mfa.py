"""
MFA service.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..models.misc import (
    ClearMFASecretRequest,
    DisableMFARequest,
    EnableMFARequest,
    MFAStatus,
    ResetMFASecretRequest,
    ResetMFASecretResponse,
)

if TYPE_CHECKING:
    from ..clients.http import HTTPClient

BASE_PATH = "api/v2/mfa"


class MFAService:
    """
    Service for multi-factor authentication settings.

    Clearing, enabling and disabling act on another user and require an
    administrator.
    """

    def __init__(self, client: HTTPClient):
        self._client = client

    def reset_secret(self, request: ResetMFASecretRequest) -> ResetMFASecretResponse:
        """Reset the caller's own MFA secret."""
        data = self._client.post(f"{BASE_PATH}/reset", json=request)
        return ResetMFASecretResponse.model_validate(data or {})

    def rotate_service_account_secret(self, service_account_id: str) -> str:
        """
        Rotate a service account's MFA secret.

        Existing sessions of the account stop working. Returns the new shared
        secret, base32 encoded.
        """
        data = self._client.patch(f"{BASE_PATH}/rotate/{service_account_id}")
        return data or ""

    def clear_secret(self, request: ClearMFASecretRequest) -> None:
        self._client.post(f"{BASE_PATH}/clear", json=request, decode=False)

    def enable(self, request: EnableMFARequest) -> None:
        self._client.post(f"{BASE_PATH}/setup", json=request, decode=False)

    def disable(self, request: DisableMFARequest) -> None:
        self._client.post(f"{BASE_PATH}/disable", json=request, decode=False)

    def get_user_status(self, user_id: str) -> MFAStatus:
        data = self._client.get(f"{BASE_PATH}/{user_id}")
        return MFAStatus.model_validate(data or {})

    def get_status(self) -> MFAStatus:
        data = self._client.get(f"{BASE_PATH}/me")
        return MFAStatus.model_validate(data or {})

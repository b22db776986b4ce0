"""
Okta public key service.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..models.misc import ListOktaPublicKeysResponse

if TYPE_CHECKING:
    from ..clients.http import HTTPClient

BASE_PATH = "api/v2/okta-public-keys"


class OktaPublicKeyService:
    def __init__(self, client: HTTPClient):
        self._client = client

    def list(self) -> ListOktaPublicKeysResponse:
        """Keys that verify the JWT client assertions used to fetch Okta groups."""
        data = self._client.get(BASE_PATH)
        return ListOktaPublicKeysResponse.model_validate(data or {})

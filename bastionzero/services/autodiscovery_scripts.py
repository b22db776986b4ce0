"""
Autodiscovery script service.

Scripts that install and register an agent on a new machine or container.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..models.misc import BzeroBashAutodiscoveryOptions, BzeroBashAutodiscoveryScript

if TYPE_CHECKING:
    from ..clients.http import HTTPClient

BASE_PATH = "api/v2/autodiscovery-scripts"


class AutodiscoveryScriptService:
    def __init__(self, client: HTTPClient):
        self._client = client

    def get_bzero_bash_script(
        self, options: BzeroBashAutodiscoveryOptions
    ) -> BzeroBashAutodiscoveryScript:
        """
        Fetch the bash script that registers a bzero target.

        `options.target_name_option` decides how the target names itself and
        `options.environment_id` which environment it joins.
        """
        data = self._client.get(f"{BASE_PATH}/bzero/bash", params=options)
        return BzeroBashAutodiscoveryScript.model_validate(data or {})

    def get_container_script(self) -> str:
        """Fetch the container install script. The body is plain text, not JSON."""
        return self._client.get_text(f"{BASE_PATH}/container")

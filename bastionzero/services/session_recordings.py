"""
Session recording service.
"""

from __future__ import annotations

import builtins
from typing import IO, TYPE_CHECKING

from ..models.base import validate_list
from ..models.misc import SessionRecording

if TYPE_CHECKING:
    from ..clients.http import HTTPClient

BASE_PATH = "api/v2/session-recordings"


class SessionRecordingService:
    """
    Service for recorded shell sessions.

    Recording files are returned as raw text (asciicast), not JSON. Use
    `download` to stream a large recording straight to a file.
    """

    def __init__(self, client: HTTPClient):
        self._client = client

    def list(self) -> builtins.list[SessionRecording]:
        return validate_list(SessionRecording, self._client.get(BASE_PATH))

    def get_file(self, connection_id: str) -> str:
        return self._client.get_text(f"{BASE_PATH}/{connection_id}")

    def download(self, connection_id: str, sink: IO[bytes]) -> None:
        """Write the recording for `connection_id` into a binary stream."""
        self._client.download(f"{BASE_PATH}/{connection_id}", sink)

    def delete(self, connection_id: str) -> None:
        self._client.delete(f"{BASE_PATH}/{connection_id}", decode=False)

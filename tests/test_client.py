from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

import httpx
import pytest

from bastionzero import BastionZero, ConfigurationError
from bastionzero.client import API_SECRET_ENV, BASE_URL_ENV
from bastionzero.clients.http import DEFAULT_USER_AGENT

from conftest import API_SECRET, BASE_URL

if TYPE_CHECKING:
    from conftest import Recorder


def _unset_env(monkeypatch: pytest.MonkeyPatch, *names: str) -> None:
    # set then delete so the variable is removed again on teardown
    for name in names:
        monkeypatch.setenv(name, "placeholder")
        monkeypatch.delenv(name)


def test_from_api_secret_sets_auth_header(client: BastionZero, recorder: Recorder) -> None:
    recorder.json("GET", "/api/v2/users/me", {"id": "u-1"})
    client.users.me()
    assert recorder.last.headers["X-API-KEY"] == API_SECRET
    assert recorder.last.headers["User-Agent"] == DEFAULT_USER_AGENT
    assert recorder.last.headers["Accept"] == "application/json"


@pytest.mark.parametrize("secret", ["not base64!", "abc"])
def test_from_api_secret_rejects_invalid_base64(secret: str) -> None:
    with pytest.raises(ConfigurationError, match="base64"):
        BastionZero.from_api_secret(secret)


def test_user_agent_is_prepended(
    make_client: Callable[..., BastionZero], recorder: Recorder
) -> None:
    recorder.json("GET", "/api/v2/environments", [])
    client = make_client(user_agent="terraform-provider/1.2")
    client.environments.list()
    assert recorder.last.headers["User-Agent"] == f"terraform-provider/1.2 {DEFAULT_USER_AGENT}"


def test_extra_headers_are_sent(
    make_client: Callable[..., BastionZero], recorder: Recorder
) -> None:
    recorder.json("GET", "/api/v2/environments", [])
    client = make_client(headers={"X-Request-Source": "tests"})
    client.environments.list()
    assert recorder.last.headers["X-Request-Source"] == "tests"
    assert recorder.last.headers["X-API-KEY"] == API_SECRET


def test_default_base_url() -> None:
    with BastionZero.from_api_secret(API_SECRET) as client:
        assert client.base_url == "https://cloud.bastionzero.com/"


def test_from_env_reads_secret_and_base_url(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(API_SECRET_ENV, API_SECRET)
    monkeypatch.setenv(BASE_URL_ENV, BASE_URL)

    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"id": "o-1", "name": "acme"})

    with BastionZero.from_env(transport=httpx.MockTransport(handler)) as client:
        assert client.organization.get().name == "acme"

    assert str(seen[0].url) == "https://bz.example/api/v2/organization"
    assert seen[0].headers["X-API-KEY"] == API_SECRET


def test_from_env_requires_secret(monkeypatch: pytest.MonkeyPatch) -> None:
    _unset_env(monkeypatch, API_SECRET_ENV)
    with pytest.raises(ConfigurationError, match=API_SECRET_ENV):
        BastionZero.from_env()


def test_from_env_can_load_dotenv(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    _unset_env(monkeypatch, API_SECRET_ENV, BASE_URL_ENV)
    env_file = tmp_path / ".env"
    env_file.write_text(
        f"{API_SECRET_ENV}={API_SECRET}\n{BASE_URL_ENV}=https://bz.other/\n", encoding="utf-8"
    )

    with BastionZero.from_env(load_dotenv=True, dotenv_path=env_file) as client:
        assert client.base_url == "https://bz.other/"


def test_explicit_base_url_wins_over_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(API_SECRET_ENV, API_SECRET)
    monkeypatch.setenv(BASE_URL_ENV, "https://bz.env/")
    with BastionZero.from_env(base_url=BASE_URL) as client:
        assert client.base_url == BASE_URL


def test_services_are_created_once(client: BastionZero) -> None:
    assert client.targets is client.targets
    assert client.session_recordings is client.session_recordings

from __future__ import annotations

import json

import pytest

pytest.importorskip("rich_click")
pytest.importorskip("rich")
respx = pytest.importorskip("respx")

from click.testing import CliRunner
from httpx import Response

import bastionzero
from bastionzero.cli.main import cli

API = "https://bz.example/api/v2"
ENV = {"BASTIONZERO_API_SECRET": "dGVzdC1zZWNyZXQ=", "BASTIONZERO_BASE_URL": "https://bz.example/"}


def _invoke(*args: str, env: dict[str, str] | None = None, input: str | None = None):
    runner = CliRunner()
    return runner.invoke(cli, list(args), env=ENV if env is None else env, input=input)


def test_cli_no_args_shows_help() -> None:
    result = _invoke()
    assert result.exit_code == 0
    assert "Usage:" in result.output


def test_cli_version_table_output() -> None:
    result = _invoke("version")
    assert result.exit_code == 0
    assert bastionzero.__version__ in result.output


def test_cli_version_json() -> None:
    result = _invoke("version", "--json")
    assert result.exit_code == 0
    payload = json.loads(result.output.strip())
    assert payload["ok"] is True
    assert payload["command"] == "version"
    assert payload["data"]["version"] == bastionzero.__version__
    # No API call, so no base URL is reported
    assert payload["meta"]["baseUrl"] is None


def test_whoami_renders_subject(respx_mock: respx.MockRouter) -> None:
    respx_mock.get(f"{API}/subjects/me").mock(
        return_value=Response(
            200, json={"id": "s-1", "email": "alice@example.com", "type": "User", "isAdmin": True}
        )
    )
    result = _invoke("whoami")
    assert result.exit_code == 0
    assert "alice@example.com" in result.output
    assert "(admin)" in result.output


def test_target_ls_json(respx_mock: respx.MockRouter) -> None:
    route = respx_mock.get(f"{API}/targets").mock(
        return_value=Response(
            200,
            json={
                "shell": [
                    {"id": "t-1", "name": "web-01", "status": "Online", "environmentName": "prod"}
                ],
                "db": [{"id": "t-2", "name": "pg", "status": "Offline"}],
            },
        )
    )
    result = _invoke("--json", "target", "ls", "--kind", "shell", "--all-in-org")
    assert result.exit_code == 0, result.output

    payload = json.loads(result.output.strip())
    assert payload["data"]["targets"] == [
        {
            "id": "t-1",
            "name": "web-01",
            "kind": "shell",
            "status": "Online",
            "environmentName": "prod",
        }
    ]
    assert payload["meta"]["baseUrl"] == "https://bz.example/"
    assert route.calls.last.request.url.params["allTargetsInOrg"] == "true"


def test_target_get_database(respx_mock: respx.MockRouter) -> None:
    respx_mock.get(f"{API}/targets/database/db-1").mock(
        return_value=Response(200, json={"id": "db-1", "name": "pg", "splitCert": True})
    )
    result = _invoke("target", "get", "db-1", "--type", "database", "--json")
    assert result.exit_code == 0, result.output
    target = json.loads(result.output.strip())["data"]["target"]
    assert target["splitCert"] is True
    assert target["name"] == "pg"


def test_policy_ls_filters_and_kinds(respx_mock: respx.MockRouter) -> None:
    route = respx_mock.get(f"{API}/policies/proxy").mock(
        return_value=Response(
            200,
            json=[{"id": "p-1", "name": "db-access", "subjects": [{"id": "s-1", "type": "User"}]}],
        )
    )
    result = _invoke(
        "--json",
        "policy",
        "ls",
        "--kind",
        "proxy",
        "--subject",
        "a@example.com",
        "--subject",
        "b@example.com",
    )
    assert result.exit_code == 0, result.output
    rows = json.loads(result.output.strip())["data"]["policies"]
    assert rows == [
        {
            "id": "p-1",
            "name": "db-access",
            "kind": "proxy",
            "subjects": ["s-1"],
            "groups": [],
            "description": None,
        }
    ]
    assert route.calls.last.request.url.params["subjects"] == "a@example.com,b@example.com"


def test_policy_delete_requires_confirmation(respx_mock: respx.MockRouter) -> None:
    route = respx_mock.delete(f"{API}/policies/just-in-time/p-1").mock(
        return_value=Response(200)
    )
    declined = _invoke("policy", "delete", "just-in-time", "p-1", input="n\n")
    assert declined.exit_code == 1
    assert "Delete just-in-time policy p-1?" in declined.output
    assert not route.called

    result = _invoke("--json", "policy", "delete", "just-in-time", "p-1", "--yes")
    assert result.exit_code == 0, result.output
    assert json.loads(result.output.strip())["data"]["deleted"] == {
        "kind": "just-in-time",
        "id": "p-1",
    }


def test_environment_delete_confirms_then_ignores_plain_text_body(
    respx_mock: respx.MockRouter,
) -> None:
    route = respx_mock.delete(f"{API}/environments/env-1").mock(
        return_value=Response(200, content=b"OK")
    )
    result = _invoke("environment", "delete", "env-1", "--json", input="y\n")
    assert result.exit_code == 0, result.output
    assert route.call_count == 1
    payload = json.loads(result.output[result.output.index("{") :])
    assert payload["data"] == {"deleted": {"id": "env-1"}}


def test_environment_create(respx_mock: respx.MockRouter) -> None:
    route = respx_mock.post(f"{API}/environments").mock(
        return_value=Response(200, json={"id": "env-1"})
    )
    result = _invoke(
        "--json", "environment", "create", "--name", "prod", "--offline-cleanup-timeout-hours", "6"
    )
    assert result.exit_code == 0, result.output
    assert json.loads(result.output.strip())["data"]["environment"] == {
        "id": "env-1",
        "name": "prod",
    }
    assert json.loads(route.calls.last.request.content) == {
        "name": "prod",
        "offlineCleanupTimeoutHours": 6,
    }


def test_environment_ls_table(respx_mock: respx.MockRouter) -> None:
    respx_mock.get(f"{API}/environments").mock(
        return_value=Response(
            200,
            json=[
                {
                    "id": "env-1",
                    "name": "Default",
                    "isDefault": True,
                    "targets": [{"id": "t-1", "targetType": "Bzero"}],
                }
            ],
        )
    )
    result = _invoke("environment", "ls")
    assert result.exit_code == 0, result.output
    assert "Default" in result.output
    assert "isDefault" in result.output


def test_connection_close(respx_mock: respx.MockRouter) -> None:
    route = respx_mock.patch(f"{API}/connections/c-1/close").mock(return_value=Response(200))
    result = _invoke("--json", "connection", "close", "c-1")
    assert result.exit_code == 0, result.output
    assert route.called
    assert json.loads(result.output.strip())["data"] == {"closed": {"id": "c-1"}}


def test_event_connection_filters(respx_mock: respx.MockRouter) -> None:
    route = respx_mock.get(f"{API}/events/connection").mock(
        return_value=Response(
            200, json=[{"id": "e-1", "connectionEventType": "Created", "targetName": "web-01"}]
        )
    )
    result = _invoke(
        "--json",
        "event",
        "connection",
        "--since",
        "2024-03-01",
        "--count",
        "5",
        "--target-id",
        "t-1",
    )
    assert result.exit_code == 0, result.output

    params = route.calls.last.request.url.params
    assert params["startTimestamp"] == "2024-03-01T00:00:00Z"
    assert params["eventCount"] == "5"
    assert params.get_list("targetIds") == ["t-1"]
    assert "endTimestamp" not in params

    events = json.loads(result.output.strip())["data"]["events"]
    assert events[0]["connectionEventType"] == "Created"


def test_trace_writes_request_lines(respx_mock: respx.MockRouter) -> None:
    respx_mock.get(f"{API}/environments").mock(return_value=Response(200, json=[]))
    result = _invoke("--trace", "--json", "environment", "ls")
    assert result.exit_code == 0, result.output
    assert "trace -> GET https://bz.example/api/v2/environments" in result.output
    assert "trace <- 200 https://bz.example/api/v2/environments" in result.output
    assert "dGVzdC1zZWNyZXQ=" not in result.output


def test_api_secret_file(respx_mock: respx.MockRouter, tmp_path) -> None:
    route = respx_mock.get(f"{API}/environments").mock(return_value=Response(200, json=[]))
    secret_file = tmp_path / "secret"
    secret_file.write_text("c2VjcmV0LWZyb20tZmlsZQ==\n", encoding="utf-8")

    result = _invoke(
        "--api-secret-file",
        str(secret_file),
        "--base-url",
        "https://bz.example/",
        "--json",
        "environment",
        "ls",
        env={"BASTIONZERO_API_SECRET": ""},
    )
    assert result.exit_code == 0, result.output
    assert route.calls.last.request.headers["X-API-KEY"] == "c2VjcmV0LWZyb20tZmlsZQ=="

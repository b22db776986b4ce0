from __future__ import annotations

import json

import httpx
import pytest

pytest.importorskip("rich_click")
pytest.importorskip("rich")
respx = pytest.importorskip("respx")

from click.testing import CliRunner
from httpx import Response

from bastionzero.cli.context import error_info_for_exception, exit_code_for_exception
from bastionzero.cli.errors import CLIError
from bastionzero.cli.main import cli
from bastionzero.cli.render import RenderSettings, render_result
from bastionzero.cli.results import CommandMeta, CommandResult, ErrorInfo
from bastionzero.exceptions import ConfigurationError, ErrorResponse

API = "https://bz.example/api/v2"
ENV = {"BASTIONZERO_API_SECRET": "dGVzdC1zZWNyZXQ=", "BASTIONZERO_BASE_URL": "https://bz.example/"}


def test_missing_api_secret_exits_with_usage_error() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["whoami"], env={"BASTIONZERO_API_SECRET": ""})
    assert result.exit_code == 2
    assert "Missing API secret." in result.output
    assert "Hint: Create an API key" in result.output
    assert "Hint: run `bastionzero whoami --help`" not in result.output


def test_invalid_api_secret_is_a_config_error() -> None:
    runner = CliRunner()
    result = runner.invoke(
        cli, ["--json", "environment", "ls"], env={"BASTIONZERO_API_SECRET": "not base64!"}
    )
    assert result.exit_code == 2
    payload = json.loads(result.output.strip())
    assert payload["ok"] is False
    assert payload["error"]["type"] == "config_error"


def test_not_found_exit_code(respx_mock: respx.MockRouter) -> None:
    respx_mock.get(f"{API}/environments/missing").mock(
        return_value=Response(404, json={"errorMsg": "Environment not found"})
    )
    runner = CliRunner()
    result = runner.invoke(cli, ["--json", "environment", "get", "missing"], env=ENV)
    assert result.exit_code == 4
    payload = json.loads(result.output.strip())
    assert payload["error"]["type"] == "not_found"
    assert payload["error"]["statusCode"] == 404
    assert "Environment not found" in payload["error"]["message"]


def test_unauthorized_exit_code(respx_mock: respx.MockRouter) -> None:
    respx_mock.get(f"{API}/subjects/me").mock(
        return_value=Response(401, json={"errorMsg": "Invalid API key"})
    )
    runner = CliRunner()
    result = runner.invoke(cli, ["whoami"], env=ENV)
    assert result.exit_code == 3
    assert "Authentication error:" in result.output


def test_validation_errors_render_field_table(capsys: pytest.CaptureFixture[str]) -> None:
    result = CommandResult(
        ok=False,
        command="environment create",
        data=None,
        warnings=[],
        meta=CommandMeta(duration_ms=0, base_url=None),
        error=ErrorInfo(
            type="validation_error",
            message="POST https://bz.example/api/v2/environments: 400 Bad Request: Name: required",
            status_code=400,
            details={"errors": {"Name": ["required", "too short"]}},
        ),
    )
    render_result(result, settings=RenderSettings(output="table", quiet=False, verbosity=0))
    captured = capsys.readouterr()
    assert "Validation error:" in captured.err
    assert "Name" in captured.err
    assert "required, too short" in captured.err


@pytest.mark.parametrize(
    ("exc", "code", "error_type"),
    [
        (CLIError.usage("bad flag"), 2, "usage_error"),
        (CLIError("cancelled"), 1, "error"),
        (ConfigurationError("bad secret"), 2, "config_error"),
        (
            ErrorResponse(status_code=403, method="GET", url="u", reason="Forbidden"),
            3,
            "forbidden",
        ),
        (
            ErrorResponse(status_code=502, method="GET", url="u", reason="Bad Gateway"),
            5,
            "server_error",
        ),
        (
            ErrorResponse(status_code=409, method="GET", url="u", reason="Conflict"),
            1,
            "api_error",
        ),
        (httpx.ConnectTimeout("slow"), 1, "timeout"),
        (httpx.ConnectError("refused"), 1, "network_error"),
        (RuntimeError("boom"), 1, "internal_error"),
    ],
)
def test_exception_mapping(exc: Exception, code: int, error_type: str) -> None:
    assert exit_code_for_exception(exc) == code
    assert error_info_for_exception(exc).type == error_type

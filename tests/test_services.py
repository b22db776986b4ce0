from __future__ import annotations

import io
from typing import TYPE_CHECKING

import httpx
import pytest

from bastionzero import BastionZero
from bastionzero.exceptions import ErrorResponse
from bastionzero.models.agents import ListAgentsOptions
from bastionzero.models.connections import (
    CreateShellConnectionRequest,
    CreateUniversalConnectionRequest,
    ListConnectionOptions,
)
from bastionzero.models.environments import CreateEnvironmentRequest, ModifyEnvironmentRequest
from bastionzero.models.events import AgentStatusChangeEventOptions, CommandEventOptions
from bastionzero.models.misc import (
    BzeroBashAutodiscoveryOptions,
    ClearMFASecretRequest,
    CreateAuthorizedGitHubActionRequest,
    ResetMFASecretRequest,
)
from bastionzero.models.organization import EnableGlobalRegistrationKeyRequest
from bastionzero.models.policies import (
    JITPolicy,
    ListPolicyOptions,
    TargetConnectPolicy,
)
from bastionzero.models.subjects import (
    CreateApiKeyRequest,
    ModifyRoleRequest,
    ModifyServiceAccountRequest,
)
from bastionzero.models.targets import (
    ListAllTargetsOptions,
    ModifyDynamicAccessConfigurationRequest,
)
from bastionzero.models.types import (
    AgentStatus,
    RoleType,
    TargetNameOption,
    TargetType,
    VerbType,
)

if TYPE_CHECKING:
    from conftest import Recorder

# =============================================================================
# Targets
# =============================================================================


def test_list_all_targets_sends_admin_filters(client: BastionZero, recorder: Recorder) -> None:
    recorder.json(
        "GET",
        "/api/v2/targets",
        {"shell": [{"id": "sh-1", "name": "web-01", "status": "Online"}]},
    )

    resp = client.targets.list_all(ListAllTargetsOptions(user_email="a@example.com"))

    assert [t.name for t in resp.all()] == ["web-01"]
    assert recorder.last.url.params.get("allTargetsInOrg") == "false"
    assert recorder.last.url.params.get("userEmail") == "a@example.com"


def test_get_bzero_target(client: BastionZero, recorder: Recorder) -> None:
    recorder.json("GET", "/api/v2/targets/bzero/t-1", {"id": "t-1", "status": "Offline"})
    target = client.targets.get_bzero("t-1")
    assert target.id == "t-1"
    assert str(target.status) == "Offline"


def test_modify_dynamic_access_config_returns_nothing(
    client: BastionZero, recorder: Recorder
) -> None:
    recorder.add("PATCH", "/api/v2/targets/dynamic-access/d-1", httpx.Response(204))
    result = client.targets.modify_dynamic_access_config(
        "d-1", ModifyDynamicAccessConfigurationRequest()
    )
    assert result is None
    assert recorder.last.method == "PATCH"


# =============================================================================
# Policies
# =============================================================================


def test_list_policies_with_filters(client: BastionZero, recorder: Recorder) -> None:
    recorder.json(
        "GET",
        "/api/v2/policies/target-connect",
        [{"id": "p-1", "name": "admins", "verbs": [{"type": "Shell"}, {"type": "Teleport"}]}],
    )

    policies = client.policies.list_target_connect(ListPolicyOptions(subjects="a@example.com"))

    assert policies[0].verb_types() == ["Shell", "Teleport"]
    assert policies[0].verbs is not None
    assert policies[0].verbs[0].type is VerbType.SHELL
    assert recorder.last.url.query == b"subjects=a%40example.com"


def test_create_policy_posts_only_set_fields(client: BastionZero, recorder: Recorder) -> None:
    recorder.json("POST", "/api/v2/policies/just-in-time", {"id": "jit-1", "name": "oncall"})

    created = client.policies.create_jit(JITPolicy(name="oncall", duration=60))

    assert created.id == "jit-1"
    assert recorder.last_json() == {"name": "oncall", "duration": 60}


def test_modify_policy_uses_patch(client: BastionZero, recorder: Recorder) -> None:
    recorder.json("PATCH", "/api/v2/policies/target-connect/p-1", {"id": "p-1"})
    client.policies.modify_target_connect("p-1", TargetConnectPolicy(description="updated"))
    assert recorder.last_json() == {"description": "updated"}


def test_delete_policy(client: BastionZero, recorder: Recorder) -> None:
    recorder.add("DELETE", "/api/v2/policies/organization-controls/p-9", httpx.Response(200))
    assert client.policies.delete_organization_controls("p-9") is None
    assert recorder.last.content == b""


# =============================================================================
# Environments
# =============================================================================


def test_environment_lifecycle(client: BastionZero, recorder: Recorder) -> None:
    recorder.json("POST", "/api/v2/environments", {"id": "env-1"})
    recorder.json("GET", "/api/v2/environments/env-1", {"id": "env-1", "name": "prod"})
    recorder.add("PATCH", "/api/v2/environments/env-1", httpx.Response(200))
    recorder.add("DELETE", "/api/v2/environments/env-1", httpx.Response(200))

    created = client.environments.create(CreateEnvironmentRequest(name="prod"))
    assert created.id == "env-1"
    assert client.environments.get("env-1").name == "prod"
    client.environments.modify(
        "env-1", ModifyEnvironmentRequest(offline_cleanup_timeout_hours=24)
    )
    assert recorder.last_json() == {"offlineCleanupTimeoutHours": 24}
    client.environments.delete("env-1")

    assert [r.method for r in recorder.requests] == ["POST", "GET", "PATCH", "DELETE"]


def test_get_missing_environment_raises_not_found(
    client: BastionZero, recorder: Recorder
) -> None:
    recorder.json("GET", "/api/v2/environments/nope", {"errorMsg": "not found"}, status_code=404)
    with pytest.raises(ErrorResponse) as excinfo:
        client.environments.get("nope")
    assert excinfo.value.status_code == 404


def test_environment_delete_and_modify_ignore_plain_text_success_body(
    client: BastionZero, recorder: Recorder
) -> None:
    recorder.add("DELETE", "/api/v2/environments/env-1", httpx.Response(200, content=b"OK"))
    recorder.add("PATCH", "/api/v2/environments/env-1", httpx.Response(200, content=b"OK"))
    assert client.environments.delete("env-1") is None
    assert client.environments.modify("env-1", ModifyEnvironmentRequest(description="dev")) is None


# =============================================================================
# Connections
# =============================================================================


def test_create_shell_connection(client: BastionZero, recorder: Recorder) -> None:
    recorder.json("POST", "/api/v2/connections/shell", {"connectionId": "c-1"})
    resp = client.connections.create_shell(
        CreateShellConnectionRequest(space_id="s-1", target_id="t-1", target_user="ec2-user")
    )
    assert resp.connection_id == "c-1"
    assert recorder.last_json() == {
        "spaceId": "s-1",
        "targetId": "t-1",
        "targetType": "Bzero",
        "targetUser": "ec2-user",
    }


def test_create_universal_connection_uses_env_aliases(
    client: BastionZero, recorder: Recorder
) -> None:
    recorder.json(
        "POST",
        "/api/v2/connections/universal",
        {"connectionId": "c-2", "targetType": "Db", "connectionAuthDetails": {"region": "us"}},
    )
    resp = client.connections.create_universal(
        CreateUniversalConnectionRequest(target_name="pg", environment_name="prod")
    )
    assert resp.target_type is TargetType.DB
    assert resp.connection_auth_details.region == "us"
    assert recorder.last_json() == {"targetName": "pg", "envName": "prod"}


def test_list_kube_connections_for_user(client: BastionZero, recorder: Recorder) -> None:
    recorder.json("GET", "/api/v2/connections/kube", [{"id": "k-1", "targetID": "t-1"}])
    conns = client.connections.list_kube(ListConnectionOptions(user_email="a@example.com"))
    assert conns[0].target_id == "t-1"
    assert recorder.last.url.params.get("userEmail") == "a@example.com"


def test_close_connection(client: BastionZero, recorder: Recorder) -> None:
    recorder.add("PATCH", "/api/v2/connections/c-1/close", httpx.Response(200))
    client.connections.close("c-1")
    assert recorder.last.content == b""
    assert recorder.last.headers["Content-Type"] == "application/json"


def test_close_connection_ignores_plain_text_success_body(
    client: BastionZero, recorder: Recorder
) -> None:
    recorder.add("PATCH", "/api/v2/connections/c-1/close", httpx.Response(200, content=b"Closed"))
    assert client.connections.close("c-1") is None


# =============================================================================
# Events
# =============================================================================


def test_command_events_filters(client: BastionZero, recorder: Recorder) -> None:
    recorder.json("GET", "/api/v2/events/command", [{"id": "e-1", "command": "ls -la"}])
    events = client.events.list_command_events(
        CommandEventOptions(command_search="ls", target_ids=["t-1", "t-2"], event_count=10)
    )
    assert events[0].command == "ls -la"
    assert recorder.last.url.params.get_list("targetIds") == ["t-1", "t-2"]
    assert recorder.last.url.params.get("commandSearch") == "ls"
    assert recorder.last.url.params.get("eventCount") == "10"


def test_kubernetes_events_take_no_filters(client: BastionZero, recorder: Recorder) -> None:
    recorder.json("GET", "/api/v2/events/kube", [])
    assert client.events.list_kubernetes_events() == []
    assert recorder.last.url.query == b""


def test_agent_status_change_events_for_target(client: BastionZero, recorder: Recorder) -> None:
    recorder.json(
        "GET",
        "/api/v2/events/agent-status-change",
        [{"statusChange": "Online", "timeStamp": "2024-03-01T10:00:00Z"}],
    )
    events = client.events.list_agent_status_change_events(
        AgentStatusChangeEventOptions(target_id="t-1")
    )
    assert events[0].status_change == "Online"
    assert recorder.last.url.params.get("targetId") == "t-1"


@pytest.mark.parametrize("options", [None, AgentStatusChangeEventOptions(target_id="")])
def test_agent_status_change_events_require_target_id(
    client: BastionZero, recorder: Recorder, options: AgentStatusChangeEventOptions | None
) -> None:
    with pytest.raises(ValueError, match="required"):
        client.events.list_agent_status_change_events(options)  # type: ignore[arg-type]
    assert recorder.requests == []


# =============================================================================
# Subjects, users, API keys, service accounts
# =============================================================================


def test_subjects_me(client: BastionZero, recorder: Recorder) -> None:
    recorder.json(
        "GET", "/api/v2/subjects/me", {"id": "s-1", "email": "a@example.com", "type": "ApiKey"}
    )
    me = client.subjects.me()
    assert me.email == "a@example.com"
    assert me.subject_type is not None
    assert me.subject_type.value == "ApiKey"


def test_modify_user_role(client: BastionZero, recorder: Recorder) -> None:
    recorder.add("PATCH", "/api/v2/users/u-1", httpx.Response(200))
    client.users.modify_role("u-1", ModifyRoleRequest(role=RoleType.ADMIN))
    assert recorder.last_json() == {"role": "Admin"}


def test_close_subject_connections(client: BastionZero, recorder: Recorder) -> None:
    recorder.add("PATCH", "/api/v2/subjects/s-1/close-connections", httpx.Response(200))
    client.subjects.close_connections("s-1")
    assert recorder.last.method == "PATCH"


def test_create_api_key_returns_secret_once(client: BastionZero, recorder: Recorder) -> None:
    recorder.json(
        "POST",
        "/api/v2/api-keys",
        {"apiKeyDetails": {"id": "k-1", "name": "ci"}, "secret": "s3cr3t"},
    )
    resp = client.api_keys.create(CreateApiKeyRequest(name="ci"))
    assert resp.api_key_details.id == "k-1"
    assert resp.secret == "s3cr3t"
    assert recorder.last_json() == {"name": "ci", "isRegistrationKey": False}


def test_service_account_modify_and_cache_invalidation(
    client: BastionZero, recorder: Recorder
) -> None:
    recorder.json("PATCH", "/api/v2/service-accounts/sa-1", {"id": "sa-1", "enabled": False})
    recorder.add("PATCH", "/api/v2/service-accounts/invalidate-cache/sa-1", httpx.Response(200))

    account = client.service_accounts.modify("sa-1", ModifyServiceAccountRequest(enabled=False))
    assert account.enabled is False
    assert recorder.last_json() == {"enabled": False}

    client.service_accounts.invalidate_jwks_url_cache("sa-1")
    assert recorder.last.url.path == "/api/v2/service-accounts/invalidate-cache/sa-1"


# =============================================================================
# Agents, autodiscovery, GitHub actions, Okta keys
# =============================================================================


def test_list_agents_with_filters(client: BastionZero, recorder: Recorder) -> None:
    recorder.json("GET", "/api/v2/agents", [{"id": "a-1", "status": "Online", "type": "Linux"}])
    agents = client.agents.list(ListAgentsOptions(agent_statuses=[AgentStatus.ONLINE]))
    assert agents[0].agent_status is AgentStatus.ONLINE
    assert recorder.last.url.params.get("agentStatuses") == "Online"


def test_bash_autodiscovery_script(client: BastionZero, recorder: Recorder) -> None:
    recorder.json(
        "GET", "/api/v2/autodiscovery-scripts/bzero/bash", {"autodiscoveryScript": "#!/bin/bash"}
    )
    script = client.autodiscovery_scripts.get_bzero_bash_script(
        BzeroBashAutodiscoveryOptions(target_name_option=TargetNameOption.BASH_HOST_NAME)
    )
    assert script.script == "#!/bin/bash"
    assert recorder.last.url.params.get("targetNameOption") == "BashHostName"
    assert recorder.last.url.params.get("environmentId") == ""


def test_container_script_is_raw_text(client: BastionZero, recorder: Recorder) -> None:
    recorder.add(
        "GET",
        "/api/v2/autodiscovery-scripts/container",
        httpx.Response(200, content=b"FROM alpine\nRUN echo hi\n"),
    )
    assert client.autodiscovery_scripts.get_container_script() == "FROM alpine\nRUN echo hi\n"


def test_container_script_with_invalid_utf8_is_still_returned(
    client: BastionZero, recorder: Recorder
) -> None:
    recorder.add(
        "GET",
        "/api/v2/autodiscovery-scripts/container",
        httpx.Response(200, content=b"#!/bin/sh\necho \xff\n"),
    )
    assert client.autodiscovery_scripts.get_container_script() == "#!/bin/sh\necho \ufffd\n"


def test_github_action_create(client: BastionZero, recorder: Recorder) -> None:
    recorder.json("POST", "/api/v2/github-actions", {"id": "gh-1", "githubActionId": "org/repo"})
    action = client.github_actions.create(
        CreateAuthorizedGitHubActionRequest(github_action_id="org/repo")
    )
    assert action.github_action_id == "org/repo"
    assert recorder.last_json() == {"githubActionId": "org/repo"}


def test_okta_public_keys(client: BastionZero, recorder: Recorder) -> None:
    recorder.json("GET", "/api/v2/okta-public-keys", {"keys": [{"kid": "k1", "kty": "RSA"}]})
    assert client.okta_public_keys.list().keys[0].kid == "k1"


# =============================================================================
# MFA
# =============================================================================


def test_mfa_reset(client: BastionZero, recorder: Recorder) -> None:
    recorder.json("POST", "/api/v2/mfa/reset", {"mfaSecretUrl": "otpauth://totp/x"})
    resp = client.mfa.reset_secret(ResetMFASecretRequest(force_setup=True))
    assert resp.mfa_secret_url == "otpauth://totp/x"
    assert recorder.last_json() == {"forceSetup": True}


def test_mfa_rotate_returns_secret_string(client: BastionZero, recorder: Recorder) -> None:
    recorder.json("PATCH", "/api/v2/mfa/rotate/sa-1", "JBSWY3DPEHPK3PXP")
    assert client.mfa.rotate_service_account_secret("sa-1") == "JBSWY3DPEHPK3PXP"


def test_mfa_rotate_with_empty_body(client: BastionZero, recorder: Recorder) -> None:
    recorder.add("PATCH", "/api/v2/mfa/rotate/sa-1", httpx.Response(200))
    assert client.mfa.rotate_service_account_secret("sa-1") == ""


def test_mfa_clear_ignores_plain_text_success_body(
    client: BastionZero, recorder: Recorder
) -> None:
    recorder.add("POST", "/api/v2/mfa/clear", httpx.Response(200, content=b"OK"))
    assert client.mfa.clear_secret(ClearMFASecretRequest(user_id="u-1")) is None
    assert recorder.last_json() == {"userId": "u-1"}


def test_mfa_status(client: BastionZero, recorder: Recorder) -> None:
    recorder.json("GET", "/api/v2/mfa/me", {"enabled": True, "verified": False})
    status = client.mfa.get_status()
    assert status.enabled is True
    assert status.session_verified is None


# =============================================================================
# Organization
# =============================================================================


def test_fetch_user_groups(client: BastionZero, recorder: Recorder) -> None:
    recorder.json(
        "POST",
        "/api/v2/organization/groups-memberships/fetch/u-1",
        [{"idPGroupId": "g-1", "name": "ops"}],
    )
    groups = client.organization.fetch_user_groups("u-1")
    assert [(g.id, g.name) for g in groups] == [("g-1", "ops")]


def test_enable_global_registration_key(client: BastionZero, recorder: Recorder) -> None:
    recorder.json(
        "POST",
        "/api/v2/organization/registration-key/enable-enforce-global-key",
        {"globalRegistrationKeyEnforced": True, "defaultGlobalRegistrationKey": "rk-1"},
    )
    settings = client.organization.enable_global_registration_key(
        EnableGlobalRegistrationKeyRequest(default_registration_key_id="rk-1")
    )
    assert settings.global_registration_key_enforced is True
    assert recorder.last_json() == {"defaultRegistrationKeyId": "rk-1"}


def test_invalidate_keycloak_cache(client: BastionZero, recorder: Recorder) -> None:
    recorder.add("POST", "/api/v2/organization/invalidate-keycloak", httpx.Response(204))
    assert client.organization.invalidate_keycloak_provider_cache() is None


# =============================================================================
# Session recordings
# =============================================================================


def test_session_recording_download_streams_to_sink(
    client: BastionZero, recorder: Recorder
) -> None:
    cast = b'{"version": 2, "width": 80}\n[0.5, "o", "$ "]\n'
    recorder.add("GET", "/api/v2/session-recordings/c-1", httpx.Response(200, content=cast))

    sink = io.BytesIO()
    client.session_recordings.download("c-1", sink)
    assert sink.getvalue() == cast
    assert client.session_recordings.get_file("c-1") == cast.decode()


def test_session_recordings_list(client: BastionZero, recorder: Recorder) -> None:
    recorder.json(
        "GET",
        "/api/v2/session-recordings",
        [{"connectionId": "c-1", "targetType": "Bzero", "size": 2048}],
    )
    recordings = client.session_recordings.list()
    assert recordings[0].target_type is TargetType.BZERO
    assert recordings[0].size == 2048

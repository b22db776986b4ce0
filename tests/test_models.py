from __future__ import annotations

from datetime import datetime, timezone

from bastionzero.models.connections import Connection
from bastionzero.models.environments import CreateEnvironmentRequest, ModifyEnvironmentRequest
from bastionzero.models.events import AgentStatusChangeEvent
from bastionzero.models.organization import Group
from bastionzero.models.policies import (
    PolicySubject,
    PolicyVerb,
    TargetConnectPolicy,
)
from bastionzero.models.subjects import Subject
from bastionzero.models.targets import AllTargetsResponse, DatabaseTarget
from bastionzero.models.types import SubjectType, TargetStatus, VerbType


def test_unknown_enum_values_decode_as_pseudo_members() -> None:
    status = TargetStatus("Hibernating")
    assert status.value == "Hibernating"
    assert status.name == "UNKNOWN_HIBERNATING"
    assert str(status) == "Hibernating"


def test_unknown_enum_values_survive_model_validation() -> None:
    subject = Subject.model_validate({"id": "s-1", "type": "Robot Account"})
    assert subject.type is not None
    assert subject.type.value == "Robot Account"
    assert subject.type.name == "UNKNOWN_ROBOT_ACCOUNT"


def test_known_enum_values_are_members() -> None:
    subject = Subject.model_validate({"type": "ServiceAccount"})
    assert subject.type is SubjectType.SERVICE_ACCOUNT


def test_missing_keys_decode_to_zero_values() -> None:
    target = DatabaseTarget.model_validate({"id": "db-1"})
    assert target.name == ""
    assert target.connections == []
    assert target.remote_port.value is None
    assert target.status is None


def test_unknown_keys_are_ignored() -> None:
    env = CreateEnvironmentRequest.model_validate({"name": "prod", "somethingNew": [1, 2]})
    assert env.to_request() == {"name": "prod", "offlineCleanupTimeoutHours": 0}


def test_request_dump_omits_unset_optional_fields() -> None:
    assert ModifyEnvironmentRequest(description="x").to_request() == {"description": "x"}
    assert ModifyEnvironmentRequest().to_request() == {}


def test_policy_request_uses_camel_case_and_timestamps() -> None:
    policy = TargetConnectPolicy(
        name="admins",
        subjects=[PolicySubject(id="u-1", type=SubjectType.USER)],
        verbs=[PolicyVerb(type=VerbType.SHELL), PolicyVerb(type=VerbType.TUNNEL)],
        time_expires=datetime(2030, 1, 1, 8, 0, tzinfo=timezone.utc),
    )
    assert policy.to_request() == {
        "name": "admins",
        "subjects": [{"id": "u-1", "type": "User"}],
        "verbs": [{"type": "Shell"}, {"type": "Tunnel"}],
        "timeExpires": "2030-01-01T08:00:00Z",
    }
    assert policy.verb_types() == ["Shell", "Tunnel"]
    assert policy.subject_ids() == ["u-1"]


def test_irregular_json_keys() -> None:
    conn = Connection.model_validate({"id": "c-1", "targetID": "t-1"})
    assert conn.target_id == "t-1"
    group = Group.model_validate({"idPGroupId": "g-1", "name": "ops"})
    assert group.id == "g-1"
    event = AgentStatusChangeEvent.model_validate({"timeStamp": "2024-01-01T00:00:00Z"})
    assert event.timestamp == datetime(2024, 1, 1, tzinfo=timezone.utc)


def test_all_targets_response_flattens_groups() -> None:
    resp = AllTargetsResponse.model_validate(
        {
            "shell": [{"id": "sh-1", "status": "Online"}],
            "db": [{"id": "db-1"}],
            "web": [{"id": "web-1"}],
        }
    )
    assert [t.id for t in resp.all()] == ["db-1", "sh-1", "web-1"]
    assert resp.shell[0].status is TargetStatus.ONLINE

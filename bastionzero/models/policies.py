"""
Policy models.

Every policy kind embeds the common `Policy` fields. The same models are used
for requests and responses: fields left as `None` are omitted from request
bodies, so a modify call only sends what was set.
"""

from __future__ import annotations

from typing import ClassVar

from pydantic import Field

from ..query import QueryOptions
from .base import BastionZeroModel
from .types import PolicyType, SubjectType, Timestamp, VerbType


class PolicySubject(BastionZeroModel):
    id: str = ""
    type: SubjectType = SubjectType.USER


class PolicyGroup(BastionZeroModel):
    id: str = ""
    name: str = ""


class PolicyEnvironment(BastionZeroModel):
    id: str = ""


class PolicyTarget(BastionZeroModel):
    id: str = ""
    type: str = ""


class PolicyTargetUser(BastionZeroModel):
    user_name: str = ""


class PolicyVerb(BastionZeroModel):
    type: VerbType = VerbType.SHELL


class PolicyCluster(BastionZeroModel):
    id: str = ""


class PolicyClusterUser(BastionZeroModel):
    name: str = ""


class PolicyClusterGroup(BastionZeroModel):
    name: str = ""


class ChildPolicy(BastionZeroModel):
    """A policy that a just-in-time policy grants access to."""

    id: str = ""
    # TargetConnect, Kubernetes or Proxy
    type: PolicyType = PolicyType.TARGET_CONNECT
    name: str = ""


class Policy(BastionZeroModel):
    """Fields shared by every policy kind."""

    policy_type: ClassVar[PolicyType]

    id: str | None = None
    name: str | None = None
    description: str | None = None
    subjects: list[PolicySubject] | None = None
    groups: list[PolicyGroup] | None = None
    time_expires: Timestamp | None = None

    def subject_ids(self) -> list[str]:
        return [s.id for s in self.subjects or []]

    def group_names(self) -> list[str]:
        return [g.name for g in self.groups or []]


class TargetConnectPolicy(Policy):
    policy_type: ClassVar[PolicyType] = PolicyType.TARGET_CONNECT

    environments: list[PolicyEnvironment] | None = None
    targets: list[PolicyTarget] | None = None
    target_users: list[PolicyTargetUser] | None = None
    verbs: list[PolicyVerb] | None = None

    def verb_types(self) -> list[str]:
        return [v.type.value for v in self.verbs or []]

    def target_user_names(self) -> list[str]:
        return [u.user_name for u in self.target_users or []]


class KubernetesPolicy(Policy):
    policy_type: ClassVar[PolicyType] = PolicyType.KUBERNETES

    environments: list[PolicyEnvironment] | None = None
    clusters: list[PolicyCluster] | None = None
    cluster_users: list[PolicyClusterUser] | None = None
    cluster_groups: list[PolicyClusterGroup] | None = None


class ProxyPolicy(Policy):
    policy_type: ClassVar[PolicyType] = PolicyType.PROXY

    environments: list[PolicyEnvironment] | None = None
    targets: list[PolicyTarget] | None = None
    target_users: list[PolicyTargetUser] | None = None


class JITPolicy(Policy):
    """Just-in-time policy: grants temporary access through child policies."""

    policy_type: ClassVar[PolicyType] = PolicyType.JUST_IN_TIME

    child_policies: list[ChildPolicy] | None = None
    automatically_approved: bool | None = None
    # Minutes
    duration: int | None = None


class SessionRecordingPolicy(Policy):
    policy_type: ClassVar[PolicyType] = PolicyType.SESSION_RECORDING

    record_input: bool | None = None


class OrganizationControlsPolicy(Policy):
    policy_type: ClassVar[PolicyType] = PolicyType.ORGANIZATION_CONTROLS

    mfa_enabled: bool | None = Field(None, alias="mfaEnabled")
    mfa_duration: int | None = Field(None, alias="mfaDuration")


class ListPolicyOptions(QueryOptions):
    """
    Filters for policy list endpoints.

    Both filters are comma separated lists: subject IDs/emails and group names.
    """

    subjects: str | None = None
    groups: str | None = None


__all__ = [
    "ChildPolicy",
    "JITPolicy",
    "KubernetesPolicy",
    "ListPolicyOptions",
    "OrganizationControlsPolicy",
    "Policy",
    "PolicyCluster",
    "PolicyClusterGroup",
    "PolicyClusterUser",
    "PolicyEnvironment",
    "PolicyGroup",
    "PolicySubject",
    "PolicyTarget",
    "PolicyTargetUser",
    "PolicyVerb",
]

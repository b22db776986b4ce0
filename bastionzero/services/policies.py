"""
Policy service.

Each policy kind lives under its own collection (`api/v2/policies/<kind>`) and
supports the same five operations: list, create, get, delete and modify.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

from ..models.base import validate_list
from ..models.policies import (
    JITPolicy,
    KubernetesPolicy,
    ListPolicyOptions,
    OrganizationControlsPolicy,
    Policy,
    ProxyPolicy,
    SessionRecordingPolicy,
    TargetConnectPolicy,
)

if TYPE_CHECKING:
    from ..clients.http import AsyncHTTPClient, HTTPClient

BASE_PATH = "api/v2/policies"

TARGET_CONNECT = "target-connect"
KUBERNETES = "kubernetes"
PROXY = "proxy"
JUST_IN_TIME = "just-in-time"
SESSION_RECORDING = "session-recording"
ORGANIZATION_CONTROLS = "organization-controls"

P = TypeVar("P", bound=Policy)


def _collection(kind: str) -> str:
    return f"{BASE_PATH}/{kind}"


def _single(kind: str, policy_id: str) -> str:
    return f"{BASE_PATH}/{kind}/{policy_id}"


class PolicyService:
    """
    Service for managing policies.

    Example:
        ```python
        policies = client.policies.list_target_connect(
            ListPolicyOptions(subjects="alice@example.com")
        )
        ```
    """

    def __init__(self, client: HTTPClient):
        self._client = client

    # =========================================================================
    # Shared implementation
    # =========================================================================

    def _list(self, kind: str, model: type[P], options: ListPolicyOptions | None) -> list[P]:
        data = self._client.get(_collection(kind), params=options)
        return validate_list(model, data)

    def _create(self, kind: str, model: type[P], policy: P) -> P:
        data = self._client.post(_collection(kind), json=policy)
        return model.model_validate(data or {})

    def _get(self, kind: str, model: type[P], policy_id: str) -> P:
        data = self._client.get(_single(kind, policy_id))
        return model.model_validate(data or {})

    def _delete(self, kind: str, policy_id: str) -> None:
        self._client.delete(_single(kind, policy_id), decode=False)

    def _modify(self, kind: str, model: type[P], policy_id: str, policy: P) -> P:
        data = self._client.patch(_single(kind, policy_id), json=policy)
        return model.model_validate(data or {})

    # =========================================================================
    # Target connect
    # =========================================================================

    def list_target_connect(
        self, options: ListPolicyOptions | None = None
    ) -> list[TargetConnectPolicy]:
        """List target connect policies, optionally filtered by subject or group."""
        return self._list(TARGET_CONNECT, TargetConnectPolicy, options)

    def create_target_connect(self, policy: TargetConnectPolicy) -> TargetConnectPolicy:
        return self._create(TARGET_CONNECT, TargetConnectPolicy, policy)

    def get_target_connect(self, policy_id: str) -> TargetConnectPolicy:
        return self._get(TARGET_CONNECT, TargetConnectPolicy, policy_id)

    def delete_target_connect(self, policy_id: str) -> None:
        self._delete(TARGET_CONNECT, policy_id)

    def modify_target_connect(
        self, policy_id: str, policy: TargetConnectPolicy
    ) -> TargetConnectPolicy:
        """
        Update a target connect policy.

        Only fields that are set (not None) on `policy` are sent.
        """
        return self._modify(TARGET_CONNECT, TargetConnectPolicy, policy_id, policy)

    # =========================================================================
    # Kubernetes
    # =========================================================================

    def list_kubernetes(self, options: ListPolicyOptions | None = None) -> list[KubernetesPolicy]:
        return self._list(KUBERNETES, KubernetesPolicy, options)

    def create_kubernetes(self, policy: KubernetesPolicy) -> KubernetesPolicy:
        return self._create(KUBERNETES, KubernetesPolicy, policy)

    def get_kubernetes(self, policy_id: str) -> KubernetesPolicy:
        return self._get(KUBERNETES, KubernetesPolicy, policy_id)

    def delete_kubernetes(self, policy_id: str) -> None:
        self._delete(KUBERNETES, policy_id)

    def modify_kubernetes(self, policy_id: str, policy: KubernetesPolicy) -> KubernetesPolicy:
        return self._modify(KUBERNETES, KubernetesPolicy, policy_id, policy)

    # =========================================================================
    # Proxy
    # =========================================================================

    def list_proxy(self, options: ListPolicyOptions | None = None) -> list[ProxyPolicy]:
        return self._list(PROXY, ProxyPolicy, options)

    def create_proxy(self, policy: ProxyPolicy) -> ProxyPolicy:
        return self._create(PROXY, ProxyPolicy, policy)

    def get_proxy(self, policy_id: str) -> ProxyPolicy:
        return self._get(PROXY, ProxyPolicy, policy_id)

    def delete_proxy(self, policy_id: str) -> None:
        self._delete(PROXY, policy_id)

    def modify_proxy(self, policy_id: str, policy: ProxyPolicy) -> ProxyPolicy:
        return self._modify(PROXY, ProxyPolicy, policy_id, policy)

    # =========================================================================
    # Just in time
    # =========================================================================

    def list_jit(self, options: ListPolicyOptions | None = None) -> list[JITPolicy]:
        return self._list(JUST_IN_TIME, JITPolicy, options)

    def create_jit(self, policy: JITPolicy) -> JITPolicy:
        return self._create(JUST_IN_TIME, JITPolicy, policy)

    def get_jit(self, policy_id: str) -> JITPolicy:
        return self._get(JUST_IN_TIME, JITPolicy, policy_id)

    def delete_jit(self, policy_id: str) -> None:
        self._delete(JUST_IN_TIME, policy_id)

    def modify_jit(self, policy_id: str, policy: JITPolicy) -> JITPolicy:
        return self._modify(JUST_IN_TIME, JITPolicy, policy_id, policy)

    # =========================================================================
    # Session recording
    # =========================================================================

    def list_session_recording(
        self, options: ListPolicyOptions | None = None
    ) -> list[SessionRecordingPolicy]:
        return self._list(SESSION_RECORDING, SessionRecordingPolicy, options)

    def create_session_recording(self, policy: SessionRecordingPolicy) -> SessionRecordingPolicy:
        return self._create(SESSION_RECORDING, SessionRecordingPolicy, policy)

    def get_session_recording(self, policy_id: str) -> SessionRecordingPolicy:
        return self._get(SESSION_RECORDING, SessionRecordingPolicy, policy_id)

    def delete_session_recording(self, policy_id: str) -> None:
        self._delete(SESSION_RECORDING, policy_id)

    def modify_session_recording(
        self, policy_id: str, policy: SessionRecordingPolicy
    ) -> SessionRecordingPolicy:
        return self._modify(SESSION_RECORDING, SessionRecordingPolicy, policy_id, policy)

    # =========================================================================
    # Organization controls
    # =========================================================================

    def list_organization_controls(
        self, options: ListPolicyOptions | None = None
    ) -> list[OrganizationControlsPolicy]:
        return self._list(ORGANIZATION_CONTROLS, OrganizationControlsPolicy, options)

    def create_organization_controls(
        self, policy: OrganizationControlsPolicy
    ) -> OrganizationControlsPolicy:
        return self._create(ORGANIZATION_CONTROLS, OrganizationControlsPolicy, policy)

    def get_organization_controls(self, policy_id: str) -> OrganizationControlsPolicy:
        return self._get(ORGANIZATION_CONTROLS, OrganizationControlsPolicy, policy_id)

    def delete_organization_controls(self, policy_id: str) -> None:
        self._delete(ORGANIZATION_CONTROLS, policy_id)

    def modify_organization_controls(
        self, policy_id: str, policy: OrganizationControlsPolicy
    ) -> OrganizationControlsPolicy:
        return self._modify(ORGANIZATION_CONTROLS, OrganizationControlsPolicy, policy_id, policy)


# =============================================================================
# Async Policy Service
# =============================================================================


class AsyncPolicyService:
    """Async version of PolicyService."""

    def __init__(self, client: AsyncHTTPClient):
        self._client = client

    async def _list(
        self, kind: str, model: type[P], options: ListPolicyOptions | None
    ) -> list[P]:
        data = await self._client.get(_collection(kind), params=options)
        return validate_list(model, data)

    async def _create(self, kind: str, model: type[P], policy: P) -> P:
        data = await self._client.post(_collection(kind), json=policy)
        return model.model_validate(data or {})

    async def _get(self, kind: str, model: type[P], policy_id: str) -> P:
        data = await self._client.get(_single(kind, policy_id))
        return model.model_validate(data or {})

    async def _delete(self, kind: str, policy_id: str) -> None:
        await self._client.delete(_single(kind, policy_id), decode=False)

    async def _modify(self, kind: str, model: type[P], policy_id: str, policy: P) -> P:
        data = await self._client.patch(_single(kind, policy_id), json=policy)
        return model.model_validate(data or {})

    # Target connect

    async def list_target_connect(
        self, options: ListPolicyOptions | None = None
    ) -> list[TargetConnectPolicy]:
        return await self._list(TARGET_CONNECT, TargetConnectPolicy, options)

    async def create_target_connect(self, policy: TargetConnectPolicy) -> TargetConnectPolicy:
        return await self._create(TARGET_CONNECT, TargetConnectPolicy, policy)

    async def get_target_connect(self, policy_id: str) -> TargetConnectPolicy:
        return await self._get(TARGET_CONNECT, TargetConnectPolicy, policy_id)

    async def delete_target_connect(self, policy_id: str) -> None:
        await self._delete(TARGET_CONNECT, policy_id)

    async def modify_target_connect(
        self, policy_id: str, policy: TargetConnectPolicy
    ) -> TargetConnectPolicy:
        return await self._modify(TARGET_CONNECT, TargetConnectPolicy, policy_id, policy)

    # Kubernetes

    async def list_kubernetes(
        self, options: ListPolicyOptions | None = None
    ) -> list[KubernetesPolicy]:
        return await self._list(KUBERNETES, KubernetesPolicy, options)

    async def create_kubernetes(self, policy: KubernetesPolicy) -> KubernetesPolicy:
        return await self._create(KUBERNETES, KubernetesPolicy, policy)

    async def get_kubernetes(self, policy_id: str) -> KubernetesPolicy:
        return await self._get(KUBERNETES, KubernetesPolicy, policy_id)

    async def delete_kubernetes(self, policy_id: str) -> None:
        await self._delete(KUBERNETES, policy_id)

    async def modify_kubernetes(
        self, policy_id: str, policy: KubernetesPolicy
    ) -> KubernetesPolicy:
        return await self._modify(KUBERNETES, KubernetesPolicy, policy_id, policy)

    # Proxy

    async def list_proxy(self, options: ListPolicyOptions | None = None) -> list[ProxyPolicy]:
        return await self._list(PROXY, ProxyPolicy, options)

    async def create_proxy(self, policy: ProxyPolicy) -> ProxyPolicy:
        return await self._create(PROXY, ProxyPolicy, policy)

    async def get_proxy(self, policy_id: str) -> ProxyPolicy:
        return await self._get(PROXY, ProxyPolicy, policy_id)

    async def delete_proxy(self, policy_id: str) -> None:
        await self._delete(PROXY, policy_id)

    async def modify_proxy(self, policy_id: str, policy: ProxyPolicy) -> ProxyPolicy:
        return await self._modify(PROXY, ProxyPolicy, policy_id, policy)

    # Just in time

    async def list_jit(self, options: ListPolicyOptions | None = None) -> list[JITPolicy]:
        return await self._list(JUST_IN_TIME, JITPolicy, options)

    async def create_jit(self, policy: JITPolicy) -> JITPolicy:
        return await self._create(JUST_IN_TIME, JITPolicy, policy)

    async def get_jit(self, policy_id: str) -> JITPolicy:
        return await self._get(JUST_IN_TIME, JITPolicy, policy_id)

    async def delete_jit(self, policy_id: str) -> None:
        await self._delete(JUST_IN_TIME, policy_id)

    async def modify_jit(self, policy_id: str, policy: JITPolicy) -> JITPolicy:
        return await self._modify(JUST_IN_TIME, JITPolicy, policy_id, policy)

    # Session recording

    async def list_session_recording(
        self, options: ListPolicyOptions | None = None
    ) -> list[SessionRecordingPolicy]:
        return await self._list(SESSION_RECORDING, SessionRecordingPolicy, options)

    async def create_session_recording(
        self, policy: SessionRecordingPolicy
    ) -> SessionRecordingPolicy:
        return await self._create(SESSION_RECORDING, SessionRecordingPolicy, policy)

    async def get_session_recording(self, policy_id: str) -> SessionRecordingPolicy:
        return await self._get(SESSION_RECORDING, SessionRecordingPolicy, policy_id)

    async def delete_session_recording(self, policy_id: str) -> None:
        await self._delete(SESSION_RECORDING, policy_id)

    async def modify_session_recording(
        self, policy_id: str, policy: SessionRecordingPolicy
    ) -> SessionRecordingPolicy:
        return await self._modify(SESSION_RECORDING, SessionRecordingPolicy, policy_id, policy)

    # Organization controls

    async def list_organization_controls(
        self, options: ListPolicyOptions | None = None
    ) -> list[OrganizationControlsPolicy]:
        return await self._list(ORGANIZATION_CONTROLS, OrganizationControlsPolicy, options)

    async def create_organization_controls(
        self, policy: OrganizationControlsPolicy
    ) -> OrganizationControlsPolicy:
        return await self._create(ORGANIZATION_CONTROLS, OrganizationControlsPolicy, policy)

    async def get_organization_controls(self, policy_id: str) -> OrganizationControlsPolicy:
        return await self._get(ORGANIZATION_CONTROLS, OrganizationControlsPolicy, policy_id)

    async def delete_organization_controls(self, policy_id: str) -> None:
        await self._delete(ORGANIZATION_CONTROLS, policy_id)

    async def modify_organization_controls(
        self, policy_id: str, policy: OrganizationControlsPolicy
    ) -> OrganizationControlsPolicy:
        return await self._modify(
            ORGANIZATION_CONTROLS, OrganizationControlsPolicy, policy_id, policy
        )

"""
Main BastionZero API client.

Provides a unified interface to all BastionZero API functionality.
"""

from __future__ import annotations

import base64
import binascii
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import httpx

from .clients.http import DEFAULT_USER_AGENT, AsyncHTTPClient, ClientConfig, HTTPClient
from .exceptions import ConfigurationError
from .hooks import ErrorHook, RequestHook, ResponseHook
from .models.types import DEFAULT_BASE_URL
from .services.agents import AgentService
from .services.api_keys import ApiKeyService
from .services.autodiscovery_scripts import AutodiscoveryScriptService
from .services.connections import AsyncConnectionService, ConnectionService
from .services.environments import AsyncEnvironmentService, EnvironmentService
from .services.events import AsyncEventService, EventService
from .services.github_actions import GitHubActionService
from .services.mfa import MFAService
from .services.okta_public_keys import OktaPublicKeyService
from .services.organization import OrganizationService
from .services.policies import AsyncPolicyService, PolicyService
from .services.service_accounts import ServiceAccountService
from .services.session_recordings import SessionRecordingService
from .services.subjects import SubjectService
from .services.targets import AsyncTargetService, TargetService
from .services.users import UserService

API_SECRET_HEADER = "X-API-KEY"
API_SECRET_ENV = "BASTIONZERO_API_SECRET"
BASE_URL_ENV = "BASTIONZERO_BASE_URL"


def _maybe_load_dotenv(
    *,
    load_dotenv: bool,
    dotenv_path: str | os.PathLike[str] | None = None,
    override: bool = False,
) -> None:
    if not load_dotenv:
        return
    from dotenv import load_dotenv as _load_dotenv

    if dotenv_path is None:
        _load_dotenv(override=override)
    else:
        _load_dotenv(dotenv_path=Path(dotenv_path), override=override)


def _validate_api_secret(secret: str) -> str:
    try:
        base64.b64decode(secret, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ConfigurationError(f"API secret is not valid base64: {e}") from e
    return secret


def _build_config(
    *,
    base_url: str,
    user_agent: str | None,
    headers: Mapping[str, str] | None,
    timeout: float,
    log_requests: bool,
    transport: httpx.BaseTransport | None = None,
    async_transport: httpx.AsyncBaseTransport | None = None,
    on_request: RequestHook | None,
    on_response: ResponseHook | None,
    on_error: ErrorHook | None,
) -> ClientConfig:
    try:
        httpx.URL(base_url)
    except httpx.InvalidURL as e:
        raise ConfigurationError(f"Invalid base URL {base_url!r}: {e}") from e

    agent = DEFAULT_USER_AGENT
    if user_agent:
        agent = f"{user_agent} {DEFAULT_USER_AGENT}"

    return ClientConfig(
        base_url=base_url,
        user_agent=agent,
        headers=dict(headers or {}),
        timeout=timeout,
        log_requests=log_requests,
        transport=transport,
        async_transport=async_transport,
        on_request=on_request,
        on_response=on_response,
        on_error=on_error,
    )


class BastionZero:
    """
    Synchronous BastionZero API client.

    Example:
        ```python
        from bastionzero import BastionZero

        with BastionZero.from_api_secret("your-api-secret") as client:
            me = client.users.me()
            for env in client.environments.list():
                print(env.name)
        ```

    Attributes:
        targets: Targets of every kind, database targets and dynamic access configs
        policies: Policies of every kind
        connections: Connection creation, inspection and closing
        environments: Environment management
        events: Audit events
        users: Users
        subjects: Subjects (users, API keys and service accounts)
        service_accounts: Service accounts
        api_keys: API keys and registration keys
        agents: Agents
        autodiscovery_scripts: Agent install scripts
        github_actions: Authorized GitHub actions
        mfa: MFA settings
        okta_public_keys: Okta public keys
        organization: Organization settings and IdP groups
        session_recordings: Session recordings
    """

    def __init__(
        self,
        *,
        base_url: str = DEFAULT_BASE_URL,
        user_agent: str | None = None,
        headers: Mapping[str, str] | None = None,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
        log_requests: bool = False,
        on_request: RequestHook | None = None,
        on_response: ResponseHook | None = None,
        on_error: ErrorHook | None = None,
    ):
        """
        Initialize the BastionZero client.

        Most callers want `from_api_secret` or `from_env` instead, which add
        the authentication header.

        Args:
            base_url: API root (default: https://cloud.bastionzero.com/)
            user_agent: Prepended to the SDK's own User-Agent
            headers: Extra headers sent on every request
            timeout: Request timeout in seconds
            transport: httpx transport override (tests, proxies)
            log_requests: Log every request and response at DEBUG level
            on_request: Called before each request is sent
            on_response: Called after each response is received
            on_error: Called when the transport fails
        """
        config = _build_config(
            base_url=base_url,
            user_agent=user_agent,
            headers=headers,
            timeout=timeout,
            log_requests=log_requests,
            transport=transport,
            on_request=on_request,
            on_response=on_response,
            on_error=on_error,
        )
        self._http = HTTPClient(config)

        # Initialize services
        self._targets: TargetService | None = None
        self._policies: PolicyService | None = None
        self._connections: ConnectionService | None = None
        self._environments: EnvironmentService | None = None
        self._events: EventService | None = None
        self._users: UserService | None = None
        self._subjects: SubjectService | None = None
        self._service_accounts: ServiceAccountService | None = None
        self._api_keys: ApiKeyService | None = None
        self._agents: AgentService | None = None
        self._autodiscovery_scripts: AutodiscoveryScriptService | None = None
        self._github_actions: GitHubActionService | None = None
        self._mfa: MFAService | None = None
        self._okta_public_keys: OktaPublicKeyService | None = None
        self._organization: OrganizationService | None = None
        self._session_recordings: SessionRecordingService | None = None

    @classmethod
    def from_api_secret(cls, api_secret: str, **kwargs: Any) -> BastionZero:
        """
        Create a client that authenticates with an API key secret.

        Raises:
            ConfigurationError: If `api_secret` is not valid base64.
        """
        headers = dict(kwargs.pop("headers", None) or {})
        headers[API_SECRET_HEADER] = _validate_api_secret(api_secret)
        return cls(headers=headers, **kwargs)

    @classmethod
    def from_env(
        cls,
        *,
        load_dotenv: bool = False,
        dotenv_path: str | os.PathLike[str] | None = None,
        **kwargs: Any,
    ) -> BastionZero:
        """
        Create a client from `BASTIONZERO_API_SECRET` and, when set,
        `BASTIONZERO_BASE_URL`.

        Args:
            load_dotenv: Read a `.env` file first (existing variables win)
            dotenv_path: Path of the `.env` file; searched for when omitted
        """
        _maybe_load_dotenv(load_dotenv=load_dotenv, dotenv_path=dotenv_path)
        api_secret = os.getenv(API_SECRET_ENV, "").strip()
        if not api_secret:
            raise ConfigurationError(f"{API_SECRET_ENV} is not set")
        base_url = os.getenv(BASE_URL_ENV, "").strip()
        if base_url:
            kwargs.setdefault("base_url", base_url)
        return cls.from_api_secret(api_secret, **kwargs)

    def __enter__(self) -> BastionZero:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the HTTP client and release resources."""
        self._http.close()

    @property
    def base_url(self) -> str:
        return self._http.config.base_url

    # =========================================================================
    # Service Properties (lazy initialization)
    # =========================================================================

    @property
    def targets(self) -> TargetService:
        """Target operations."""
        if self._targets is None:
            self._targets = TargetService(self._http)
        return self._targets

    @property
    def policies(self) -> PolicyService:
        """Policy operations."""
        if self._policies is None:
            self._policies = PolicyService(self._http)
        return self._policies

    @property
    def connections(self) -> ConnectionService:
        """Connection operations."""
        if self._connections is None:
            self._connections = ConnectionService(self._http)
        return self._connections

    @property
    def environments(self) -> EnvironmentService:
        """Environment operations."""
        if self._environments is None:
            self._environments = EnvironmentService(self._http)
        return self._environments

    @property
    def events(self) -> EventService:
        """Audit event queries."""
        if self._events is None:
            self._events = EventService(self._http)
        return self._events

    @property
    def users(self) -> UserService:
        if self._users is None:
            self._users = UserService(self._http)
        return self._users

    @property
    def subjects(self) -> SubjectService:
        if self._subjects is None:
            self._subjects = SubjectService(self._http)
        return self._subjects

    @property
    def service_accounts(self) -> ServiceAccountService:
        if self._service_accounts is None:
            self._service_accounts = ServiceAccountService(self._http)
        return self._service_accounts

    @property
    def api_keys(self) -> ApiKeyService:
        if self._api_keys is None:
            self._api_keys = ApiKeyService(self._http)
        return self._api_keys

    @property
    def agents(self) -> AgentService:
        if self._agents is None:
            self._agents = AgentService(self._http)
        return self._agents

    @property
    def autodiscovery_scripts(self) -> AutodiscoveryScriptService:
        if self._autodiscovery_scripts is None:
            self._autodiscovery_scripts = AutodiscoveryScriptService(self._http)
        return self._autodiscovery_scripts

    @property
    def github_actions(self) -> GitHubActionService:
        if self._github_actions is None:
            self._github_actions = GitHubActionService(self._http)
        return self._github_actions

    @property
    def mfa(self) -> MFAService:
        if self._mfa is None:
            self._mfa = MFAService(self._http)
        return self._mfa

    @property
    def okta_public_keys(self) -> OktaPublicKeyService:
        if self._okta_public_keys is None:
            self._okta_public_keys = OktaPublicKeyService(self._http)
        return self._okta_public_keys

    @property
    def organization(self) -> OrganizationService:
        if self._organization is None:
            self._organization = OrganizationService(self._http)
        return self._organization

    @property
    def session_recordings(self) -> SessionRecordingService:
        if self._session_recordings is None:
            self._session_recordings = SessionRecordingService(self._http)
        return self._session_recordings


# =============================================================================
# Async Client
# =============================================================================


class AsyncBastionZero:
    """
    Asynchronous BastionZero API client.

    Covers targets, policies, connections, environments and events.

    Example:
        ```python
        async with AsyncBastionZero.from_api_secret("your-api-secret") as client:
            targets = await client.targets.list_all()
        ```
    """

    def __init__(
        self,
        *,
        base_url: str = DEFAULT_BASE_URL,
        user_agent: str | None = None,
        headers: Mapping[str, str] | None = None,
        timeout: float = 30.0,
        async_transport: httpx.AsyncBaseTransport | None = None,
        log_requests: bool = False,
        on_request: RequestHook | None = None,
        on_response: ResponseHook | None = None,
        on_error: ErrorHook | None = None,
    ):
        config = _build_config(
            base_url=base_url,
            user_agent=user_agent,
            headers=headers,
            timeout=timeout,
            log_requests=log_requests,
            async_transport=async_transport,
            on_request=on_request,
            on_response=on_response,
            on_error=on_error,
        )
        self._http = AsyncHTTPClient(config)
        self._targets: AsyncTargetService | None = None
        self._policies: AsyncPolicyService | None = None
        self._connections: AsyncConnectionService | None = None
        self._environments: AsyncEnvironmentService | None = None
        self._events: AsyncEventService | None = None

    @classmethod
    def from_api_secret(cls, api_secret: str, **kwargs: Any) -> AsyncBastionZero:
        headers = dict(kwargs.pop("headers", None) or {})
        headers[API_SECRET_HEADER] = _validate_api_secret(api_secret)
        return cls(headers=headers, **kwargs)

    @classmethod
    def from_env(
        cls,
        *,
        load_dotenv: bool = False,
        dotenv_path: str | os.PathLike[str] | None = None,
        **kwargs: Any,
    ) -> AsyncBastionZero:
        _maybe_load_dotenv(load_dotenv=load_dotenv, dotenv_path=dotenv_path)
        api_secret = os.getenv(API_SECRET_ENV, "").strip()
        if not api_secret:
            raise ConfigurationError(f"{API_SECRET_ENV} is not set")
        base_url = os.getenv(BASE_URL_ENV, "").strip()
        if base_url:
            kwargs.setdefault("base_url", base_url)
        return cls.from_api_secret(api_secret, **kwargs)

    @property
    def targets(self) -> AsyncTargetService:
        if self._targets is None:
            self._targets = AsyncTargetService(self._http)
        return self._targets

    @property
    def policies(self) -> AsyncPolicyService:
        if self._policies is None:
            self._policies = AsyncPolicyService(self._http)
        return self._policies

    @property
    def connections(self) -> AsyncConnectionService:
        if self._connections is None:
            self._connections = AsyncConnectionService(self._http)
        return self._connections

    @property
    def environments(self) -> AsyncEnvironmentService:
        if self._environments is None:
            self._environments = AsyncEnvironmentService(self._http)
        return self._environments

    @property
    def events(self) -> AsyncEventService:
        if self._events is None:
            self._events = AsyncEventService(self._http)
        return self._events

    async def __aenter__(self) -> AsyncBastionZero:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._http.close()

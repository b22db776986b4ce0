from __future__ import annotations

from collections.abc import Callable
from typing import Any

import click
import rich_click

from bastionzero.models.policies import ListPolicyOptions, Policy
from bastionzero.services.policies import PolicyService

from ..context import CLIContext
from ..decorators import destructive
from ..options import output_options
from ..runner import CommandOutput, run_command
from ..serialization import serialize_model_for_cli

# Kind -> PolicyService method suffix
_POLICY_KINDS = {
    "target-connect": "target_connect",
    "kubernetes": "kubernetes",
    "proxy": "proxy",
    "just-in-time": "jit",
    "session-recording": "session_recording",
    "organization-controls": "organization_controls",
}


def _policy_method(service: PolicyService, verb: str, kind: str) -> Callable[..., Any]:
    return getattr(service, f"{verb}_{_POLICY_KINDS[kind]}")


def _policy_row(kind: str, policy: Policy) -> dict[str, Any]:
    return {
        "id": policy.id,
        "name": policy.name,
        "kind": kind,
        "subjects": policy.subject_ids(),
        "groups": policy.group_names(),
        "description": policy.description,
    }


@click.group(name="policy", cls=rich_click.RichGroup)
def policy_group() -> None:
    """Policy commands."""


@policy_group.command(name="ls", cls=rich_click.RichCommand)
@click.option(
    "--kind",
    "kinds",
    type=click.Choice(list(_POLICY_KINDS)),
    multiple=True,
    help="Only list this kind of policy (repeatable). Default: all kinds.",
)
@click.option(
    "--subject",
    "subjects",
    multiple=True,
    help="Filter by subject ID or email (repeatable).",
)
@click.option("--group", "groups", multiple=True, help="Filter by group name (repeatable).")
@output_options
@click.pass_obj
def policy_ls(
    ctx: CLIContext,
    *,
    kinds: tuple[str, ...],
    subjects: tuple[str, ...],
    groups: tuple[str, ...],
) -> None:
    """List policies."""

    def fn(ctx: CLIContext, warnings: list[str]) -> CommandOutput:
        service = ctx.get_client().policies
        options = None
        if subjects or groups:
            options = ListPolicyOptions(
                subjects=",".join(subjects) or None,
                groups=",".join(groups) or None,
            )
        rows: list[dict[str, Any]] = []
        for kind in kinds or tuple(_POLICY_KINDS):
            for policy in _policy_method(service, "list", kind)(options):
                rows.append(_policy_row(kind, policy))
        return CommandOutput(data={"policies": rows}, warnings=warnings, api_called=True)

    run_command(ctx, command="policy ls", fn=fn)


@policy_group.command(name="get", cls=rich_click.RichCommand)
@click.argument("kind", type=click.Choice(list(_POLICY_KINDS)))
@click.argument("policy_id")
@output_options
@click.pass_obj
def policy_get(ctx: CLIContext, kind: str, policy_id: str) -> None:
    """Get a policy by kind and ID."""

    def fn(ctx: CLIContext, warnings: list[str]) -> CommandOutput:
        service = ctx.get_client().policies
        policy = _policy_method(service, "get", kind)(policy_id)
        return CommandOutput(
            data={"policy": serialize_model_for_cli(policy)},
            warnings=warnings,
            api_called=True,
        )

    run_command(ctx, command="policy get", fn=fn)


@policy_group.command(name="delete", cls=rich_click.RichCommand)
@click.argument("kind", type=click.Choice(list(_POLICY_KINDS)))
@click.argument("policy_id")
@output_options
@click.pass_obj
@destructive("Delete {kind} policy {policy_id}?")
def policy_delete(ctx: CLIContext, kind: str, policy_id: str) -> None:
    """Delete a policy."""

    def fn(ctx: CLIContext, warnings: list[str]) -> CommandOutput:
        service = ctx.get_client().policies
        _policy_method(service, "delete", kind)(policy_id)
        return CommandOutput(
            data={"deleted": {"kind": kind, "id": policy_id}},
            warnings=warnings,
            api_called=True,
        )

    run_command(ctx, command="policy delete", fn=fn)

from __future__ import annotations

from typing import Any

import click
import rich_click

from bastionzero.models.targets import AllTargetsResponse, ListAllTargetsOptions

from ..context import CLIContext
from ..options import output_options
from ..runner import CommandOutput, run_command
from ..serialization import serialize_model_for_cli

# Group attribute on AllTargetsResponse -> kind shown to users
_ACCESS_KINDS = {
    "shell": "shell",
    "ssh": "ssh",
    "file_transfer": "file-transfer",
    "rdp": "rdp",
    "sql_server": "sql-server",
    "db": "db",
    "kubernetes": "kubernetes",
    "web": "web",
}

_GET_KINDS = ("bzero", "kube", "web", "database", "dynamic-access")


@click.group(name="target", cls=rich_click.RichGroup)
def target_group() -> None:
    """Target commands."""


def _target_rows(targets: AllTargetsResponse, kinds: set[str] | None) -> list[dict[str, Any]]:
    rows: list[dict[str, Any]] = []
    for attr, kind in _ACCESS_KINDS.items():
        if kinds and kind not in kinds:
            continue
        for target in getattr(targets, attr):
            rows.append(
                {
                    "id": target.id,
                    "name": target.name,
                    "kind": kind,
                    "status": str(target.status) if target.status is not None else None,
                    "environmentName": target.environment_name,
                }
            )
    return rows


@target_group.command(name="ls", cls=rich_click.RichCommand)
@click.option(
    "--kind",
    "kinds",
    type=click.Choice(list(_ACCESS_KINDS.values())),
    multiple=True,
    help="Only show targets of this access kind (repeatable).",
)
@click.option("--all-in-org", is_flag=True, help="Admins: every target in the organization.")
@click.option("--user-email", type=str, default=None, help="Admins: targets this user can reach.")
@output_options
@click.pass_obj
def target_ls(
    ctx: CLIContext,
    *,
    kinds: tuple[str, ...],
    all_in_org: bool,
    user_email: str | None,
) -> None:
    """List targets the caller can access."""

    def fn(ctx: CLIContext, warnings: list[str]) -> CommandOutput:
        client = ctx.get_client()
        options = ListAllTargetsOptions(
            all_targets_in_org=all_in_org,
            user_email=user_email or "",
        )
        targets = client.targets.list_all(options)
        return CommandOutput(
            data={"targets": _target_rows(targets, set(kinds) or None)},
            warnings=warnings,
            api_called=True,
        )

    run_command(ctx, command="target ls", fn=fn)


@target_group.command(name="get", cls=rich_click.RichCommand)
@click.argument("target_id")
@click.option(
    "--type",
    "target_type",
    type=click.Choice(_GET_KINDS),
    default="bzero",
    show_default=True,
    help="Target type endpoint to query.",
)
@output_options
@click.pass_obj
def target_get(ctx: CLIContext, target_id: str, *, target_type: str) -> None:
    """Get a single target by ID."""

    def fn(ctx: CLIContext, warnings: list[str]) -> CommandOutput:
        targets = ctx.get_client().targets
        getters = {
            "bzero": targets.get_bzero,
            "kube": targets.get_kube,
            "web": targets.get_web,
            "database": targets.get_database,
            "dynamic-access": targets.get_dynamic_access_config,
        }
        target = getters[target_type](target_id)
        return CommandOutput(
            data={"target": serialize_model_for_cli(target)},
            warnings=warnings,
            api_called=True,
        )

    run_command(ctx, command="target get", fn=fn)

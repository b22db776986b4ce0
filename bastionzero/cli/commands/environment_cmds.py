from __future__ import annotations

from typing import Any

import click
import rich_click

from bastionzero.models.environments import CreateEnvironmentRequest, Environment

from ..context import CLIContext
from ..decorators import destructive
from ..options import output_options
from ..runner import CommandOutput, run_command
from ..serialization import serialize_model_for_cli


@click.group(name="environment", cls=rich_click.RichGroup)
def environment_group() -> None:
    """Environment commands."""


def _environment_row(env: Environment) -> dict[str, Any]:
    return {
        "id": env.id,
        "name": env.name,
        "isDefault": env.is_default,
        "targets": len(env.targets),
        "offlineCleanupTimeoutHours": env.offline_cleanup_timeout_hours,
    }


@environment_group.command(name="ls", cls=rich_click.RichCommand)
@output_options
@click.pass_obj
def environment_ls(ctx: CLIContext) -> None:
    """List environments."""

    def fn(ctx: CLIContext, warnings: list[str]) -> CommandOutput:
        environments = ctx.get_client().environments.list()
        return CommandOutput(
            data={"environments": [_environment_row(e) for e in environments]},
            warnings=warnings,
            api_called=True,
        )

    run_command(ctx, command="environment ls", fn=fn)


@environment_group.command(name="get", cls=rich_click.RichCommand)
@click.argument("environment_id")
@output_options
@click.pass_obj
def environment_get(ctx: CLIContext, environment_id: str) -> None:
    """Get an environment by ID."""

    def fn(ctx: CLIContext, warnings: list[str]) -> CommandOutput:
        env = ctx.get_client().environments.get(environment_id)
        return CommandOutput(
            data={"environment": serialize_model_for_cli(env)},
            warnings=warnings,
            api_called=True,
        )

    run_command(ctx, command="environment get", fn=fn)


@environment_group.command(name="create", cls=rich_click.RichCommand)
@click.option("--name", required=True, help="Environment name.")
@click.option("--description", default=None, help="Free-form description.")
@click.option(
    "--offline-cleanup-timeout-hours",
    type=click.IntRange(min=0),
    default=0,
    show_default=True,
    help="Hours before offline targets are removed (0 disables cleanup).",
)
@output_options
@click.pass_obj
def environment_create(
    ctx: CLIContext,
    *,
    name: str,
    description: str | None,
    offline_cleanup_timeout_hours: int,
) -> None:
    """Create an environment."""

    def fn(ctx: CLIContext, warnings: list[str]) -> CommandOutput:
        created = ctx.get_client().environments.create(
            CreateEnvironmentRequest(
                name=name,
                description=description,
                offline_cleanup_timeout_hours=offline_cleanup_timeout_hours,
            )
        )
        return CommandOutput(
            data={"environment": {"id": created.id, "name": name}},
            warnings=warnings,
            api_called=True,
        )

    run_command(ctx, command="environment create", fn=fn)


@environment_group.command(name="delete", cls=rich_click.RichCommand)
@click.argument("environment_id")
@output_options
@click.pass_obj
@destructive("Delete environment {environment_id}?")
def environment_delete(ctx: CLIContext, environment_id: str) -> None:
    """Delete an environment."""

    def fn(ctx: CLIContext, warnings: list[str]) -> CommandOutput:
        ctx.get_client().environments.delete(environment_id)
        return CommandOutput(
            data={"deleted": {"id": environment_id}},
            warnings=warnings,
            api_called=True,
        )

    run_command(ctx, command="environment delete", fn=fn)

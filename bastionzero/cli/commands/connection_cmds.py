from __future__ import annotations

import click
import rich_click

from ..context import CLIContext
from ..options import output_options
from ..runner import CommandOutput, run_command


@click.group(name="connection", cls=rich_click.RichGroup)
def connection_group() -> None:
    """Connection commands."""


@connection_group.command(name="close", cls=rich_click.RichCommand)
@click.argument("connection_id")
@output_options
@click.pass_obj
def connection_close(ctx: CLIContext, connection_id: str) -> None:
    """Close a connection of any kind."""

    def fn(ctx: CLIContext, warnings: list[str]) -> CommandOutput:
        ctx.get_client().connections.close(connection_id)
        return CommandOutput(
            data={"closed": {"id": connection_id}},
            warnings=warnings,
            api_called=True,
        )

    run_command(ctx, command="connection close", fn=fn)

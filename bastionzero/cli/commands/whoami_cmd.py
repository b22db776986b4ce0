from __future__ import annotations

import click
import rich_click

from ..context import CLIContext
from ..options import output_options
from ..runner import CommandOutput, run_command
from ..serialization import serialize_model_for_cli


@click.command(name="whoami", cls=rich_click.RichCommand)
@output_options
@click.pass_obj
def whoami_cmd(ctx: CLIContext) -> None:
    """Show the subject the API secret authenticates as."""

    def fn(ctx: CLIContext, warnings: list[str]) -> CommandOutput:
        client = ctx.get_client()
        me = client.subjects.me()
        return CommandOutput(
            data={"subject": serialize_model_for_cli(me)},
            warnings=warnings,
            api_called=True,
        )

    run_command(ctx, command="whoami", fn=fn)

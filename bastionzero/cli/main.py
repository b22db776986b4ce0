from __future__ import annotations

from pathlib import Path

import click
import rich_click

import bastionzero

from .context import OUTPUT_FORMATS, CLIContext
from .logging import configure_logging, restore_logging


@click.group(
    name="bastionzero",
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
    cls=rich_click.RichGroup,
)
@click.option(
    "--output",
    type=click.Choice(OUTPUT_FORMATS),
    default="table",
)
@click.option("--json", "json_flag", is_flag=True, help="Alias for --output json.")
@click.option("-q", "--quiet", is_flag=True, help="Suppress non-essential stderr output.")
@click.option("-v", "verbose", count=True, help="Increase verbosity (-v, -vv).")
@click.option("--dotenv/--no-dotenv", default=False, help="Opt-in .env loading.")
@click.option(
    "--env-file",
    type=click.Path(dir_okay=False),
    default=".env",
)
@click.option(
    "--api-secret-file",
    type=str,
    default=None,
    help="Read the API secret from a file (or '-' for stdin).",
)
@click.option("--timeout", type=float, default=None, help="Per-request timeout in seconds.")
@click.option(
    "--trace",
    is_flag=True,
    help="Trace request/response/error events to stderr (query strings stripped).",
)
@click.option("--base-url", type=str, default=None, help="Override the API base URL.")
@click.version_option(version=bastionzero.__version__, prog_name="bastionzero")
@click.pass_context
def cli(
    click_ctx: click.Context,
    *,
    output: str,
    json_flag: bool,
    quiet: bool,
    verbose: int,
    dotenv: bool,
    env_file: str,
    api_secret_file: str | None,
    timeout: float | None,
    trace: bool,
    base_url: str | None,
) -> None:
    if click_ctx.invoked_subcommand is None:
        # No args: show help; no network calls.
        click.echo(click_ctx.get_help())
        raise click.exceptions.Exit(0)

    click_ctx.obj = CLIContext(
        output="json" if json_flag else output,  # type: ignore[arg-type]
        quiet=quiet,
        verbosity=verbose,
        dotenv=dotenv,
        env_file=Path(env_file),
        api_secret_file=api_secret_file,
        timeout=timeout,
        trace=trace,
        base_url=base_url,
    )
    click_ctx.call_on_close(click_ctx.obj.close)

    previous_logging = configure_logging(verbosity=verbose, quiet=quiet)
    click_ctx.call_on_close(lambda: restore_logging(previous_logging))


# Register commands
from .commands.connection_cmds import connection_group as _connection_group  # noqa: E402
from .commands.environment_cmds import environment_group as _environment_group  # noqa: E402
from .commands.event_cmds import event_group as _event_group  # noqa: E402
from .commands.policy_cmds import policy_group as _policy_group  # noqa: E402
from .commands.target_cmds import target_group as _target_group  # noqa: E402
from .commands.version_cmd import version_cmd as _version_cmd  # noqa: E402
from .commands.whoami_cmd import whoami_cmd as _whoami_cmd  # noqa: E402

cli.add_command(_version_cmd)
cli.add_command(_whoami_cmd)
cli.add_command(_target_group)
cli.add_command(_policy_group)
cli.add_command(_environment_group)
cli.add_command(_connection_group)
cli.add_command(_event_group)

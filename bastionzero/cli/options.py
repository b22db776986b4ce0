"""Per-command `--json` / `--output`, which override the global output format."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

import click

from .context import OUTPUT_FORMATS, CLIContext

F = TypeVar("F", bound=Callable[..., object])


def _apply_output(ctx: click.Context, param: click.Parameter, value: Any) -> Any:
    if not value or not isinstance(ctx.obj, CLIContext):
        return value
    ctx.obj.use_output("json" if param.name == "json" else value)
    return value


def output_options(fn: F) -> F:
    """Add `--output FORMAT` and its `--json` shorthand to a command."""
    fn = click.option(
        "--output",
        type=click.Choice(OUTPUT_FORMATS),
        default=None,
        help="Output format for this command.",
        callback=_apply_output,
        expose_value=False,
    )(fn)
    return click.option(
        "--json",
        is_flag=True,
        help="Shorthand for --output json.",
        callback=_apply_output,
        expose_value=False,
    )(fn)

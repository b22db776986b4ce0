"""Command decorators shared by the CLI command groups."""

from __future__ import annotations

import functools
from collections.abc import Callable
from typing import Any, TypeVar

import click

F = TypeVar("F", bound=Callable[..., Any])


def destructive(prompt: str) -> Callable[[F], F]:
    """Mark a command as destructive (data loss possible).

    Adds a `--yes/-y` flag. Without it the user is asked `prompt`, formatted
    with the command's parameters, and a "no" aborts before any API call.

    Usage:
        @policy_group.command(name="delete")
        @click.argument("policy_id")
        @click.pass_obj
        @destructive("Delete policy {policy_id}?")
        def policy_delete(ctx: CLIContext, policy_id: str) -> None:
            ...
    """

    def decorator(fn: F) -> F:
        @functools.wraps(fn)
        def wrapper(*args: Any, yes: bool, **kwargs: Any) -> Any:
            if not yes:
                click.confirm(prompt.format(**kwargs), abort=True)
            return fn(*args, **kwargs)

        option = click.option("--yes", "-y", is_flag=True, help="Skip confirmation prompt.")
        return option(wrapper)  # type: ignore[return-value]

    return decorator

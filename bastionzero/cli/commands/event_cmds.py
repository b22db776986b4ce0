from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any, TypeVar

import click
import rich_click

from bastionzero.models.events import (
    CommandEventOptions,
    ConnectionEventOptions,
    SubjectEventOptions,
)

from ..context import CLIContext
from ..options import output_options
from ..runner import CommandOutput, run_command
from ..serialization import serialize_models_for_cli

F = TypeVar("F", bound=Callable[..., object])

_DATETIME = click.DateTime(formats=["%Y-%m-%d", "%Y-%m-%dT%H:%M:%S", "%Y-%m-%dT%H:%M:%SZ"])


def _as_utc(value: datetime | None) -> datetime | None:
    # Command line timestamps are read as UTC
    if value is None:
        return None
    return value.replace(tzinfo=timezone.utc)


def _common_event_options(fn: F) -> F:
    fn = click.option("--since", type=_DATETIME, default=None, help="Start time (UTC).")(fn)
    fn = click.option("--until", type=_DATETIME, default=None, help="End time (UTC).")(fn)
    fn = click.option(
        "--count", type=click.IntRange(min=1), default=None, help="Maximum events to return."
    )(fn)
    fn = click.option(
        "--subject-id", "subject_ids", multiple=True, help="Filter by subject ID (repeatable)."
    )(fn)
    return fn


def _session_event_options(fn: F) -> F:
    fn = click.option(
        "--target-id", "target_ids", multiple=True, help="Filter by target ID (repeatable)."
    )(fn)
    fn = click.option(
        "--connection-id",
        "connection_ids",
        multiple=True,
        help="Filter by connection ID (repeatable).",
    )(fn)
    return fn


def _filters(**kwargs: Any) -> dict[str, Any]:
    """Drop filters the user did not pass (None or empty repeatable options)."""
    return {k: (list(v) if isinstance(v, tuple) else v) for k, v in kwargs.items() if v}


@click.group(name="event", cls=rich_click.RichGroup)
def event_group() -> None:
    """Audit event commands."""


@event_group.command(name="subject", cls=rich_click.RichCommand)
@_common_event_options
@output_options
@click.pass_obj
def event_subject(
    ctx: CLIContext,
    *,
    since: datetime | None,
    until: datetime | None,
    count: int | None,
    subject_ids: tuple[str, ...],
) -> None:
    """List subject events (logins, API calls)."""

    def fn(ctx: CLIContext, warnings: list[str]) -> CommandOutput:
        options = SubjectEventOptions(
            **_filters(
                start_timestamp=_as_utc(since),
                end_timestamp=_as_utc(until),
                event_count=count,
                subject_ids=subject_ids,
            )
        )
        events = ctx.get_client().events.list_subject_events(options)
        return CommandOutput(
            data={"events": serialize_models_for_cli(events)},
            warnings=warnings,
            api_called=True,
        )

    run_command(ctx, command="event subject", fn=fn)


@event_group.command(name="connection", cls=rich_click.RichCommand)
@_common_event_options
@_session_event_options
@output_options
@click.pass_obj
def event_connection(
    ctx: CLIContext,
    *,
    since: datetime | None,
    until: datetime | None,
    count: int | None,
    subject_ids: tuple[str, ...],
    target_ids: tuple[str, ...],
    connection_ids: tuple[str, ...],
) -> None:
    """List connection events."""

    def fn(ctx: CLIContext, warnings: list[str]) -> CommandOutput:
        options = ConnectionEventOptions(
            **_filters(
                start_timestamp=_as_utc(since),
                end_timestamp=_as_utc(until),
                event_count=count,
                subject_ids=subject_ids,
                target_ids=target_ids,
                connection_ids=connection_ids,
            )
        )
        events = ctx.get_client().events.list_connection_events(options)
        return CommandOutput(
            data={"events": serialize_models_for_cli(events)},
            warnings=warnings,
            api_called=True,
        )

    run_command(ctx, command="event connection", fn=fn)


@event_group.command(name="command", cls=rich_click.RichCommand)
@_common_event_options
@_session_event_options
@click.option("--search", default=None, help="Only commands containing this text.")
@output_options
@click.pass_obj
def event_command(
    ctx: CLIContext,
    *,
    since: datetime | None,
    until: datetime | None,
    count: int | None,
    subject_ids: tuple[str, ...],
    target_ids: tuple[str, ...],
    connection_ids: tuple[str, ...],
    search: str | None,
) -> None:
    """List shell command events."""

    def fn(ctx: CLIContext, warnings: list[str]) -> CommandOutput:
        options = CommandEventOptions(
            **_filters(
                start_timestamp=_as_utc(since),
                end_timestamp=_as_utc(until),
                event_count=count,
                subject_ids=subject_ids,
                target_ids=target_ids,
                connection_ids=connection_ids,
                command_search=search,
            )
        )
        events = ctx.get_client().events.list_command_events(options)
        return CommandOutput(
            data={"events": serialize_models_for_cli(events)},
            warnings=warnings,
            api_called=True,
        )

    run_command(ctx, command="event command", fn=fn)

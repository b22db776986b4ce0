from __future__ import annotations

import json
import re
import sys
from dataclasses import dataclass
from typing import Any, cast

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .results import CommandResult


@dataclass(frozen=True, slots=True)
class RenderSettings:
    output: str  # "table" | "json"
    quiet: bool
    verbosity: int


def _error_title(error_type: str) -> str:
    mapping = {
        "usage_error": "Usage error",
        "config_error": "Configuration error",
        "validation_error": "Validation error",
        "auth_error": "Authentication error",
        "forbidden": "Permission denied",
        "not_found": "Not found",
        "server_error": "Server error",
        "network_error": "Network error",
        "timeout": "Timeout",
        "api_error": "API error",
        "internal_error": "Internal error",
    }
    return mapping.get((error_type or "").strip(), "Error")


def _render_error_details(
    *,
    stderr: Console,
    command: str,
    error_type: str,
    message: str,
    hint: str | None,
    details: dict[str, Any] | None,
    settings: RenderSettings,
) -> None:
    if settings.quiet:
        return

    if hint:
        stderr.print(f"Hint: {hint}")

    if error_type == "usage_error":
        # Credential problems are not fixed by --help.
        if "api secret" not in message.lower() and not hint:
            stderr.print(f"Hint: run `bastionzero {command} --help`")
        return

    if details and error_type == "validation_error":
        errors = details.get("errors")
        if isinstance(errors, dict):
            table = Table(show_header=True, header_style="bold")
            table.add_column("field")
            table.add_column("errors")
            for prop, msgs in errors.items():
                table.add_row(str(prop), ", ".join(str(m) for m in cast(list[Any], msgs)))
            stderr.print(table)
        return

    if details and settings.verbosity >= 2:
        stderr.print(Panel.fit(Text(json.dumps(details, ensure_ascii=False, indent=2))))


_CAMEL_BREAK_RE = re.compile(r"(?<!^)(?=[A-Z])")


def _humanize_title(value: str) -> str:
    raw = (value or "").strip()
    if not raw:
        return ""
    raw = raw.replace("_", " ").replace("-", " ").strip()
    raw = _CAMEL_BREAK_RE.sub(" ", raw)
    raw = " ".join(raw.split())
    return raw[:1].upper() + raw[1:]


def _format_scalar_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, list):
        if all(isinstance(v, str) for v in value):
            return ", ".join(value)
        return f"list ({len(value):,} items)"
    if isinstance(value, dict):
        return f"object ({len(value):,} keys)"
    return str(value)


def _table_from_rows(rows: list[dict[str, Any]]) -> Table:
    table = Table(show_header=True, header_style="bold")
    if not rows:
        table.add_column("result")
        table.add_row("No results")
        return table

    # Union of keys in first-seen order: rows omit unset fields.
    columns: list[str] = []
    for row in rows:
        for key in row:
            if key not in columns:
                columns.append(key)
    for col in columns:
        table.add_column(col)
    for row in rows:
        table.add_row(*[_format_scalar_value(row.get(c)) for c in columns])
    return table


def _kv_table(obj: dict[str, Any]) -> Table:
    table = Table(show_header=True, header_style="bold")
    table.add_column("field")
    table.add_column("value")
    for k, v in obj.items():
        table.add_row(str(k), _format_scalar_value(v))
    return table


def _render_section(*, title: str | None, value: Any, verbosity: int) -> Any:
    renderables: list[Any] = []
    if title:
        renderables.append(Text(_humanize_title(title), style="bold"))

    if isinstance(value, list) and all(isinstance(x, dict) for x in value):
        renderables.append(_table_from_rows(cast(list[dict[str, Any]], value)))
    elif isinstance(value, dict):
        renderables.append(_kv_table(value))
        # Nested collections only at higher verbosity to avoid noise.
        if verbosity >= 1:
            for k, v in value.items():
                if isinstance(v, dict) or (
                    isinstance(v, list) and v and all(isinstance(x, dict) for x in v)
                ):
                    renderables.append(_render_section(title=k, value=v, verbosity=verbosity))
    else:
        renderables.append(_kv_table({"value": value}))

    return Group(*renderables) if len(renderables) > 1 else renderables[0]


def _render_human_data(*, data: Any, verbosity: int) -> Any:
    if isinstance(data, list):
        return _render_section(title=None, value=data, verbosity=verbosity)

    if isinstance(data, dict):
        sections = [
            _render_section(title=str(k), value=v, verbosity=verbosity) for k, v in data.items()
        ]
        return Group(*sections) if sections else Panel.fit(Text("OK"))

    return Panel.fit(Text(str(data) if data is not None else "OK"))


def render_result(result: CommandResult, *, settings: RenderSettings) -> int:
    stdout = Console(file=sys.stdout, force_terminal=False)
    stderr = Console(file=sys.stderr, force_terminal=False)

    if settings.output == "json":
        payload = result.model_dump(by_alias=True, mode="json")
        sys.stdout.write(json.dumps(payload, ensure_ascii=False) + "\n")
        return 0

    if not result.ok:
        if result.error is not None:
            title = _error_title(result.error.type)
            stderr.print(f"{title}: {result.error.message}")
            _render_error_details(
                stderr=stderr,
                command=result.command,
                error_type=result.error.type,
                message=result.error.message,
                hint=result.error.hint,
                details=result.error.details,
                settings=settings,
            )
        else:
            stderr.print("Error")
        return 0

    renderable: Any
    if result.command == "version" and isinstance(result.data, dict):
        renderable = Text(result.data.get("version", ""), style="bold")
    elif result.command == "whoami" and isinstance(result.data, dict):
        subject = result.data.get("subject", {})
        if not isinstance(subject, dict):
            subject = {}
        body = f"{subject.get('email', '')}\n{subject.get('type', '')}"
        if subject.get("isAdmin"):
            body += " (admin)"
        renderable = Panel.fit(Text(body.strip()), title="BastionZero")
    else:
        renderable = _render_human_data(data=result.data, verbosity=settings.verbosity)

    stdout.print(renderable)
    return 0

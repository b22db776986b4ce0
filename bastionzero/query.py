"""
Options-to-query-string encoding.

Option models declare their query keys as field aliases. Empty values are
omitted unless the field name is listed in the model's `keep_empty` class variable.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timezone
from enum import Enum
from typing import Any, ClassVar
from urllib.parse import urlencode, urlsplit, urlunsplit

from pydantic import BaseModel, ConfigDict


def format_timestamp(value: datetime) -> str:
    """Format a datetime as RFC 3339 in UTC (`2006-01-02T15:04:05Z`)."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


class QueryOptions(BaseModel):
    """Base class for models that are encoded into URL query parameters."""

    model_config = ConfigDict(
        populate_by_name=True,
        extra="forbid",
        frozen=True,
    )

    # Fields that are always sent, even when empty
    keep_empty: ClassVar[frozenset[str]] = frozenset()


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, bool):
        return value is False
    if isinstance(value, (int, float)):
        return value == 0
    if isinstance(value, (str, bytes)):
        return len(value) == 0
    if isinstance(value, (list, tuple, set, frozenset)):
        return len(value) == 0
    return False


def _format_scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, datetime):
        return format_timestamp(value)
    return str(value)


def encode_query(options: QueryOptions) -> list[tuple[str, str]]:
    """Encode an options model into sorted `(key, value)` pairs."""
    pairs: list[tuple[str, str]] = []
    keep_empty = type(options).keep_empty
    for name, field in type(options).model_fields.items():
        value = getattr(options, name)
        if value is None:
            continue
        if _is_empty(value) and name not in keep_empty:
            continue
        key = field.alias or name
        if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
            pairs.extend((key, _format_scalar(item)) for item in value)
        elif isinstance(value, (set, frozenset)):
            pairs.extend((key, _format_scalar(item)) for item in sorted(value, key=str))
        else:
            pairs.append((key, _format_scalar(value)))
    # sort by key only so repeated values keep their order
    pairs.sort(key=lambda kv: kv[0])
    return pairs


def add_options(url: str, options: QueryOptions | None) -> str:
    """
    Replace the query string of `url` with the encoded `options`.

    `None` leaves the URL untouched.
    """
    if options is None:
        return url
    parts = urlsplit(url)
    query = urlencode(encode_query(options))
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


__all__ = ["QueryOptions", "add_options", "encode_query", "format_timestamp"]

"""
Logging setup for the CLI.

Verbosity maps to levels (`-v` INFO, `-vv` DEBUG). Every handler installed here
carries a filter that masks the active API secret.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass

_REDACTED = "[REDACTED]"
_redaction_secret: str | None = None


def set_redaction_api_key(secret: str | None) -> None:
    """Register the secret to mask in log output (None clears it)."""
    global _redaction_secret
    _redaction_secret = secret or None


class RedactingFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        secret = _redaction_secret
        if not secret:
            return True
        message = record.getMessage()
        if secret in message:
            record.msg = message.replace(secret, _REDACTED)
            record.args = None
        return True


@dataclass(frozen=True, slots=True)
class PreviousLoggingState:
    level: int
    handlers: list[logging.Handler]


def _level_for_verbosity(verbosity: int) -> int:
    if verbosity >= 2:
        return logging.DEBUG
    if verbosity == 1:
        return logging.INFO
    return logging.WARNING


def configure_logging(*, verbosity: int, quiet: bool = False) -> PreviousLoggingState:
    root = logging.getLogger()
    previous = PreviousLoggingState(level=root.level, handlers=list(root.handlers))

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    handler.addFilter(RedactingFilter())

    root.handlers = [handler]
    root.setLevel(logging.ERROR if quiet else _level_for_verbosity(verbosity))
    return previous


def restore_logging(previous: PreviousLoggingState) -> None:
    root = logging.getLogger()
    root.handlers = previous.handlers
    root.setLevel(previous.level)
    set_redaction_api_key(None)

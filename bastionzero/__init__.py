"""
BastionZero Python SDK.

A typed client for the BastionZero REST API.

Example:
    ```python
    from bastionzero import BastionZero

    with BastionZero.from_env() as client:
        for target in client.targets.list_all().all():
            print(target.name, target.status)
    ```
"""

from __future__ import annotations

from ._version import __version__
from .client import AsyncBastionZero, BastionZero
from .exceptions import (
    BastionZeroError,
    ConfigurationError,
    ErrorResponse,
    is_api_error_status_code,
)
from .hooks import ErrorInfo, RequestInfo, ResponseInfo
from .query import QueryOptions, add_options, encode_query

__all__ = [
    "__version__",
    # Clients
    "BastionZero",
    "AsyncBastionZero",
    # Exceptions
    "BastionZeroError",
    "ConfigurationError",
    "ErrorResponse",
    "is_api_error_status_code",
    # Hooks
    "RequestInfo",
    "ResponseInfo",
    "ErrorInfo",
    # Query options
    "QueryOptions",
    "add_options",
    "encode_query",
]

"""
Base model shared by all API data structures.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BastionZeroModel(BaseModel):
    """
    Base class for BastionZero request and response models.

    JSON keys are camelCase, attributes snake_case. Unknown keys are ignored so
    newer API versions keep decoding.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        validate_assignment=True,
    )

    def to_request(self) -> dict[str, Any]:
        """Dump as a JSON request body, omitting unset optional fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


M = TypeVar("M", bound=BaseModel)


def validate_list(model: type[M], data: Any) -> list[M]:
    """Validate a JSON array response; a missing body yields an empty list."""
    return [model.model_validate(item) for item in data or []]


class Port(BastionZeroModel):
    value: int | None = None


__all__ = ["BastionZeroModel", "Port", "validate_list"]

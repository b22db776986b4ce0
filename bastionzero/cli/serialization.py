from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel


def serialize_model_for_cli(model: BaseModel) -> dict[str, Any]:
    """JSON-safe camelCase dict for a response model, dropping unset optionals."""
    return model.model_dump(by_alias=True, mode="json", exclude_none=True)


def serialize_models_for_cli(models: Iterable[BaseModel]) -> list[dict[str, Any]]:
    return [serialize_model_for_cli(m) for m in models]

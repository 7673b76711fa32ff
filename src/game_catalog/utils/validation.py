"""Helpers for turning validation failures into InvalidInput errors."""

from collections.abc import Mapping, Sequence
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from game_catalog.errors import InvalidInputError

ModelT = TypeVar("ModelT", bound=BaseModel)


def validation_message(errors: Sequence[Mapping[str, Any]]) -> str:
    """Build a human-readable message from pydantic/FastAPI error details."""
    if not errors:
        return "Invalid input"
    if any(error.get("type") == "missing" for error in errors):
        return "Missing fields"

    first = errors[0]
    # Drop the request location ("body", "query", ...) from the field path
    loc = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    field = ".".join(loc)
    msg = first.get("msg", "Invalid value")
    return f"{field}: {msg}" if field else msg


def parse_input(model: type[ModelT], data: Mapping[str, Any]) -> ModelT:
    """Validate ``data`` against ``model``.

    Raises:
        InvalidInputError: If validation fails
    """
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise InvalidInputError(validation_message(e.errors())) from e

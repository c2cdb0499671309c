"""Schema validation returning an explicit Ok / Err result instead of raising."""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)

# Location prefixes FastAPI adds to request errors; not part of the field path.
_REQUEST_LOCATIONS = frozenset({"body", "path", "query", "header", "cookie"})


@dataclass(frozen=True)
class FieldError:
    """One validation failure: dotted field path and a human-readable message."""

    field: str
    message: str


@dataclass(frozen=True)
class Ok(Generic[ModelT]):
    data: ModelT


@dataclass(frozen=True)
class Err:
    errors: list[FieldError]


ValidationResult = Ok[ModelT] | Err


def field_errors(errors: Iterable[dict[str, Any]]) -> list[FieldError]:
    """Convert pydantic/FastAPI error dicts into FieldError entries."""
    result: list[FieldError] = []
    for error in errors:
        loc: Sequence[Any] = error.get("loc", ())
        if loc and loc[0] in _REQUEST_LOCATIONS:
            loc = loc[1:]
        field = ".".join(str(part) for part in loc) or "body"
        result.append(FieldError(field=field, message=error.get("msg", "Invalid value")))
    return result


def validate(schema: type[ModelT], payload: Any) -> ValidationResult:
    """Validate payload against schema; never raises for invalid input."""
    try:
        return Ok(schema.model_validate(payload))
    except ValidationError as e:
        return Err(field_errors(e.errors()))


def format_validation_errors(errors: list[FieldError]) -> list[dict[str, str]]:
    """Serializable form used in 400 responses."""
    return [{"field": e.field, "message": e.message} for e in errors]

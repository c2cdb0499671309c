"""Route-side helper that turns an Err validation result into a 400."""

from typing import Any, TypeVar

from pydantic import BaseModel

from acquisitions.core.errors import ValidationFailed
from acquisitions.services.validation import Err, format_validation_errors, validate

ModelT = TypeVar("ModelT", bound=BaseModel)


def require_valid(schema: type[ModelT], payload: Any) -> ModelT:
    """Return validated data or raise ValidationFailed with field-level details."""
    result = validate(schema, payload)
    if isinstance(result, Err):
        raise ValidationFailed(format_validation_errors(result.errors))
    return result.data

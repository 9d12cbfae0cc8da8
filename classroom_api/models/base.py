"""
Shared pieces of the entity schemas.

The schemas are pydantic models used purely as validators: a candidate record
goes in, a cleaned camelCase dict (ready for MongoDB) comes out, or a
ValidationError listing every offending field is raised.
"""

from datetime import date, datetime, time, timezone
from enum import Enum
from typing import Dict, Mapping, Type

from pydantic import BaseModel, ConfigDict, ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from classroom_api.core import errors

EMAIL_PATTERN = r"^[A-Za-z0-9_]+([.-]?[A-Za-z0-9_]+)*@[A-Za-z0-9_]+([.-]?[A-Za-z0-9_]+)*(\.[A-Za-z0-9_]{2,3})+$"
EMAIL_MESSAGE = "Please add a valid email"


class ValidationMode(str, Enum):
    create = "create"
    update = "update"


class EntitySchema(BaseModel):
    """Base for entity schemas: camelCase on the wire, strings trimmed, unknown keys dropped."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
    )


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def coerce_datetime(value):
    """Accept plain dates (date objects or YYYY-MM-DD) as midnight UTC."""
    if isinstance(value, str) and len(value) == 10:
        try:
            value = date.fromisoformat(value)
        except ValueError:
            return value
    if isinstance(value, date) and not isinstance(value, datetime):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    return value


def _error_message(err: dict, field: str, required_messages: Mapping[str, str]) -> str:
    kind = err["type"]
    if kind in ("missing", "string_too_short", "too_short") and field in required_messages:
        return required_messages[field]
    if kind == "string_pattern_mismatch" and field == "email":
        return EMAIL_MESSAGE
    if kind == "value_error" and "error" in err.get("ctx", {}):
        return str(err["ctx"]["error"])
    return err["msg"]


def collect_field_errors(exc: PydanticValidationError, required_messages: Mapping[str, str]) -> Dict[str, str]:
    """Flatten pydantic errors into {field: reason}, first reason per top-level field."""
    field_errors = {}
    for err in exc.errors():
        field = str(err["loc"][0]) if err["loc"] else "body"
        if field not in field_errors:
            field_errors[field] = _error_message(err, field, required_messages)
    return field_errors


def run_validation(
    schema: Type[EntitySchema],
    candidate,
    mode: ValidationMode,
    required_messages: Mapping[str, str],
) -> dict:
    """
    Validate `candidate` against `schema`.

    Returns:
        Cleaned record keyed by camelCase field names. In update mode only the
        supplied fields are returned.

    Raises:
        errors.ValidationError with the per-field map.
    """
    if not isinstance(candidate, Mapping):
        raise errors.ValidationError({"body": "Request body must be a JSON object"})
    try:
        instance = schema.model_validate(dict(candidate))
    except PydanticValidationError as e:
        raise errors.ValidationError(collect_field_errors(e, required_messages)) from e

    if mode == ValidationMode.update:
        return instance.model_dump(by_alias=True, exclude_unset=True)
    return instance.model_dump(by_alias=True, exclude_none=True)

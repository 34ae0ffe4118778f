"""Reusable pydantic field types for request and response schemas."""

from datetime import datetime
from typing import Annotated, Any

from pydantic import AfterValidator, BeforeValidator
from pydantic_core import PydanticCustomError

from app.application.forms.json_text import JsonValue, json_text_codec
from app.domain.exceptions import TransformationFailedException
from app.shared.utils.datetime import ensure_utc


def _decode_json_text(value: Any) -> Any:
    """Form text -> structured value; already-structured input passes through."""
    if value is None or isinstance(value, str):
        try:
            return json_text_codec.decode(value)
        except TransformationFailedException as e:
            raise PydanticCustomError("invalid_json", "{reason}", {"reason": e.message}) from e
    return value


# JSON column edited as text: "" / whitespace -> None, malformed -> field error "invalid_json".
JsonTextField = Annotated[JsonValue, BeforeValidator(_decode_json_text)]

# Naive datetimes (frontends, SQLite) are read as UTC.
UtcDatetime = Annotated[datetime, AfterValidator(ensure_utc)]


def reject_nulls(data: Any, fields: tuple[str, ...]) -> Any:
    """Partial-update guard: NOT NULL columns may be omitted but not sent as null."""
    if isinstance(data, dict):
        nulls = [k for k in fields if k in data and data[k] is None]
        if nulls:
            raise ValueError(f"{', '.join(nulls)} cannot be null")
    return data

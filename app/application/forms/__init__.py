"""Form helpers: converters between persisted values and editable text."""

from app.application.forms.json_text import JsonTextCodec, JsonValue, json_text_codec

__all__ = ["JsonTextCodec", "JsonValue", "json_text_codec"]

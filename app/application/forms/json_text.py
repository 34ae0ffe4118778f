"""Two-way conversion between JSON columns and editable form text.

Encode renders a mapping as indented JSON for a textarea; decode parses the
submitted text back. The two directions are asymmetric: encode only
renders mappings (everything else becomes an empty field) while decode
returns whatever JSON the text holds.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any, TypeAlias

from app.domain.exceptions import TransformationFailedException

JsonValue: TypeAlias = dict[str, Any] | list[Any] | str | int | float | bool | None


def _reject_constant(token: str) -> Any:
    """NaN / Infinity are not JSON; json.loads accepts them unless told otherwise."""
    raise ValueError(f"Unexpected token {token}")


class JsonTextCodec:
    """Stateless JSON <-> text bridge for form fields bound to JSON columns.

    One instance can be shared across requests.
    """

    indent: int = 4

    def encode(self, value: Any) -> str:
        """Render a mapping as pretty-printed JSON; any other value renders as "".

        Never raises. Forward slashes are emitted as-is (no ``\\/``).
        """
        if value is None or not isinstance(value, Mapping):
            return ""
        try:
            return json.dumps(
                dict(value), indent=self.indent, ensure_ascii=False, allow_nan=False
            )
        except (TypeError, ValueError):
            return ""

    def decode(self, text: str | None) -> JsonValue:
        """Parse form text into a structured value.

        Returns None for missing or blank input.

        Raises:
            TransformationFailedException: If the text is not valid JSON.
        """
        if text is None or text.strip() == "":
            return None
        try:
            return json.loads(text, parse_constant=_reject_constant)
        except ValueError as e:
            # json.JSONDecodeError subclasses ValueError; keep the parser diagnostic
            raise TransformationFailedException(f"Invalid JSON: {e}") from e


json_text_codec = JsonTextCodec()

"""Input sanitization utilities: HTML stripping and URL slugs."""

import re
import unicodedata
from typing import ClassVar

import nh3


class InputSanitizer:
    """
    Sanitize user inputs before they are stored or rendered.

    Use parameterized queries as the primary defense; these helpers
    add a second layer for display and validation.
    """

    ALLOWED_TAGS: ClassVar[list[str]] = []
    ALLOWED_ATTRIBUTES: ClassVar[dict[str, list[str]]] = {}
    SLUG_INVALID_PATTERN: ClassVar[re.Pattern[str]] = re.compile(r"[^a-z0-9]+")

    @classmethod
    def sanitize_html(cls, value: str) -> str:
        """Remove all HTML tags and sanitize with nh3 (strict by default).

        Args:
            value: Raw string that may contain HTML.

        Returns:
            Sanitized string safe for HTML display.
        """
        if not value:
            return value
        # nh3: tags = set of allowed tag names; attributes = dict[tag, set[attr]]
        attrs = {k: set(v) for k, v in cls.ALLOWED_ATTRIBUTES.items()}
        return nh3.clean(
            value,
            tags=set(cls.ALLOWED_TAGS),
            attributes=attrs,
        )

    @classmethod
    def slugify(cls, value: str) -> str:
        """Return a lowercase ASCII slug (words joined by '-').

        Accented characters are transliterated to their base letter; anything
        else outside [a-z0-9] collapses into a single hyphen.
        """
        normalized = unicodedata.normalize("NFKD", value or "")
        ascii_only = normalized.encode("ascii", "ignore").decode("ascii").lower()
        return cls.SLUG_INVALID_PATTERN.sub("-", ascii_only).strip("-")


def sanitize_input(value: str) -> str:
    """Strip HTML from a user-provided string."""
    return InputSanitizer.sanitize_html(value)


def slugify(value: str) -> str:
    """Build a URL slug from free text (e.g. an event title)."""
    return InputSanitizer.slugify(value)


COPY_SUFFIX = " (Copy)"


def copy_title(title: str, max_length: int = 255) -> str:
    """Title for a cloned event or duplicated agenda item, kept within the column length."""
    return title[: max_length - len(COPY_SUFFIX)] + COPY_SUFFIX

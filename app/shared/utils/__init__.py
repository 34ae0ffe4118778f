"""Shared utilities: datetime, generators, sanitization."""

from app.shared.utils.datetime import ensure_utc, format_timestamp, utc_now
from app.shared.utils.generators import (
    generate_cuid,
    generate_temporary_password,
    generate_verification_token,
)
from app.shared.utils.sanitization import (
    InputSanitizer,
    copy_title,
    sanitize_input,
    slugify,
)

__all__ = [
    "generate_cuid",
    "generate_temporary_password",
    "generate_verification_token",
    "utc_now",
    "ensure_utc",
    "format_timestamp",
    "InputSanitizer",
    "copy_title",
    "sanitize_input",
    "slugify",
]

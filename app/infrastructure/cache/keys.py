"""Cache key builders. Single place for key format (DRY).

Key components (display type, limit) must not contain CACHE_KEY_SEP to
avoid ambiguous or colliding keys.
"""

from app.core.constants import CACHE_KEY_SEP, CACHE_PREFIX_FEATURED


def _validate_key_component(value: str, name: str) -> None:
    """Raise ValueError if value contains the cache key separator.

    Args:
        value: String component used in a cache key.
        name: Name of the component (for error message).

    Raises:
        ValueError: If value contains CACHE_KEY_SEP.
    """
    if CACHE_KEY_SEP in value:
        raise ValueError(
            f"Cache key component {name!r} must not contain separator {CACHE_KEY_SEP!r}"
        )


def featured_active_key(display_type: str | None = None) -> str:
    """Cache key for the active featured-event list (optionally one display type)."""
    scope = display_type or "all"
    _validate_key_component(scope, "display_type")
    return f"{CACHE_PREFIX_FEATURED}{CACHE_KEY_SEP}active{CACHE_KEY_SEP}{scope}"


def featured_rotation_key(limit: int) -> str:
    """Cache key for the rotation list of the given size."""
    return f"{CACHE_PREFIX_FEATURED}{CACHE_KEY_SEP}rotation{CACHE_KEY_SEP}{limit}"


def featured_pattern() -> str:
    """SCAN pattern matching every featured-event key."""
    return f"{CACHE_PREFIX_FEATURED}{CACHE_KEY_SEP}*"

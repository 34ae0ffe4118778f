"""Core constants: cache key prefixes and shared literal values."""

# Cache key prefixes
CACHE_PREFIX_FEATURED = "featured_events"

# Delimiter for composite keys
CACHE_KEY_SEP = ":"

# Outbox queue used for message notifications
MESSAGE_NOTIFICATION_QUEUE = "messages"

# Roles granted on registration / account creation
DEFAULT_ATTENDEE_ROLES = ["ROLE_ATTENDEE"]
DEFAULT_ADMIN_ROLES = ["ROLE_ADMIN"]
SUPER_ADMIN_ROLE = "ROLE_SUPER_ADMIN"

# Featured event rendering defaults
DEFAULT_DISPLAY_SETTINGS = {
    "autoRotate": True,
    "rotationInterval": 5000,
    "showControls": True,
    "showIndicators": True,
    "fadeEffect": True,
}
DISABLED_ROTATION_SETTINGS = {
    "autoRotate": False,
    "rotationInterval": 5000,
    "showControls": False,
    "showIndicators": False,
    "fadeEffect": True,
}

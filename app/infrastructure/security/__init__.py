"""Security: password hashing for stored credentials."""

from app.infrastructure.security.password import (
    BcryptPasswordHasher,
    get_password_hash,
    verify_password,
)

__all__ = [
    "BcryptPasswordHasher",
    "get_password_hash",
    "verify_password",
]

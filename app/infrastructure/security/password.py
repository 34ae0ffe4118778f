"""Password hashing for administrator and attendee accounts (bcrypt).

Inputs are SHA-256 pre-hashed before bcrypt because bcrypt ignores bytes
past 72; the pre-hash keeps long passphrases significant.
"""

import base64
import hashlib

import bcrypt


def _prehash(password: str) -> bytes:
    return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())


def get_password_hash(password: str) -> str:
    """Return a salted bcrypt hash suitable for the `password` columns."""
    return bcrypt.hashpw(_prehash(password), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Return True if plain_password matches; malformed hashes never match."""
    try:
        return bool(
            bcrypt.checkpw(_prehash(plain_password), hashed_password.encode("utf-8"))
        )
    except (ValueError, TypeError):
        return False


class BcryptPasswordHasher:
    """IPasswordHasher backed by the module functions."""

    def hash(self, password: str) -> str:
        return get_password_hash(password)

    def verify(self, password: str, hashed: str) -> bool:
        return verify_password(password, hashed)

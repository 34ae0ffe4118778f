"""ID and token generators (CUID primary keys, verification tokens)."""

import secrets

from cuid2 import cuid_wrapper

cuid_generator = cuid_wrapper()

VERIFICATION_TOKEN_BYTES = 32


def generate_cuid() -> str:
    """Generate a collision-resistant unique identifier (CUID2).

    Returns:
        A new CUID string.
    """
    result = cuid_generator()
    if not isinstance(result, str):
        raise TypeError(
            f"Expected str from cuid_generator, got {type(result).__name__}"
        )
    return result


def generate_verification_token() -> str:
    """Return a 64-character hex token for e-mail verification links."""
    return secrets.token_hex(VERIFICATION_TOKEN_BYTES)


def generate_temporary_password() -> str:
    """Return a random 16-character hex password for imported accounts."""
    return secrets.token_hex(8)

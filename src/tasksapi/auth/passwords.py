"""
tasksapi.auth.passwords

Secret hashing helpers.

Responsibilities:
- Hash principal secrets with bcrypt (random salt embedded in the hash).
- Verify a presented secret against a stored hash without ever storing plaintext.
"""

from __future__ import annotations

import bcrypt

# bcrypt only looks at the first 72 bytes of its input.
_BCRYPT_MAX_BYTES = 72


def hash_secret(secret: str, *, rounds: int = 12) -> str:
    pw_bytes = secret.encode("utf-8")[:_BCRYPT_MAX_BYTES]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_secret(secret: str, secret_hash: str) -> bool:
    """
    Constant-time comparison of `secret` against a stored bcrypt hash.
    A corrupt stored hash verifies as False rather than raising.
    """

    try:
        return bcrypt.checkpw(
            secret.encode("utf-8")[:_BCRYPT_MAX_BYTES],
            secret_hash.encode("utf-8"),
        )
    except (ValueError, TypeError):
        return False


# --- Module Notes -----------------------------------------------------------
# Used by `db.repositories.principals.PrincipalRepo` on register (hash) and verify (check).

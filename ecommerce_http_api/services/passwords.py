# ecommerce_http_api/services/passwords.py

from __future__ import annotations

import bcrypt

# bcrypt only looks at the first 72 bytes of a password (and recent
# releases refuse longer input), so both hashing and verification truncate.
_BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


class PasswordHasher:
    """
    One-way password hashing backed by bcrypt.
    """

    def __init__(self, rounds: int = 12) -> None:
        self.rounds = rounds

    def hash(self, password: str) -> str:
        return bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=self.rounds)).decode("ascii")

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(_encode(password), password_hash.encode("ascii"))
        except ValueError:
            # Stored value is not a bcrypt hash.
            return False


__all__ = ["PasswordHasher"]

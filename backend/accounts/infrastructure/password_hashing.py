"""Password Hashing — bcrypt via passlib CryptContext.

Invariants:
    - hash() output is a bcrypt digest (<= 60 chars, fits password_digest column)
    - Passwords over 72 bytes or containing NUL raise InvalidPasswordError (400);
      bcrypt would otherwise truncate or reject them
    - Other hash() failures surface as HashingError, never as a process exit
    - verify() returns False for malformed digests instead of raising

Design Decisions:
    - passlib CryptContext over raw bcrypt calls: scheme upgrades become config
    - Rounds default to 10 (bcrypt's customary default cost); tests drop to 4
"""

import logging

from passlib.context import CryptContext
from passlib.exc import PasswordSizeError, PasswordValueError

from accounts.core.errors import HashingError, InvalidPasswordError

logger = logging.getLogger(__name__)


class HashService:
    """One-way password hashing and verification."""

    def __init__(self, rounds: int = 10):
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
            bcrypt__truncate_error=True,
        )

    def hash(self, plaintext: str) -> str:
        try:
            return self._context.hash(plaintext)
        except PasswordSizeError as e:
            raise InvalidPasswordError("longer than 72 bytes") from e
        except PasswordValueError as e:
            raise InvalidPasswordError("contains a NUL byte") from e
        except (ValueError, TypeError) as e:
            logger.error(f"Password hashing failed: {type(e).__name__}")
            raise HashingError(type(e).__name__) from e

    def verify(self, digest: str, plaintext: str) -> bool:
        try:
            return self._context.verify(plaintext, digest)
        except (ValueError, TypeError):
            return False

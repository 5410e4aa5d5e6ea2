"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId wraps int and is bounded to the unsigned 32-bit range
    - Validation modes encoded as an Enum; no raw string matching downstream
    - Column size limits are the single source for ORM model, migration and schemas

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enum: serializes to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", int)

USER_ID_MAX = 2**32 - 1


# ─── Column Limits ───────────────────────────────────────────────

NICKNAME_MAX_LENGTH = 255
EMAIL_MAX_LENGTH = 100
PASSWORD_DIGEST_MAX_LENGTH = 100

DEFAULT_LIST_LIMIT = 100


# ─── Enums ───────────────────────────────────────────────────────

class ValidationMode(str, Enum):
    """Which rule set validate_record applies."""
    CREATE = "create"
    UPDATE = "update"
    LOGIN = "login"

    @classmethod
    def parse(cls, action: "str | ValidationMode | None") -> "ValidationMode":
        """Case-insensitive lookup; anything unrecognised gets the create rules."""
        if isinstance(action, cls):
            return action
        try:
            return cls((action or "").strip().lower())
        except ValueError:
            return cls.CREATE


class UserField(str, Enum):
    """Fields that validation can report as missing."""
    NICKNAME = "nickname"
    PASSWORD = "password"
    EMAIL = "email"

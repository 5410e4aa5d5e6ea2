"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async only where implementations do IO (UserGateway); hashing, email
      syntax and the clock are synchronous leaves
"""

from collections.abc import Mapping
from datetime import datetime
from typing import Any, Protocol

from accounts.core.domain_types import UserId
from accounts.core.user_record import UserRecord


class UserGateway(Protocol):
    """Contract for user persistence, implemented by shell.

    get() returning None is the not-found signal; every other failure raises.
    """
    async def insert(self, record: UserRecord) -> UserRecord: ...
    async def fetch_all(self, limit: int) -> list[UserRecord]: ...
    async def get(self, user_id: UserId) -> UserRecord | None: ...
    async def update_columns(
        self, user_id: UserId, values: Mapping[str, Any],
    ) -> int: ...
    async def delete(self, user_id: UserId) -> int: ...


class PasswordHasher(Protocol):
    """One-way password hashing.

    hash() raises InvalidPasswordError for unhashable input, HashingError otherwise.
    """
    def hash(self, plaintext: str) -> str: ...
    def verify(self, digest: str, plaintext: str) -> bool: ...


class EmailSyntaxValidator(Protocol):
    """Format-only email check, no deliverability lookups."""
    def is_valid(self, email: str) -> bool: ...


class ClockSource(Protocol):
    """Supplies the current time."""
    def now(self) -> datetime: ...

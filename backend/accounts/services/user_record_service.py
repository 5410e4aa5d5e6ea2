"""User Record Service — normalize, validate, hash and persist user accounts.

Invariants:
    - Collaborators injected at construction; no process-wide DB handle
    - Plaintext passwords never reach the gateway: create/update hash first
    - Hashing failure raises HashingError, it never terminates the process;
      an unhashable password (over 72 bytes, NUL byte) raises InvalidPasswordError
    - update patches only password_digest, nickname, email, updated_at
    - find_by_id translates the gateway's None into UserNotFoundError
    - delete of a missing id returns 0, not an error
    - Backend errors propagate unmodified (DatabaseError from the gateway)

Design Decisions:
    - update re-hashes unconditionally: callers that keep the password must not
      resend the stored digest, or it gets hashed twice
    - update-mode validation mirrors create-mode validation on purpose
"""

import logging
from dataclasses import replace

from accounts.core.domain_types import DEFAULT_LIST_LIMIT, UserId, ValidationMode
from accounts.core.errors import UserNotFoundError
from accounts.core.repository_protocols import (
    ClockSource, EmailSyntaxValidator, PasswordHasher, UserGateway,
)
from accounts.core.user_record import UserRecord, normalize_record, validate_record

logger = logging.getLogger(__name__)


class UserRecordService:
    """Full lifecycle of a user record over an injected persistence gateway."""

    def __init__(
        self,
        gateway: UserGateway,
        hasher: PasswordHasher,
        email_validator: EmailSyntaxValidator,
        clock: ClockSource,
        list_limit: int = DEFAULT_LIST_LIMIT,
    ):
        self._gateway = gateway
        self._hasher = hasher
        self._email_validator = email_validator
        self._clock = clock
        self._list_limit = list_limit

    # ─── Pure steps ─────────────────────────────────────────────

    def normalize(self, record: UserRecord) -> UserRecord:
        """Trim and escape text fields, drop id, stamp both timestamps with now."""
        return normalize_record(record, self._clock.now())

    def validate(
        self, record: UserRecord, mode: ValidationMode | str = ValidationMode.CREATE,
    ) -> None:
        """Raise MissingFieldError, InvalidEmailFormatError or FieldTooLongError."""
        validate_record(record, mode, self._email_validator.is_valid)

    def hash_password(self, record: UserRecord) -> UserRecord:
        """Replace the plaintext password with its digest."""
        return replace(record, password=self._hasher.hash(record.password))

    def verify_password(self, record: UserRecord, plaintext: str) -> bool:
        """Check plaintext against the record's stored digest."""
        return self._hasher.verify(record.password, plaintext)

    # ─── Persistence ────────────────────────────────────────────

    async def create(self, record: UserRecord) -> UserRecord:
        """Hash the password and insert a new row."""
        stored = await self._gateway.insert(self.hash_password(record))
        logger.info("User created", extra={"user_id": stored.id})
        return stored

    async def find_all(self) -> list[UserRecord]:
        """Up to list_limit users in backend order."""
        return await self._gateway.fetch_all(self._list_limit)

    async def find_by_id(self, user_id: UserId) -> UserRecord:
        user = await self._gateway.get(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    async def update(self, user_id: UserId, record: UserRecord) -> UserRecord:
        """Hash the new password, patch the mutable columns, return the fresh row."""
        hashed = self.hash_password(record)
        await self._gateway.update_columns(user_id, {
            "password_digest": hashed.password,
            "nickname": hashed.nickname,
            "email": hashed.email,
            "updated_at": self._clock.now(),
        })
        user = await self.find_by_id(user_id)
        logger.info("User updated", extra={"user_id": user_id})
        return user

    async def delete(self, user_id: UserId) -> int:
        """Hard delete. Returns rows removed, 0 when nothing matched."""
        rows = await self._gateway.delete(user_id)
        logger.info(
            "User delete issued",
            extra={"user_id": user_id, "rows_affected": rows},
        )
        return rows

"""User Record — in-memory user entity plus pure normalization and validation.

Invariants:
    - normalize_record never mutates its input; it returns a new record
    - normalize_record discards any client-supplied id
    - validate_record checks nickname → password → email → email syntax → sizes,
      first failure wins
    - login mode never requires nickname; create and update share the same rules

Design Decisions:
    - Frozen dataclass decoupled from the ORM row: the users table shape lives in
      models/user.py and the alembic revision, not here
    - Email syntax check injected as a callable so core stays free of third-party IO
    - Unescape, then trim, then escape: already-escaped input normalizes to
      itself and entity-encoded whitespace (`&#32;`, `&nbsp;`) is trimmed
    - Size limits are checked in bytes on the normalized text, since escaping
      can grow a value up to six times
"""

import html
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Callable

from accounts.core.domain_types import (
    EMAIL_MAX_LENGTH, NICKNAME_MAX_LENGTH, UserField, ValidationMode,
)
from accounts.core.errors import (
    FieldTooLongError, InvalidEmailFormatError, MissingFieldError,
)


@dataclass(frozen=True)
class UserRecord:
    """A user account. `password` holds plaintext until hashed, the digest after."""
    nickname: str = ""
    email: str = ""
    password: str = ""
    id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


def sanitize_text(value: str) -> str:
    """Decode entities, trim surrounding whitespace, HTML-escape markup."""
    return html.escape(html.unescape(value).strip(), quote=True)


def normalize_record(record: UserRecord, now: datetime) -> UserRecord:
    """Prepare a record for persistence: sanitize text fields, drop id, stamp times."""
    return replace(
        record,
        id=None,
        nickname=sanitize_text(record.nickname),
        email=sanitize_text(record.email),
        created_at=now,
        updated_at=now,
    )


def validate_record(
    record: UserRecord,
    mode: ValidationMode | str,
    is_valid_email: Callable[[str], bool],
) -> None:
    """Raise the first validation failure for `mode`, or return None."""
    mode = ValidationMode.parse(mode)
    if mode is not ValidationMode.LOGIN and not record.nickname:
        raise MissingFieldError(UserField.NICKNAME.value)
    if not record.password:
        raise MissingFieldError(UserField.PASSWORD.value)
    if not record.email:
        raise MissingFieldError(UserField.EMAIL.value)
    if not is_valid_email(record.email):
        raise InvalidEmailFormatError(record.email)
    if len(record.email.encode("utf-8")) > EMAIL_MAX_LENGTH:
        raise FieldTooLongError(UserField.EMAIL.value, EMAIL_MAX_LENGTH)
    if mode is not ValidationMode.LOGIN and (
        len(record.nickname.encode("utf-8")) > NICKNAME_MAX_LENGTH
    ):
        raise FieldTooLongError(UserField.NICKNAME.value, NICKNAME_MAX_LENGTH)

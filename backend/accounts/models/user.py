"""User ORM — the users table.

Invariants:
    - id is an autoincrement integer primary key, never written by the application
    - nickname is unique (the database enforces it, not the service)
    - password_digest stores only the hash output
    - created_at is written once; updated_at refreshed by every patch

Design Decisions:
    - Column is password_digest, not password: the name says what is stored
    - Python-side defaults for timestamps so SQLite and PostgreSQL behave alike;
      the migration adds server defaults as well
"""

from datetime import datetime, timezone

from sqlalchemy import Integer, String, DateTime, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from accounts.core.domain_types import (
    EMAIL_MAX_LENGTH, NICKNAME_MAX_LENGTH, PASSWORD_DIGEST_MAX_LENGTH,
)
from accounts.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """Persisted user account."""
    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint("nickname", name="uq_users_nickname"),
    )

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    nickname: Mapped[str] = mapped_column(
        String(NICKNAME_MAX_LENGTH), nullable=False,
    )
    email: Mapped[str] = mapped_column(
        String(EMAIL_MAX_LENGTH), nullable=False,
    )
    password_digest: Mapped[str] = mapped_column(
        String(PASSWORD_DIGEST_MAX_LENGTH), nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )

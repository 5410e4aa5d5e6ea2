"""User Schemas — Pydantic models for the users API.

Invariants:
    - Missing fields default to "" so the service reports them as MissingFieldError
    - password bounded to 72 bytes (bcrypt input limit)
    - UserResponse never carries the password digest

Design Decisions:
    - Sizes reuse core/domain_types.py limits as a first character-count bound;
      escaping happens later in normalize, and validate re-checks the escaped
      text in bytes
"""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from accounts.core.domain_types import EMAIL_MAX_LENGTH, NICKNAME_MAX_LENGTH
from accounts.core.user_record import UserRecord

MAX_PASSWORD_BYTES = 72  # bcrypt limit


class UserWrite(BaseModel):
    """Body for create and update requests."""
    nickname: str = Field("", max_length=NICKNAME_MAX_LENGTH)
    email: str = Field("", max_length=EMAIL_MAX_LENGTH)
    password: str = ""

    @field_validator("password")
    @classmethod
    def password_length_guard(cls, v: str) -> str:
        if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"password must be <= {MAX_PASSWORD_BYTES} bytes")
        return v

    def to_record(self) -> UserRecord:
        return UserRecord(
            nickname=self.nickname, email=self.email, password=self.password,
        )


class UserResponse(BaseModel):
    """Public view of a stored user."""
    id: int
    nickname: str
    email: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_record(cls, record: UserRecord) -> "UserResponse":
        return cls(
            id=record.id,
            nickname=record.nickname,
            email=record.email,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )


class UserListResponse(BaseModel):
    users: list[UserResponse]


class DeleteResponse(BaseModel):
    rows_affected: int

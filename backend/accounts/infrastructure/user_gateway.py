"""User Gateway — SQLAlchemy implementation of the UserGateway protocol.

Invariants:
    - Never writes id; the database assigns it
    - update_columns only touches nickname, email, password_digest, updated_at
    - get() returns None when no row matches (the not-found signal)
    - Every mutation commits; every SQLAlchemy failure rolls back and raises DatabaseError

Design Decisions:
    - Returns UserRecord, not ORM rows: callers never hold a live ORM object
    - synchronize_session=False on bulk statements + populate_existing on reads:
      the identity map never serves stale rows after a patch or delete
"""

from collections.abc import Mapping
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from accounts.core.domain_types import UserId
from accounts.core.user_record import UserRecord
from accounts.infrastructure.database import translate_sqlalchemy_error
from accounts.models.user import User

PATCHABLE_COLUMNS = frozenset({
    "nickname", "email", "password_digest", "updated_at",
})


def to_record(user: User) -> UserRecord:
    """Copy an ORM row into a detached UserRecord."""
    return UserRecord(
        id=user.id,
        nickname=user.nickname,
        email=user.email,
        password=user.password_digest,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


class SqlAlchemyUserGateway:
    """Persists UserRecords in the users table through one AsyncSession."""

    def __init__(self, db: AsyncSession):
        self._db = db

    @asynccontextmanager
    async def _translated(self, operation: str) -> AsyncIterator[None]:
        try:
            yield
        except SQLAlchemyError as e:
            await self._db.rollback()
            raise translate_sqlalchemy_error(e, operation) from e

    async def insert(self, record: UserRecord) -> UserRecord:
        user = User(
            nickname=record.nickname,
            email=record.email,
            password_digest=record.password,
        )
        if record.created_at is not None:
            user.created_at = record.created_at
        if record.updated_at is not None:
            user.updated_at = record.updated_at
        async with self._translated("insert"):
            self._db.add(user)
            await self._db.commit()
            await self._db.refresh(user)
        return to_record(user)

    async def fetch_all(self, limit: int) -> list[UserRecord]:
        async with self._translated("query"):
            result = await self._db.execute(
                select(User).limit(limit)
                .execution_options(populate_existing=True),
            )
            users = result.scalars().all()
        return [to_record(u) for u in users]

    async def get(self, user_id: UserId) -> UserRecord | None:
        async with self._translated("query"):
            result = await self._db.execute(
                select(User).where(User.id == user_id)
                .execution_options(populate_existing=True),
            )
            user = result.scalar_one_or_none()
        return to_record(user) if user else None

    async def update_columns(
        self, user_id: UserId, values: Mapping[str, Any],
    ) -> int:
        illegal = set(values) - PATCHABLE_COLUMNS
        if illegal:
            raise ValueError(f"Columns not patchable: {sorted(illegal)}")
        async with self._translated("update"):
            result = await self._db.execute(
                update(User).where(User.id == user_id).values(**values)
                .execution_options(synchronize_session=False),
            )
            await self._db.commit()
        return result.rowcount

    async def delete(self, user_id: UserId) -> int:
        async with self._translated("delete"):
            result = await self._db.execute(
                delete(User).where(User.id == user_id)
                .execution_options(synchronize_session=False),
            )
            await self._db.commit()
        return result.rowcount

"""Service Factory — wires UserRecordService to concrete infrastructure.

Invariants:
    - One gateway per AsyncSession (request scope)
    - HashService and EmailSyntaxValidator are stateless and shared

Design Decisions:
    - Kept out of api/ so scripts and tests can build the same service graph
"""

from functools import lru_cache

from sqlalchemy.ext.asyncio import AsyncSession

from accounts.config import Settings
from accounts.infrastructure.clock import SystemClock
from accounts.infrastructure.email_syntax import EmailSyntaxValidator
from accounts.infrastructure.password_hashing import HashService
from accounts.infrastructure.user_gateway import SqlAlchemyUserGateway
from accounts.services.user_record_service import UserRecordService


@lru_cache
def _hash_service(rounds: int) -> HashService:
    return HashService(rounds=rounds)


def build_user_record_service(
    db: AsyncSession, settings: Settings,
) -> UserRecordService:
    """Build a request-scoped service bound to `db`."""
    return UserRecordService(
        gateway=SqlAlchemyUserGateway(db),
        hasher=_hash_service(settings.password_hash_rounds),
        email_validator=EmailSyntaxValidator(),
        clock=SystemClock(),
        list_limit=settings.users_list_limit,
    )

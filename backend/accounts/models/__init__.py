"""ORM Models — SQLAlchemy declarative models for persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Column sizes come from core/domain_types.py

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete once the package loads
"""

from accounts.models.user import User  # noqa: F401

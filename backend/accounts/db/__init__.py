"""Database Infrastructure — SQLAlchemy declarative Base.

Invariants:
    - Base.metadata is the single source for table definitions used by tests

Design Decisions:
    - Engines and sessions live in infrastructure/database.py; this package only
      declares tables
"""

"""Infrastructure Layer — external library adapters and cross-cutting concerns.

Invariants:
    - Each adapter satisfies a Protocol from core/repository_protocols.py
    - All library failures mapped to AccountsError subclasses (core/errors.py)

Design Decisions:
    - Thin wrappers over passlib, email-validator and SQLAlchemy: swapping a
      library touches one file
"""

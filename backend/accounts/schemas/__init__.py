"""API Schemas — Pydantic models for request/response validation.

Invariants:
    - Response models never expose password digests

Design Decisions:
    - Required-field rules live in the service, schemas only bound sizes
"""

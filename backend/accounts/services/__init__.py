"""Services Layer — orchestration of core logic around injected IO.

Invariants:
    - Services receive their collaborators through __init__, never import singletons
    - Services raise AccountsError subclasses only

Design Decisions:
    - One service per aggregate: UserRecordService owns the user lifecycle
"""

"""Database Infrastructure: SQLAlchemy declarative base.

Invariants:
    - Synchronous engines only; used for device-local token persistence
"""

"""Schemas: pydantic models for every payload crossing a collaborator boundary.

Invariants:
    - Validation happens at construction; invalid payloads never reach slice state
    - Models handed to state are frozen
"""

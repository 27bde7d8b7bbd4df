"""Core Layer: pure state logic, no IO, no async, no HTTP, no DB.

Invariants:
    - No module in core/ imports from services/, infrastructure/, db/ or models/
    - All transition functions are pure and deterministic
    - Core modules never log; the shell logs around them

Design Decisions:
    - Functional core separated from imperative shell
"""

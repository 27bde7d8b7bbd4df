"""Services Layer: imperative shell around the pure state core.

Invariants:
    - Services own all awaiting; core transitions stay synchronous
    - No exception from a repository call escapes a service operation
"""

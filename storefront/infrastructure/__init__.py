"""Infrastructure Layer: concrete collaborators and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/
    - Every transport or storage failure is mapped to a StorefrontError subclass
"""

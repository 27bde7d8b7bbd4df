"""ORM Models: persisted records.

Invariants:
    - Every model registered here so Base.metadata sees it on import
"""

from storefront.models.stored_token import StoredToken

__all__ = ["StoredToken"]

"""Boundary Protocols: contracts between the state core and its collaborators.

Invariants:
    - Core NEVER imports from the shell; dependency arrows point inward only
    - Repository calls may fail with any exception carrying a human-readable message
    - TokenStore is synchronous and durable across process restarts

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Repositories are async because implementations do network IO; the pure
      transitions that consume their results are never async themselves
"""

from typing import Protocol

from storefront.core.domain_types import ProductId
from storefront.schemas.catalog import (
    Filter,
    Product,
    ProductDraft,
    ProductPage,
    ProductPatch,
)
from storefront.schemas.user import LoginCredentials, RegisterUserInfo, User, UserToken


class ProductRepository(Protocol):
    """Contract for product listing and mutation."""
    async def get_products(self, flt: Filter) -> ProductPage: ...
    async def get_product(self, product_id: ProductId) -> Product: ...
    async def register_product(self, draft: ProductDraft) -> Product: ...
    async def update_product(
        self, patch: ProductPatch, product_id: ProductId,
    ) -> Product: ...
    async def delete_product(self, product: Product) -> None: ...


class AuthRepository(Protocol):
    """Contract for account creation and authentication."""
    async def register_user(self, info: RegisterUserInfo) -> User: ...
    async def login_user(self, credentials: LoginCredentials) -> UserToken: ...
    async def get_user_with_session(self, tokens: UserToken) -> User: ...


class TokenStore(Protocol):
    """Contract for persisting the opaque session token pair."""
    def set(self, tokens: UserToken) -> None: ...
    def get(self) -> UserToken | None: ...
    def clear(self) -> None: ...

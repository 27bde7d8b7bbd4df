"""Catalog Service: product intents against the product repository.

Invariants:
    - fetch_many, fetch_one, create, update and delete each run under their own
      operation kind and token sequence
    - set_sort and set_filter are synchronous and never fetch
    - delete never touches the product list; callers re-fetch when they need to
"""

import logging

from storefront.core.domain_types import OperationKind, ProductId
from storefront.core.catalog_state import CatalogState, FilterChanged, SortChanged
from storefront.core.repository_protocols import ProductRepository
from storefront.schemas.catalog import (
    Filter,
    Product,
    ProductDraft,
    ProductPage,
    ProductPatch,
    Sort,
)
from storefront.services.request_runner import run_request
from storefront.services.store import Store

logger = logging.getLogger(__name__)


class CatalogService:
    """Fetch, mutate, sort and filter the product catalog."""

    def __init__(self, store: Store, repository: ProductRepository):
        self._store = store
        self._repository = repository

    @property
    def state(self) -> CatalogState:
        return self._store.state.catalog

    async def fetch_many(self, flt: Filter) -> ProductPage | None:
        return await run_request(
            self._store, OperationKind.FETCH_PRODUCTS,
            lambda: self._repository.get_products(flt),
        )

    async def fetch_one(self, product_id: ProductId) -> Product | None:
        return await run_request(
            self._store, OperationKind.FETCH_PRODUCT,
            lambda: self._repository.get_product(product_id),
        )

    async def create(self, draft: ProductDraft) -> Product | None:
        return await run_request(
            self._store, OperationKind.REGISTER_PRODUCT,
            lambda: self._repository.register_product(draft),
        )

    async def update(self, product_id: ProductId, patch: ProductPatch) -> Product | None:
        return await run_request(
            self._store, OperationKind.UPDATE_PRODUCT,
            lambda: self._repository.update_product(patch, product_id),
        )

    async def delete(self, product: Product) -> bool:
        """Delete a product. True only when this call's request is the one that settled."""
        async def confirmed_delete() -> bool:
            await self._repository.delete_product(product)
            return True

        deleted = await run_request(
            self._store, OperationKind.DELETE_PRODUCT, confirmed_delete,
        ) is True
        if deleted:
            logger.info(f"Product {product.id} deleted", extra={"product_id": product.id})
        return deleted

    def set_sort(self, sort: Sort | None) -> None:
        self._store.dispatch(SortChanged(sort))

    def set_filter(self, flt: Filter) -> None:
        self._store.dispatch(FilterChanged(flt))

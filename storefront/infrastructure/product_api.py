"""HTTP Product Repository: ProductRepository over the fake store REST API.

Invariants:
    - get_products issues two calls: the paged filter for the page and the
      unpaginated filter for the server-side total
    - If either listing call fails, the other is cancelled
    - Payloads that fail schema validation map to RepositoryError
    - delete_product fails unless the server confirms the deletion
"""

import asyncio
from typing import Any

from pydantic import ValidationError

from storefront.core.domain_types import ProductId
from storefront.core.errors import ErrorContext, RepositoryError
from storefront.infrastructure.api_client import ApiClient
from storefront.schemas.catalog import (
    Filter,
    Product,
    ProductDraft,
    ProductPage,
    ProductPatch,
)


def _parse_product(data: Any) -> Product:
    try:
        return Product.model_validate(data)
    except ValidationError as e:
        raise RepositoryError(f"Malformed product payload: {e.error_count()} error(s)")


def _parse_products(data: Any) -> list[Product]:
    if not isinstance(data, list):
        raise RepositoryError("Malformed product list payload")
    return [_parse_product(item) for item in data]


class HttpProductRepository:
    """Products via /products endpoints."""

    def __init__(self, client: ApiClient):
        self._client = client

    async def get_products(self, flt: Filter) -> ProductPage:
        ctx = ErrorContext(operation="get_products")
        calls = [
            asyncio.ensure_future(self._client.request(
                "GET", "/products", params=flt.to_query_params(), context=ctx,
            )),
            asyncio.ensure_future(self._client.request(
                "GET", "/products", params=flt.to_query_params(paginate=False), context=ctx,
            )),
        ]
        try:
            page_data, all_data = await asyncio.gather(*calls)
        except Exception:
            for call in calls:
                call.cancel()
            raise
        products = _parse_products(page_data)
        if not isinstance(all_data, list):
            raise RepositoryError("Malformed product count payload", context=ctx)
        total = len(all_data)
        return ProductPage(products=products, total=total)

    async def get_product(self, product_id: ProductId) -> Product:
        data = await self._client.request(
            "GET", f"/products/{product_id}",
            resource=("Product", str(product_id)),
            context=ErrorContext(operation="get_product", resource_id=str(product_id)),
        )
        return _parse_product(data)

    async def register_product(self, draft: ProductDraft) -> Product:
        data = await self._client.request(
            "POST", "/products/", json=draft.to_payload(),
            context=ErrorContext(operation="register_product"),
        )
        return _parse_product(data)

    async def update_product(self, patch: ProductPatch, product_id: ProductId) -> Product:
        data = await self._client.request(
            "PUT", f"/products/{product_id}", json=patch.to_payload(),
            resource=("Product", str(product_id)),
            context=ErrorContext(operation="update_product", resource_id=str(product_id)),
        )
        return _parse_product(data)

    async def delete_product(self, product: Product) -> None:
        confirmed = await self._client.request(
            "DELETE", f"/products/{product.id}",
            resource=("Product", str(product.id)),
            context=ErrorContext(operation="delete_product", resource_id=str(product.id)),
        )
        if confirmed is not True:
            raise RepositoryError(f"Product {product.id} was not deleted")

"""Root conftest: shared test configuration and fixtures."""

import os

import pytest

# Ensure tests never hit the real API or write a token file in the repo
os.environ.setdefault("STOREFRONT_API_BASE_URL", "http://storefront.test/api/v1")
os.environ.setdefault("STOREFRONT_TOKEN_STORE_URL", "sqlite://")

from storefront.schemas.catalog import Category, Product  # noqa: E402


def make_product(product_id: int, price: float = 10.0, title: str | None = None,
                 images: list[str] | None = None) -> Product:
    return Product(
        id=product_id,
        title=title or f"Product {product_id}",
        price=price,
        description="",
        category=Category(id=1, name="Clothes"),
        images=["https://img.test/p.png"] if images is None else images,
    )


@pytest.fixture
def product_factory():
    return make_product

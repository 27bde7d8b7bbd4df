"""Cart Schemas: CartItem validation and identity."""

import pytest
from pydantic import ValidationError

from storefront.schemas.cart import CartItem


def test_quantity_must_be_positive():
    with pytest.raises(ValidationError):
        CartItem(product_id=1, quantity=0)


def test_identity_excludes_quantity():
    assert CartItem(product_id=5, size="M", quantity=1).same_line(
        CartItem(product_id=5, size="M", quantity=3),
    )


def test_identity_includes_variant_fields():
    assert not CartItem(product_id=5, size="M").same_line(CartItem(product_id=5, size="L"))


def test_unset_and_none_variant_fields_match():
    assert CartItem(product_id=5).same_line(CartItem(product_id=5, color=None))


def test_with_quantity_validates():
    item = CartItem(product_id=5)
    assert item.with_quantity(4).quantity == 4
    assert item.with_quantity(4).same_line(item)
    with pytest.raises(ValidationError):
        item.with_quantity(0)

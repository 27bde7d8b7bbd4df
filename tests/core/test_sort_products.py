"""Sort Engine: ordering, tie-breaks, purity and idempotence."""

import pytest

from storefront.core.sort_products import sort_products
from storefront.schemas.catalog import PRICE_ASC, PRICE_DESC, TITLE_ASC, TITLE_DESC


@pytest.fixture
def products(product_factory):
    return [
        product_factory(3, 20.0, "banana"),
        product_factory(1, 5.0, "Cherry"),
        product_factory(4, 20.0, "apple"),
        product_factory(2, 20.0, "Apple"),
    ]


def _ids(products):
    return [p.id for p in products]


def test_no_sort_key_preserves_server_order(products):
    result = sort_products(products, None)
    assert _ids(result) == [3, 1, 4, 2]
    assert result is not products


def test_price_ascending_ties_break_on_id(products):
    assert _ids(sort_products(products, PRICE_ASC)) == [1, 2, 3, 4]


def test_price_descending_ties_still_break_on_id_ascending(products):
    assert _ids(sort_products(products, PRICE_DESC)) == [2, 3, 4, 1]


def test_title_ascending_is_case_insensitive(products):
    assert _ids(sort_products(products, TITLE_ASC)) == [2, 4, 3, 1]


def test_title_descending(products):
    assert _ids(sort_products(products, TITLE_DESC)) == [1, 3, 2, 4]


def test_sort_does_not_mutate_input(products):
    before = list(products)
    sort_products(products, PRICE_DESC)
    assert products == before


@pytest.mark.parametrize("key", [None, PRICE_ASC, PRICE_DESC, TITLE_ASC, TITLE_DESC])
def test_sort_is_idempotent(products, key):
    once = sort_products(products, key)
    assert sort_products(once, key) == once


def test_sort_empty_sequence():
    assert sort_products([], PRICE_ASC) == []

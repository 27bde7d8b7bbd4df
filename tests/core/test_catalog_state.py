"""Catalog State: pure transitions for list, detail, sort and filter events.

Tests cover:
    - fetch_products pending / fulfilled / rejected (incl. the timeout example)
    - late sort change applies to a freshly fetched page
    - per-operation detail slots and the active `product` view
    - delete clears detail slots, leaves the list
    - stale resolutions are discarded
    - set_sort re-sorts without fetching; set_filter is plain replacement
"""

import pytest

from storefront.core.catalog_state import (
    CatalogState,
    FilterChanged,
    SortChanged,
    reduce_catalog,
)
from storefront.core.domain_types import NO_IMAGE, OperationKind, RequestStatus
from storefront.core.request_lifecycle import (
    RequestFailed,
    RequestStarted,
    RequestSucceeded,
)
from storefront.schemas.catalog import PRICE_ASC, PRICE_DESC, Filter, ProductPage

FETCH = OperationKind.FETCH_PRODUCTS
FETCH_ONE = OperationKind.FETCH_PRODUCT
UPDATE = OperationKind.UPDATE_PRODUCT
REGISTER = OperationKind.REGISTER_PRODUCT
DELETE = OperationKind.DELETE_PRODUCT


def _apply(state, *events):
    for event in events:
        state = reduce_catalog(state, event)
    return state


@pytest.fixture
def loaded(product_factory):
    page = ProductPage(
        products=[product_factory(1, 30.0), product_factory(2, 10.0)], total=2,
    )
    return _apply(
        CatalogState(),
        RequestStarted(FETCH, 1),
        RequestSucceeded(FETCH, 1, page),
    )


# --- initial ---------------------------------------------------------------------

def test_initial_state():
    state = CatalogState()
    assert state.products == ()
    assert state.product is None
    assert state.total == 0
    assert state.min_max_price is None
    assert not state.loading
    assert state.error is None
    assert state.request(FETCH).status is RequestStatus.IDLE


def test_unknown_event_returns_same_state():
    state = CatalogState()
    assert reduce_catalog(state, object()) is state


# --- fetch_products ------------------------------------------------------------------

def test_fetch_pending_clears_list_and_error(loaded):
    failed = _apply(loaded, RequestStarted(FETCH, 2), RequestFailed(FETCH, 2, "x"))
    state = reduce_catalog(failed, RequestStarted(FETCH, 3))
    assert state.loading
    assert state.error is None
    assert state.products == ()
    assert state.sorted_products == ()


def test_fetch_fulfilled_normalizes_page(product_factory):
    page = ProductPage(
        products=[product_factory(1, images=[]), product_factory(2)], total=2,
    )
    state = _apply(
        CatalogState(filter=Filter(category_id=0, page=1, items_per_page=30)),
        RequestStarted(FETCH, 1),
        RequestSucceeded(FETCH, 1, page),
    )
    assert state.products[0].images == [NO_IMAGE]
    assert state.total == 2
    assert not state.loading
    assert state.request(FETCH).status is RequestStatus.FULFILLED


def test_fetch_rejected_leaves_empty_list_and_error(loaded):
    state = _apply(
        loaded, RequestStarted(FETCH, 2), RequestFailed(FETCH, 2, "timeout"),
    )
    assert state.products == ()
    assert not state.loading
    assert state.error == "timeout"


def test_sort_changed_while_pending_applies_to_fetched_page(product_factory):
    page = ProductPage(
        products=[product_factory(1, 30.0), product_factory(2, 10.0)], total=2,
    )
    state = _apply(
        CatalogState(),
        RequestStarted(FETCH, 1),
        SortChanged(PRICE_ASC),
        RequestSucceeded(FETCH, 1, page),
    )
    assert [p.id for p in state.sorted_products] == [2, 1]
    assert [p.id for p in state.products] == [1, 2]
    assert state.visible_products == state.sorted_products


def test_stale_fetch_resolution_is_discarded(product_factory):
    old = ProductPage(products=[product_factory(1)], total=1)
    new = ProductPage(products=[product_factory(2)], total=1)
    state = _apply(
        CatalogState(),
        RequestStarted(FETCH, 1),
        RequestStarted(FETCH, 2),
        RequestSucceeded(FETCH, 2, new),
        RequestSucceeded(FETCH, 1, old),
    )
    assert [p.id for p in state.products] == [2]


def test_stale_failure_does_not_clobber_newer_result(product_factory):
    new = ProductPage(products=[product_factory(2)], total=1)
    state = _apply(
        CatalogState(),
        RequestStarted(FETCH, 1),
        RequestStarted(FETCH, 2),
        RequestSucceeded(FETCH, 2, new),
    )
    assert reduce_catalog(state, RequestFailed(FETCH, 1, "late")) is state


def test_envelope_widens_across_fetches(product_factory):
    wide = ProductPage(products=[product_factory(1, 1.0), product_factory(2, 900.0)], total=2)
    narrow = ProductPage(products=[product_factory(3, 50.0)], total=1)
    state = _apply(
        CatalogState(filter=Filter(category_id=1)),
        RequestStarted(FETCH, 1), RequestSucceeded(FETCH, 1, wide),
        FilterChanged(Filter(category_id=2)),
        RequestStarted(FETCH, 2), RequestSucceeded(FETCH, 2, narrow),
    )
    assert state.min_max_price == (1.0, 900.0)


# --- detail operations -----------------------------------------------------------------

def test_fetch_one_stores_image_checked_product(product_factory):
    state = _apply(
        CatalogState(),
        RequestStarted(FETCH_ONE, 1),
        RequestSucceeded(FETCH_ONE, 1, product_factory(7, images=[])),
    )
    assert state.product.id == 7
    assert state.product.images == [NO_IMAGE]


def test_detail_pending_clears_its_slot(product_factory):
    state = _apply(
        CatalogState(),
        RequestStarted(FETCH_ONE, 1),
        RequestSucceeded(FETCH_ONE, 1, product_factory(7)),
        RequestStarted(FETCH_ONE, 2),
    )
    assert state.product is None
    assert state.loading


def test_detail_failure_clears_slot_and_sets_error(product_factory):
    state = _apply(
        CatalogState(),
        RequestStarted(UPDATE, 1),
        RequestFailed(UPDATE, 1, "forbidden"),
    )
    assert state.product is None
    assert state.error == "forbidden"


def test_product_follows_latest_dispatched_detail_operation(product_factory):
    state = _apply(
        CatalogState(),
        RequestStarted(FETCH_ONE, 1),
        RequestStarted(UPDATE, 2),
        RequestSucceeded(UPDATE, 2, product_factory(9, title="updated")),
        RequestSucceeded(FETCH_ONE, 1, product_factory(9, title="stale read")),
    )
    assert state.product.title == "updated"
    assert state.details[FETCH_ONE].title == "stale read"


def test_register_stores_created_product(product_factory):
    state = _apply(
        CatalogState(),
        RequestStarted(REGISTER, 1),
        RequestSucceeded(REGISTER, 1, product_factory(50)),
    )
    assert state.product.id == 50


def test_delete_clears_details_and_keeps_list(loaded, product_factory):
    state = _apply(
        loaded,
        RequestStarted(FETCH_ONE, 2),
        RequestSucceeded(FETCH_ONE, 2, product_factory(1)),
        RequestStarted(DELETE, 3),
    )
    assert state.product is not None
    state = reduce_catalog(state, RequestSucceeded(DELETE, 3, None))
    assert state.product is None
    assert state.details == {}
    assert [p.id for p in state.products] == [1, 2]


def test_delete_failure_sets_error_and_keeps_product(product_factory):
    state = _apply(
        CatalogState(),
        RequestStarted(FETCH_ONE, 1),
        RequestSucceeded(FETCH_ONE, 1, product_factory(1)),
        RequestStarted(DELETE, 2),
        RequestFailed(DELETE, 2, "denied"),
    )
    assert state.error == "denied"
    assert state.product.id == 1


def test_loading_tracks_operations_independently(product_factory):
    state = _apply(
        CatalogState(),
        RequestStarted(FETCH, 1),
        RequestStarted(FETCH_ONE, 2),
        RequestSucceeded(FETCH_ONE, 2, product_factory(1)),
    )
    assert state.loading
    assert state.request(FETCH).loading
    assert not state.request(FETCH_ONE).loading


# --- sort / filter -------------------------------------------------------------------

def test_sort_changed_resorts_loaded_products(loaded):
    state = reduce_catalog(loaded, SortChanged(PRICE_DESC))
    assert [p.id for p in state.sorted_products] == [1, 2]
    state = reduce_catalog(state, SortChanged(PRICE_ASC))
    assert [p.id for p in state.sorted_products] == [2, 1]
    assert state.products == loaded.products


def test_clearing_sort_shows_server_order(loaded):
    state = _apply(loaded, SortChanged(PRICE_ASC), SortChanged(None))
    assert state.visible_products == loaded.products


def test_filter_changed_replaces_filter_only(loaded):
    flt = Filter(title="shirt")
    state = reduce_catalog(loaded, FilterChanged(flt))
    assert state.filter == flt
    assert state.products == loaded.products
    assert not state.loading


def test_same_filter_is_a_no_op():
    state = CatalogState(filter=Filter(title="a"))
    assert reduce_catalog(state, FilterChanged(Filter(title="a"))) is state

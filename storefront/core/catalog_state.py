"""Catalog State: product list, sort, filter and product detail results.

Invariants:
    - products and sorted_products are replaced wholesale on every page, never merged
    - fetch_products pending or rejected leaves an empty list (no stale display)
    - sorted_products always uses the sort active when the page is applied
    - Each detail operation (fetch/register/update) owns its own result slot;
      `product` follows the most recently dispatched one
    - delete success clears every detail slot and leaves the list untouched
    - Any operation entering pending clears the slice error

Design Decisions:
    - Explicit event -> handler dict; request events are routed here by the app reducer
      only for catalog operation kinds
    - Unchanged state is returned as the same object so the store can skip notification
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace

from storefront.core.domain_types import DETAIL_OPERATIONS, OperationKind
from storefront.core.normalize_products import (
    PriceEnvelope,
    ensure_images,
    normalize_page,
)
from storefront.core.request_lifecycle import (
    RequestFailed,
    RequestStarted,
    RequestState,
    RequestSucceeded,
    any_loading,
    request_of,
    track_failed,
    track_started,
    track_succeeded,
)
from storefront.core.sort_products import sort_products
from storefront.schemas.catalog import Filter, Product, ProductPage, Sort


@dataclass(frozen=True)
class CatalogState:
    """Catalog slice of the application state. Pure, no IO."""
    filter: Filter | None = None
    sort: Sort | None = None
    products: tuple[Product, ...] = ()
    sorted_products: tuple[Product, ...] = ()
    total: int = 0
    min_max_price: PriceEnvelope | None = None
    requests: Mapping[OperationKind, RequestState] = field(default_factory=dict)
    details: Mapping[OperationKind, Product | None] = field(default_factory=dict)
    active_detail: OperationKind | None = None
    error: str | None = None

    @property
    def loading(self) -> bool:
        return any_loading(self.requests)

    @property
    def product(self) -> Product | None:
        if self.active_detail is None:
            return None
        return self.details.get(self.active_detail)

    @property
    def visible_products(self) -> tuple[Product, ...]:
        return self.sorted_products if self.sort is not None else self.products

    def request(self, kind: OperationKind) -> RequestState:
        return request_of(self.requests, kind)


# ─── Events ──────────────────────────────────────────────────────

@dataclass(frozen=True)
class SortChanged:
    sort: Sort | None


@dataclass(frozen=True)
class FilterChanged:
    filter: Filter


# ─── Handlers ────────────────────────────────────────────────────

def _on_sort_changed(state: CatalogState, event: SortChanged) -> CatalogState:
    return replace(
        state,
        sort=event.sort,
        sorted_products=tuple(sort_products(state.products, event.sort)),
    )


def _on_filter_changed(state: CatalogState, event: FilterChanged) -> CatalogState:
    if event.filter == state.filter:
        return state
    return replace(state, filter=event.filter)


def _on_started(state: CatalogState, event: RequestStarted) -> CatalogState:
    requests = track_started(state.requests, event)
    if requests is None:
        return state
    state = replace(state, requests=requests, error=None)
    if event.kind is OperationKind.FETCH_PRODUCTS:
        return replace(state, products=(), sorted_products=())
    if event.kind in DETAIL_OPERATIONS:
        return replace(
            state,
            details={**state.details, event.kind: None},
            active_detail=event.kind,
        )
    return state


def _apply_page(state: CatalogState, page: ProductPage) -> CatalogState:
    filtered = normalize_page(page, state.filter, state.min_max_price)
    return replace(
        state,
        products=filtered.products,
        sorted_products=tuple(sort_products(filtered.products, state.sort)),
        total=filtered.total,
        min_max_price=filtered.min_max_price,
    )


def _on_succeeded(state: CatalogState, event: RequestSucceeded) -> CatalogState:
    requests = track_succeeded(state.requests, event)
    if requests is None:
        return state
    state = replace(state, requests=requests)
    if event.kind is OperationKind.FETCH_PRODUCTS:
        return _apply_page(state, event.payload)
    if event.kind in DETAIL_OPERATIONS:
        return replace(
            state,
            details={**state.details, event.kind: ensure_images(event.payload)},
        )
    if event.kind is OperationKind.DELETE_PRODUCT:
        return replace(state, details={}, active_detail=None)
    return state


def _on_failed(state: CatalogState, event: RequestFailed) -> CatalogState:
    requests = track_failed(state.requests, event)
    if requests is None:
        return state
    state = replace(state, requests=requests, error=requests[event.kind].error)
    if event.kind is OperationKind.FETCH_PRODUCTS:
        return replace(state, products=(), sorted_products=())
    if event.kind in DETAIL_OPERATIONS:
        return replace(state, details={**state.details, event.kind: None})
    return state


_HANDLERS: dict[type, Callable[[CatalogState, object], CatalogState]] = {
    SortChanged: _on_sort_changed,
    FilterChanged: _on_filter_changed,
    RequestStarted: _on_started,
    RequestSucceeded: _on_succeeded,
    RequestFailed: _on_failed,
}

CATALOG_EVENTS = (SortChanged, FilterChanged)


def reduce_catalog(state: CatalogState, event: object) -> CatalogState:
    """Apply one event to the catalog slice. Unknown events leave it unchanged."""
    handler = _HANDLERS.get(type(event))
    if handler is None:
        return state
    return handler(state, event)

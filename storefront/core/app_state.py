"""Application State: the single source of truth handed to services and presentation.

Invariants:
    - reduce_app_state is pure; the same state and event always give the same result
    - Request events reach only the slice owning their operation kind
    - An event that changes nothing returns the very same AppState object
"""

from dataclasses import dataclass, field, replace

from storefront.core.catalog_state import CATALOG_EVENTS, CatalogState, reduce_catalog
from storefront.core.cart_state import CART_EVENTS, CartState, reduce_cart
from storefront.core.domain_types import (
    CATALOG_OPERATIONS,
    SESSION_OPERATIONS,
    OperationKind,
)
from storefront.core.request_lifecycle import REQUEST_EVENTS, RequestState
from storefront.core.session_state import SESSION_EVENTS, SessionState, reduce_session


@dataclass(frozen=True)
class AppState:
    catalog: CatalogState = field(default_factory=CatalogState)
    cart: CartState = field(default_factory=CartState)
    session: SessionState = field(default_factory=SessionState)


def _slice_for(event: object) -> str | None:
    if isinstance(event, REQUEST_EVENTS):
        if event.kind in CATALOG_OPERATIONS:
            return "catalog"
        if event.kind in SESSION_OPERATIONS:
            return "session"
        return None
    if isinstance(event, CATALOG_EVENTS):
        return "catalog"
    if isinstance(event, CART_EVENTS):
        return "cart"
    if isinstance(event, SESSION_EVENTS):
        return "session"
    return None


_REDUCERS = {
    "catalog": reduce_catalog,
    "cart": reduce_cart,
    "session": reduce_session,
}


def reduce_app_state(state: AppState, event: object) -> AppState:
    """Apply one event to the owning slice. Pure, no IO."""
    name = _slice_for(event)
    if name is None:
        return state
    current = getattr(state, name)
    updated = _REDUCERS[name](current, event)
    if updated is current:
        return state
    return replace(state, **{name: updated})


def request_state(state: AppState, kind: OperationKind) -> RequestState:
    """Lifecycle of `kind` in whichever slice owns it."""
    if kind in SESSION_OPERATIONS:
        return state.session.request(kind)
    return state.catalog.request(kind)

"""Cart Service: cart and favorites intents."""

from storefront.core.cart_state import (
    CartState,
    FavoriteAdded,
    FavoriteRemoved,
    ItemAdded,
    ItemRemoved,
    QuantityUpdated,
)
from storefront.schemas.cart import CartItem
from storefront.services.store import Store


class CartService:
    """Synchronous cart mutations; each returns the resulting cart state."""

    def __init__(self, store: Store):
        self._store = store

    @property
    def state(self) -> CartState:
        return self._store.state.cart

    def add(self, item: CartItem) -> CartState:
        return self._store.dispatch(ItemAdded(item)).cart

    def remove(self, item: CartItem) -> CartState:
        return self._store.dispatch(ItemRemoved(item)).cart

    def update_quantity(self, item: CartItem) -> CartState:
        return self._store.dispatch(QuantityUpdated(item)).cart

    def add_favorite(self, item: CartItem) -> CartState:
        return self._store.dispatch(FavoriteAdded(item)).cart

    def remove_favorite(self, item: CartItem) -> CartState:
        return self._store.dispatch(FavoriteRemoved(item)).cart

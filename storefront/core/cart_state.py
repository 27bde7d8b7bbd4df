"""Cart State: cart and favorites line items with identity-based deduplication.

Invariants:
    - Identity of a line item is every field except quantity
    - add: first occurrence wins; a duplicate add is a silent no-op (no quantity increment)
    - remove / update_quantity on an absent identity are no-ops, never errors
    - Cart and favorites are independent collections with the same rules

Design Decisions:
    - Collections are tuples; every change builds a new tuple, a no-op returns the same one
"""

from collections.abc import Callable
from dataclasses import dataclass, replace

from storefront.schemas.cart import CartItem


@dataclass(frozen=True)
class CartState:
    """Cart slice of the application state. Process memory only."""
    items: tuple[CartItem, ...] = ()
    favorites: tuple[CartItem, ...] = ()

    @property
    def item_count(self) -> int:
        return sum(i.quantity for i in self.items)

    @property
    def subtotal(self) -> float:
        return sum(i.price * i.quantity for i in self.items if i.price is not None)

    def is_favorite(self, item: CartItem) -> bool:
        return find_index(self.favorites, item) > -1


def find_index(items: tuple[CartItem, ...], item: CartItem) -> int:
    """Position of the first line with the same identity, or -1."""
    for index, existing in enumerate(items):
        if existing.same_line(item):
            return index
    return -1


def add_line(items: tuple[CartItem, ...], item: CartItem) -> tuple[CartItem, ...]:
    if find_index(items, item) > -1:
        return items
    return (*items, item)


def remove_line(items: tuple[CartItem, ...], item: CartItem) -> tuple[CartItem, ...]:
    index = find_index(items, item)
    if index == -1:
        return items
    return items[:index] + items[index + 1:]


def replace_line(items: tuple[CartItem, ...], item: CartItem) -> tuple[CartItem, ...]:
    index = find_index(items, item)
    if index == -1 or items[index] == item:
        return items
    return (*items[:index], item, *items[index + 1:])


# ─── Events ──────────────────────────────────────────────────────

@dataclass(frozen=True)
class ItemAdded:
    item: CartItem


@dataclass(frozen=True)
class ItemRemoved:
    item: CartItem


@dataclass(frozen=True)
class QuantityUpdated:
    item: CartItem


@dataclass(frozen=True)
class FavoriteAdded:
    item: CartItem


@dataclass(frozen=True)
class FavoriteRemoved:
    item: CartItem


# event type -> (collection field, line operation)
_HANDLERS: dict[type, tuple[str, Callable[[tuple, CartItem], tuple]]] = {
    ItemAdded: ("items", add_line),
    ItemRemoved: ("items", remove_line),
    QuantityUpdated: ("items", replace_line),
    FavoriteAdded: ("favorites", add_line),
    FavoriteRemoved: ("favorites", remove_line),
}

CART_EVENTS = tuple(_HANDLERS)


def reduce_cart(state: CartState, event: object) -> CartState:
    entry = _HANDLERS.get(type(event))
    if entry is None:
        return state
    name, operation = entry
    current = getattr(state, name)
    updated = operation(current, event.item)
    if updated is current:
        return state
    return replace(state, **{name: updated})

"""Sort Engine: orders a product sequence by a sort key.

Invariants:
    - Never mutates its input; always returns a new list
    - No sort key: copy in server order
    - Equal keys tie-break on id ascending, in both directions
    - Idempotent: sorting a sorted list by the same key changes nothing
"""

from collections.abc import Callable, Sequence

from storefront.core.domain_types import SortDirection, SortField
from storefront.schemas.catalog import Product, Sort

# Every sortable field mapped explicitly
_SORT_VALUES: dict[SortField, Callable[[Product], object]] = {
    SortField.PRICE: lambda p: p.price,
    SortField.TITLE: lambda p: p.title.casefold(),
}


def sort_products(products: Sequence[Product], sort: Sort | None = None) -> list[Product]:
    if sort is None:
        return list(products)
    by_id = sorted(products, key=lambda p: p.id)
    # sorted() is stable with reverse=True too, so the id order survives on ties
    return sorted(
        by_id,
        key=_SORT_VALUES[sort.field],
        reverse=sort.direction is SortDirection.DESC,
    )

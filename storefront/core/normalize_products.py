"""Product Normalization: guarantees image and price-bound invariants on repository payloads.

Invariants:
    - A normalized product never has an empty images list (NO_IMAGE sentinel fills it)
    - The price envelope only widens, never narrows
    - An empty page yields total == 0 and leaves the envelope unchanged
    - total is the server-reported count, never recomputed from the page
    - Input products are never mutated

Design Decisions:
    - Malformed image entries ('["https://..."]', blanks) are cleaned, then dropped if empty
    - With an explicit price range in the filter, an existing envelope is kept as-is so the
      slider bounds do not collapse onto the user's own selection
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from storefront.core.domain_types import NO_IMAGE
from storefront.schemas.catalog import Filter, Product, ProductPage

PriceEnvelope = tuple[float, float]

_IMAGE_WRAPPERS = "[]\"' "


@dataclass(frozen=True)
class FilteredProducts:
    """Derived view of one fetched page. Not persisted."""
    products: tuple[Product, ...]
    total: int
    min_max_price: PriceEnvelope | None


def clean_images(images: Iterable[object] | None) -> list[str]:
    cleaned = []
    for raw in images or ():
        if not isinstance(raw, str):
            continue
        url = raw.strip(_IMAGE_WRAPPERS)
        if url:
            cleaned.append(url)
    return cleaned


def ensure_images(product: Product) -> Product:
    """Return the product with a usable, non-empty images list."""
    images = clean_images(product.images) or [NO_IMAGE]
    if images == product.images:
        return product
    return product.model_copy(update={"images": images})


def price_envelope(products: Sequence[Product]) -> PriceEnvelope | None:
    if not products:
        return None
    prices = [p.price for p in products]
    return (min(prices), max(prices))


def widen(
    prior: PriceEnvelope | None, incoming: PriceEnvelope | None,
) -> PriceEnvelope | None:
    if prior is None:
        return incoming
    if incoming is None:
        return prior
    return (min(prior[0], incoming[0]), max(prior[1], incoming[1]))


def in_price_range(product: Product, flt: Filter | None) -> bool:
    if flt is None:
        return True
    if flt.price_min is not None and product.price < flt.price_min:
        return False
    if flt.price_max is not None and product.price > flt.price_max:
        return False
    return True


def normalize_page(
    page: ProductPage,
    flt: Filter | None,
    prior_min_max: PriceEnvelope | None,
) -> FilteredProducts:
    """Normalize one repository page against the active filter. Pure, no IO."""
    if not page.products:
        return FilteredProducts(products=(), total=0, min_max_price=prior_min_max)

    products = tuple(
        ensure_images(p) for p in page.products if in_price_range(p, flt)
    )
    if flt is not None and flt.has_price_range and prior_min_max is not None:
        bounds = prior_min_max
    else:
        bounds = widen(prior_min_max, price_envelope(page.products))
    return FilteredProducts(products=products, total=page.total, min_max_price=bounds)

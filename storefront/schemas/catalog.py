"""Catalog Schemas: filter, sort key and product payloads.

Invariants:
    - Filter.price_min <= Filter.price_max when both are present
    - An explicit price range clears the single-point price (mutually exclusive)
    - Filter is frozen and hashable; every intent helper returns a new, validated Filter
    - Product.price >= 0; unknown product fields are preserved

Design Decisions:
    - Intent helpers go through model_validate, never model_copy: model_copy skips validators
    - Field names are pythonic; to_query_params() renders the REST names (categoryId, offset, limit)
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from storefront.core.domain_types import (
    ALL_CATEGORIES,
    DEFAULT_ITEMS_PER_PAGE,
    FIRST_PAGE,
    SortDirection,
    SortField,
)


# ─── Filter ──────────────────────────────────────────────────────

class Filter(BaseModel):
    """Query constraining which products are fetched."""
    model_config = ConfigDict(frozen=True)

    title: str = ""
    category_id: int = Field(ALL_CATEGORIES, ge=0)
    page: int = Field(FIRST_PAGE, ge=1)
    items_per_page: int = Field(DEFAULT_ITEMS_PER_PAGE, gt=0)
    price: float | None = Field(None, ge=0)
    price_min: float | None = Field(None, ge=0)
    price_max: float | None = Field(None, ge=0)

    @model_validator(mode="before")
    @classmethod
    def price_range_clears_price(cls, data: Any) -> Any:
        if isinstance(data, dict) and (
            data.get("price_min") is not None or data.get("price_max") is not None
        ):
            return {**data, "price": None}
        return data

    @model_validator(mode="after")
    def check_price_bounds(self) -> "Filter":
        if (
            self.price_min is not None
            and self.price_max is not None
            and self.price_min > self.price_max
        ):
            raise ValueError(
                f"price_min ({self.price_min}) exceeds price_max ({self.price_max})",
            )
        return self

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.items_per_page

    @property
    def has_price_range(self) -> bool:
        return self.price_min is not None or self.price_max is not None

    def _replace(self, **changes: Any) -> "Filter":
        return Filter.model_validate({**self.model_dump(), **changes})

    def with_title(self, title: str) -> "Filter":
        return self._replace(title=title, page=FIRST_PAGE)

    def with_category(self, category_id: int) -> "Filter":
        return self._replace(category_id=category_id, page=FIRST_PAGE)

    def with_page(self, page: int) -> "Filter":
        return self._replace(page=page)

    def with_items_per_page(self, items_per_page: int) -> "Filter":
        return self._replace(items_per_page=items_per_page, page=FIRST_PAGE)

    def with_price_range(self, price_min: float, price_max: float) -> "Filter":
        return self._replace(
            price_min=price_min, price_max=price_max, price=None, page=FIRST_PAGE,
        )

    def to_query_params(self, paginate: bool = True) -> dict[str, Any]:
        """Render as REST query parameters. Unset constraints are omitted."""
        params: dict[str, Any] = {}
        if paginate:
            params["offset"] = self.offset
            params["limit"] = self.items_per_page
        if self.title:
            params["title"] = self.title
        if self.category_id != ALL_CATEGORIES:
            params["categoryId"] = self.category_id
        for key in ("price", "price_min", "price_max"):
            value = getattr(self, key)
            if value is not None:
                params[key] = value
        return params


# ─── Sort ────────────────────────────────────────────────────────

class Sort(BaseModel):
    """Opaque sort key consumed by the sort engine."""
    model_config = ConfigDict(frozen=True)

    field: SortField
    direction: SortDirection = SortDirection.ASC


PRICE_ASC = Sort(field=SortField.PRICE, direction=SortDirection.ASC)
PRICE_DESC = Sort(field=SortField.PRICE, direction=SortDirection.DESC)
TITLE_ASC = Sort(field=SortField.TITLE, direction=SortDirection.ASC)
TITLE_DESC = Sort(field=SortField.TITLE, direction=SortDirection.DESC)


# ─── Products ────────────────────────────────────────────────────

class Category(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow")

    id: int
    name: str = ""
    image: str | None = None


class Product(BaseModel):
    """Product as served by the product repository."""
    model_config = ConfigDict(frozen=True, extra="allow")

    id: int
    title: str
    price: float = Field(ge=0)
    description: str = ""
    category: Category
    images: list[str] = Field(default_factory=list)

    @field_validator("images", mode="before")
    @classmethod
    def missing_images_as_empty(cls, v: Any) -> Any:
        return [] if v is None else v


class ProductPage(BaseModel):
    """One page of products plus the server-side count for the whole filter."""
    products: list[Product] = Field(default_factory=list)
    total: int = Field(0, ge=0)


class ProductDraft(BaseModel):
    """Payload for registering a new product."""
    title: str = Field(min_length=1)
    price: float = Field(ge=0)
    description: str = ""
    category_id: int = Field(ge=1)
    images: list[str] = Field(default_factory=list)

    def to_payload(self) -> dict:
        return {
            "title": self.title,
            "price": self.price,
            "description": self.description,
            "categoryId": self.category_id,
            "images": self.images,
        }


class ProductPatch(BaseModel):
    """Partial update; only the fields that are set are sent."""
    title: str | None = Field(None, min_length=1)
    price: float | None = Field(None, ge=0)
    description: str | None = None
    category_id: int | None = Field(None, ge=1)
    images: list[str] | None = None

    def to_payload(self) -> dict:
        payload = self.model_dump(exclude_none=True)
        if "category_id" in payload:
            payload["categoryId"] = payload.pop("category_id")
        return payload

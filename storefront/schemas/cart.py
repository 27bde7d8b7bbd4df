"""Cart Schemas: line items held in the cart and favorites collections.

Invariants:
    - quantity > 0
    - Identity of a line item is every field except quantity, including extra variant fields
"""

from pydantic import BaseModel, ConfigDict, Field


class CartItem(BaseModel):
    """One purchasable variant and how many of it the shopper wants."""
    model_config = ConfigDict(frozen=True, extra="allow")

    product_id: int
    title: str | None = None
    price: float | None = Field(None, ge=0)
    image: str | None = None
    size: str | None = None
    color: str | None = None
    quantity: int = Field(1, gt=0)

    def identity(self) -> dict:
        return self.model_dump(exclude={"quantity"})

    def same_line(self, other: "CartItem") -> bool:
        """True when both items describe the same variant, whatever their quantities."""
        return self.identity() == other.identity()

    def with_quantity(self, quantity: int) -> "CartItem":
        return CartItem.model_validate({**self.model_dump(), "quantity": quantity})

"""Domain Types: identity aliases, enums and constants shared across slices.

Invariants:
    - ProductId and RequestToken wrap int; never pass bare ints across slice boundaries
    - NO_IMAGE is the single sentinel for products without a usable image
    - All valid states encoded as Enums, no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

ProductId = NewType("ProductId", int)
CategoryId = NewType("CategoryId", int)
RequestToken = NewType("RequestToken", int)


# ─── Constants ───────────────────────────────────────────────────

NO_IMAGE: str = "no-image"
UNKNOWN_ERROR_MESSAGE: str = "Unknown error..."
ALL_CATEGORIES: int = 0
FIRST_PAGE: int = 1
DEFAULT_ITEMS_PER_PAGE: int = 30


# ─── Enums ───────────────────────────────────────────────────────

class RequestStatus(str, Enum):
    """Lifecycle of one asynchronous operation."""
    IDLE = "idle"
    PENDING = "pending"
    FULFILLED = "fulfilled"
    REJECTED = "rejected"


class OperationKind(str, Enum):
    """Every tracked async operation. Each kind owns its own request token sequence."""
    FETCH_PRODUCTS = "fetch_products"
    FETCH_PRODUCT = "fetch_product"
    REGISTER_PRODUCT = "register_product"
    UPDATE_PRODUCT = "update_product"
    DELETE_PRODUCT = "delete_product"
    REGISTER_USER = "register_user"
    LOGIN_USER = "login_user"
    RESTORE_SESSION = "restore_session"


CATALOG_OPERATIONS: frozenset[OperationKind] = frozenset({
    OperationKind.FETCH_PRODUCTS,
    OperationKind.FETCH_PRODUCT,
    OperationKind.REGISTER_PRODUCT,
    OperationKind.UPDATE_PRODUCT,
    OperationKind.DELETE_PRODUCT,
})

# Operations whose result lands in a product detail slot
DETAIL_OPERATIONS: frozenset[OperationKind] = frozenset({
    OperationKind.FETCH_PRODUCT,
    OperationKind.REGISTER_PRODUCT,
    OperationKind.UPDATE_PRODUCT,
})

SESSION_OPERATIONS: frozenset[OperationKind] = frozenset({
    OperationKind.REGISTER_USER,
    OperationKind.LOGIN_USER,
    OperationKind.RESTORE_SESSION,
})


class SortField(str, Enum):
    PRICE = "price"
    TITLE = "title"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class UserRole(str, Enum):
    CUSTOMER = "customer"
    ADMIN = "admin"

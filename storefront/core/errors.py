"""Error Hierarchy: typed, categorized exceptions for storefront failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Repository failures are the only kind surfaced into slice state
    - error_message() never returns an empty string (falls back to UNKNOWN_ERROR_MESSAGE)

Design Decisions:
    - Single hierarchy with StorefrontError base: the request runner catches all of it
    - ErrorContext as dataclass: carries operation metadata without coupling to logging
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from storefront.core.domain_types import UNKNOWN_ERROR_MESSAGE


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    NETWORK = "network"
    SERVER = "server"
    STORAGE = "storage"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for logging and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    operation: str | None = None
    request_token: int | None = None
    resource_id: str | None = None
    debug_info: dict[str, Any] | None = None


class StorefrontError(Exception):
    """Base exception for all storefront errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()

    def to_dict(self) -> dict:
        """Structured form for logs and diagnostics."""
        return {
            "code": self.code,
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "timestamp": self.context.timestamp.isoformat(),
            "context": {
                "operation": self.context.operation,
                "request_token": self.context.request_token,
                "resource_id": self.context.resource_id,
            },
        }


# ─── Request Errors ─────────────────────────────────────────────

class RepositoryError(StorefrontError):
    """A repository call failed: network failure or server-side rejection."""
    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        context: ErrorContext | None = None,
    ):
        category = ErrorCategory.NETWORK if status_code is None else ErrorCategory.SERVER
        super().__init__(
            message, "REPOSITORY_ERROR", category, ErrorSeverity.ERROR, context,
        )
        self.status_code = status_code


class ResourceNotFoundError(RepositoryError):
    """Requested resource does not exist on the server."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found", 404, context,
        )
        self.code = "RESOURCE_NOT_FOUND"
        self.category = ErrorCategory.RESOURCE_NOT_FOUND


# ─── Storage Errors ─────────────────────────────────────────────

class TokenStoreError(StorefrontError):
    """Durable token storage failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Token store {operation} failed: {message}",
            "TOKEN_STORE_ERROR", ErrorCategory.STORAGE,
            ErrorSeverity.CRITICAL, context,
        )
        self.operation = operation


def error_message(exc: BaseException | None) -> str:
    """Human-readable message of a failure, or the fixed fallback when absent."""
    if exc is None:
        return UNKNOWN_ERROR_MESSAGE
    message = getattr(exc, "message", None)
    if not isinstance(message, str) or not message.strip():
        message = str(exc)
    return message if message.strip() else UNKNOWN_ERROR_MESSAGE

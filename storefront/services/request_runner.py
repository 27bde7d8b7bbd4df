"""Request Runner: drives one repository call through the request lifecycle.

Invariants:
    - Every call gets a fresh token and a RequestStarted event before it is awaited
    - Failures become RequestFailed with error_message(exc); nothing is re-raised
    - A resolution whose token is no longer the latest is discarded with no side effects
    - on_success runs before RequestSucceeded; if it raises, the request is rejected instead

Design Decisions:
    - Catch-all except Exception at this boundary only: slices surface errors as state
"""

import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from storefront.core.domain_types import OperationKind
from storefront.core.errors import error_message
from storefront.core.request_lifecycle import (
    RequestFailed,
    RequestStarted,
    RequestSucceeded,
)
from storefront.services.store import Store

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def run_request(
    store: Store,
    kind: OperationKind,
    call: Callable[[], Awaitable[T]],
    on_success: Callable[[T], None] | None = None,
) -> T | None:
    """Await `call` under `kind`'s lifecycle. Returns the payload, or None on failure/staleness."""
    token = store.next_token()
    store.dispatch(RequestStarted(kind, token))
    log_extra = {"operation": kind.value, "request_token": token}
    logger.debug(f"{kind.value} started", extra=log_extra)

    try:
        payload = await call()
        if not store.is_latest(kind, token):
            logger.debug(f"{kind.value} resolved stale, discarded", extra=log_extra)
            return None
        if on_success is not None:
            on_success(payload)
    except Exception as e:
        message = error_message(e)
        logger.warning(
            f"{kind.value} failed: {message}",
            extra={**log_extra, "error_code": getattr(e, "code", None)},
        )
        store.dispatch(RequestFailed(kind, token, message))
        return None

    store.dispatch(RequestSucceeded(kind, token, payload))
    return payload

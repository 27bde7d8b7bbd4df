"""Store: holds the AppState, applies events, notifies subscribers.

Invariants:
    - State is only replaced through dispatch(); never mutated in place
    - Subscribers are notified only when the state object actually changed
    - A failing subscriber is logged and never blocks dispatch or other subscribers
    - Request tokens are issued in strictly increasing order per store

Design Decisions:
    - Explicit object passed to services and presentation, not a module-level global
    - Listeners receive (new_state, previous_state) so effects can diff cheaply
"""

import itertools
import logging
from collections.abc import Callable

from storefront.core.app_state import AppState, reduce_app_state, request_state
from storefront.core.domain_types import OperationKind, RequestToken
from storefront.core.request_lifecycle import is_latest

logger = logging.getLogger(__name__)

Listener = Callable[[AppState, AppState], None]


class Store:
    """Single source of truth for catalog, cart and session state."""

    def __init__(self, state: AppState | None = None):
        self._state = state or AppState()
        self._listeners: list[Listener] = []
        self._tokens = itertools.count(1)

    @property
    def state(self) -> AppState:
        return self._state

    def next_token(self) -> RequestToken:
        return RequestToken(next(self._tokens))

    def is_latest(self, kind: OperationKind, token: int) -> bool:
        return is_latest(request_state(self._state, kind), token)

    def dispatch(self, event: object) -> AppState:
        previous = self._state
        self._state = reduce_app_state(previous, event)
        if self._state is not previous:
            self._notify(previous)
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener. Returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, previous: AppState) -> None:
        for listener in list(self._listeners):
            try:
                listener(self._state, previous)
            except Exception as e:
                logger.error(
                    f"Store listener {listener!r} failed: {e}", exc_info=True,
                )

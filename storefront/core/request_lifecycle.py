"""Request Lifecycle: idle -> pending -> fulfilled | rejected, per operation kind.

Invariants:
    - Entering pending clears any prior error for that operation
    - Re-entrant: a fulfilled or rejected request may begin again
    - A superseded request returns to idle; its in-flight resolution is stale
    - Only the latest issued token for an operation kind may settle it; stale
      resolutions leave state untouched
    - A rejection always carries a non-empty message

Design Decisions:
    - RequestState is frozen; transitions return new instances
    - track_* helpers return None for stale tokens so slice reducers can
      short-circuit and return their state object unchanged
"""

from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any

from storefront.core.domain_types import (
    UNKNOWN_ERROR_MESSAGE,
    OperationKind,
    RequestStatus,
    RequestToken,
)


@dataclass(frozen=True)
class RequestState:
    """Lifecycle of one operation kind within a slice."""
    status: RequestStatus = RequestStatus.IDLE
    error: str | None = None
    token: int = 0

    @property
    def loading(self) -> bool:
        return self.status is RequestStatus.PENDING


# ─── Events ──────────────────────────────────────────────────────

@dataclass(frozen=True)
class RequestStarted:
    kind: OperationKind
    token: RequestToken


@dataclass(frozen=True)
class RequestSucceeded:
    kind: OperationKind
    token: RequestToken
    payload: Any = None


@dataclass(frozen=True)
class RequestFailed:
    kind: OperationKind
    token: RequestToken
    message: str = UNKNOWN_ERROR_MESSAGE


REQUEST_EVENTS = (RequestStarted, RequestSucceeded, RequestFailed)


# ─── Transitions ─────────────────────────────────────────────────

def is_latest(state: RequestState, token: int) -> bool:
    return token == state.token


def begin(state: RequestState, token: int) -> RequestState:
    """Enter pending with a newly issued token. Older tokens are ignored."""
    if token <= state.token:
        return state
    return RequestState(status=RequestStatus.PENDING, error=None, token=token)


def fulfill(state: RequestState, token: int) -> RequestState:
    if not is_latest(state, token) or not state.loading:
        return state
    return replace(state, status=RequestStatus.FULFILLED, error=None)


def reject(state: RequestState, token: int, message: str | None) -> RequestState:
    if not is_latest(state, token) or not state.loading:
        return state
    return replace(
        state,
        status=RequestStatus.REJECTED,
        error=message or UNKNOWN_ERROR_MESSAGE,
    )


def supersede(state: RequestState, token: int) -> RequestState:
    """Abandon a pending request: back to idle under a newer token."""
    if not state.loading or token <= state.token:
        return state
    return RequestState(token=token)


# ─── Per-slice bookkeeping ───────────────────────────────────────

def request_of(
    requests: Mapping[OperationKind, RequestState], kind: OperationKind,
) -> RequestState:
    return requests.get(kind, RequestState())


def _updated(
    requests: Mapping[OperationKind, RequestState],
    kind: OperationKind,
    new: RequestState,
) -> dict[OperationKind, RequestState] | None:
    if new is request_of(requests, kind):
        return None
    return {**requests, kind: new}


def track_started(
    requests: Mapping[OperationKind, RequestState], event: RequestStarted,
) -> dict[OperationKind, RequestState] | None:
    """New request mapping after a start, or None if the token is stale."""
    return _updated(requests, event.kind, begin(request_of(requests, event.kind), event.token))


def track_succeeded(
    requests: Mapping[OperationKind, RequestState], event: RequestSucceeded,
) -> dict[OperationKind, RequestState] | None:
    return _updated(requests, event.kind, fulfill(request_of(requests, event.kind), event.token))


def track_failed(
    requests: Mapping[OperationKind, RequestState], event: RequestFailed,
) -> dict[OperationKind, RequestState] | None:
    return _updated(
        requests, event.kind,
        reject(request_of(requests, event.kind), event.token, event.message),
    )


def any_loading(requests: Mapping[OperationKind, RequestState]) -> bool:
    return any(r.loading for r in requests.values())

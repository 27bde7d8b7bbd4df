"""Session State: the signed-in user and the auth request lifecycles.

Invariants:
    - register and login success never set `user`
    - restore_session success sets `user` from the resolved profile
    - Any rejection nulls `user` and surfaces the error message
    - LoggedOut nulls `user` synchronously; token storage is the shell's concern
    - LoggedOut returns pending register, login and restore requests to idle under its
      own token, so their late resolutions are stale and cannot sign the user back in

Design Decisions:
    - Token persistence is a side effect, applied by the service before the
      success event, never inside this pure transition
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace

from storefront.core.domain_types import OperationKind, RequestToken
from storefront.core.request_lifecycle import (
    RequestFailed,
    RequestStarted,
    RequestState,
    RequestSucceeded,
    any_loading,
    request_of,
    supersede,
    track_failed,
    track_started,
    track_succeeded,
)
from storefront.schemas.user import User


@dataclass(frozen=True)
class SessionState:
    """User session slice of the application state. Pure, no IO."""
    user: User | None = None
    requests: Mapping[OperationKind, RequestState] = field(default_factory=dict)
    error: str | None = None

    @property
    def loading(self) -> bool:
        return any_loading(self.requests)

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    def request(self, kind: OperationKind) -> RequestState:
        return request_of(self.requests, kind)


@dataclass(frozen=True)
class LoggedOut:
    """Sign-out. `token` supersedes every session request still in flight."""
    token: RequestToken = RequestToken(0)


def _on_logged_out(state: SessionState, event: LoggedOut) -> SessionState:
    requests = {
        kind: supersede(request, event.token) for kind, request in state.requests.items()
    }
    superseded = any(requests[kind] is not state.requests[kind] for kind in requests)
    if state.user is None and not superseded:
        return state
    return replace(state, user=None, requests=requests if superseded else state.requests)


def _on_started(state: SessionState, event: RequestStarted) -> SessionState:
    requests = track_started(state.requests, event)
    if requests is None:
        return state
    return replace(state, requests=requests, error=None)


def _on_succeeded(state: SessionState, event: RequestSucceeded) -> SessionState:
    requests = track_succeeded(state.requests, event)
    if requests is None:
        return state
    if event.kind is OperationKind.RESTORE_SESSION:
        return replace(state, requests=requests, user=event.payload)
    return replace(state, requests=requests)


def _on_failed(state: SessionState, event: RequestFailed) -> SessionState:
    requests = track_failed(state.requests, event)
    if requests is None:
        return state
    return replace(
        state, requests=requests, user=None, error=requests[event.kind].error,
    )


_HANDLERS: dict[type, Callable[[SessionState, object], SessionState]] = {
    LoggedOut: _on_logged_out,
    RequestStarted: _on_started,
    RequestSucceeded: _on_succeeded,
    RequestFailed: _on_failed,
}

SESSION_EVENTS = (LoggedOut,)


def reduce_session(state: SessionState, event: object) -> SessionState:
    handler = _HANDLERS.get(type(event))
    if handler is None:
        return state
    return handler(state, event)

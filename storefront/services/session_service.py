"""User Session Service: register, login, session restore and logout.

Invariants:
    - login success writes the token pair to the token store before the success event
    - a stale login resolution never writes tokens
    - logout clears the token store and nulls the user synchronously; it cannot fail
    - logout supersedes in-flight register, login and restore requests; their
      late resolutions neither write tokens nor set `user`
    - resume() restores the session only when the token store holds tokens

Design Decisions:
    - Token store failures on logout are logged, the user is still signed out locally
"""

import logging

from storefront.core.domain_types import OperationKind
from storefront.core.errors import TokenStoreError
from storefront.core.repository_protocols import AuthRepository, TokenStore
from storefront.core.session_state import LoggedOut, SessionState
from storefront.schemas.user import LoginCredentials, RegisterUserInfo, User, UserToken
from storefront.services.request_runner import run_request
from storefront.services.store import Store

logger = logging.getLogger(__name__)


class UserSessionService:
    """Authentication intents against the auth repository and token store."""

    def __init__(self, store: Store, repository: AuthRepository, token_store: TokenStore):
        self._store = store
        self._repository = repository
        self._token_store = token_store

    @property
    def state(self) -> SessionState:
        return self._store.state.session

    async def register(self, info: RegisterUserInfo) -> User | None:
        """Create an account. Does not sign in."""
        return await run_request(
            self._store, OperationKind.REGISTER_USER,
            lambda: self._repository.register_user(info),
        )

    async def login(self, credentials: LoginCredentials) -> UserToken | None:
        """Authenticate and persist tokens. `user` stays unset until restore_session."""
        return await run_request(
            self._store, OperationKind.LOGIN_USER,
            lambda: self._repository.login_user(credentials),
            on_success=self._token_store.set,
        )

    async def restore_session(self, tokens: UserToken) -> User | None:
        return await run_request(
            self._store, OperationKind.RESTORE_SESSION,
            lambda: self._repository.get_user_with_session(tokens),
        )

    async def resume(self) -> User | None:
        """Restore the session from persisted tokens, if any."""
        try:
            tokens = self._token_store.get()
        except TokenStoreError as e:
            logger.error(f"Could not read stored tokens: {e.message}")
            return None
        if tokens is None:
            return None
        return await self.restore_session(tokens)

    def logout(self) -> None:
        try:
            self._token_store.clear()
        except TokenStoreError as e:
            logger.error(f"Could not clear stored tokens: {e.message}")
        self._store.dispatch(LoggedOut(self._store.next_token()))

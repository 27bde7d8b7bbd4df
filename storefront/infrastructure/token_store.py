"""Token Stores: TokenStore implementations.

Invariants:
    - SqlTokenStore keeps at most one token pair; set() overwrites, clear() empties
    - SqlTokenStore survives process restarts (file-backed database URL)
    - Every session rolls back on failure; SQLAlchemy errors map to TokenStoreError

Design Decisions:
    - Synchronous engine: the TokenStore contract is synchronous (logout has no async step)
    - InMemoryTokenStore for tests and ephemeral clients
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone

from sqlalchemy import create_engine, delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from storefront.core.errors import TokenStoreError
from storefront.db.base import Base
from storefront.models.stored_token import SINGLETON_ID, StoredToken
from storefront.schemas.user import UserToken

logger = logging.getLogger(__name__)


class InMemoryTokenStore:
    """Process-local token store."""

    def __init__(self, tokens: UserToken | None = None):
        self._tokens = tokens

    def set(self, tokens: UserToken) -> None:
        self._tokens = tokens

    def get(self) -> UserToken | None:
        return self._tokens

    def clear(self) -> None:
        self._tokens = None


class SqlTokenStore:
    """Durable token store backed by any SQLAlchemy database URL."""

    def __init__(self, database_url: str):
        self.engine = create_engine(database_url)
        Base.metadata.create_all(self.engine, tables=[StoredToken.__table__])
        self._session_factory = sessionmaker(self.engine, expire_on_commit=False)

    @contextmanager
    def _session(self, operation: str) -> Iterator[Session]:
        """Provide session with commit on success, rollback on exception."""
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"Token store {operation} error: {e}")
            raise TokenStoreError(str(e), operation)
        finally:
            session.close()

    def set(self, tokens: UserToken) -> None:
        with self._session("set") as session:
            session.merge(StoredToken(
                id=SINGLETON_ID,
                access_token=tokens.access_token,
                refresh_token=tokens.refresh_token,
                updated_at=datetime.now(timezone.utc),
            ))
        logger.info("Session tokens stored")

    def get(self) -> UserToken | None:
        with self._session("get") as session:
            row = session.get(StoredToken, SINGLETON_ID)
            if row is None:
                return None
            return UserToken(
                access_token=row.access_token, refresh_token=row.refresh_token,
            )

    def clear(self) -> None:
        with self._session("clear") as session:
            session.execute(delete(StoredToken))
        logger.info("Session tokens cleared")

    def dispose(self) -> None:
        self.engine.dispose()

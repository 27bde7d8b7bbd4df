"""StoredToken ORM: the persisted session token pair.

Invariants:
    - At most one row, always with id == SINGLETON_ID
    - Tokens stored verbatim; never parsed or decoded
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from storefront.db.base import Base

SINGLETON_ID = 1


class StoredToken(Base):
    """Token pair of the signed-in user on this device."""
    __tablename__ = "stored_tokens"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=SINGLETON_ID)
    access_token: Mapped[str] = mapped_column(Text, nullable=False)
    refresh_token: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

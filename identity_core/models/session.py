"""Session ORM — bearer credential minted after a successful authentication.

Invariants:
    - token is 96 hex chars (48 random bytes) and unique
    - user_id references users.id; a session never outlives the concept of its user
    - expires_at - created_at == SESSION_LIFETIME for every row this core writes

Design Decisions:
    - Unique constraint on token even though collisions are astronomically
      unlikely: a duplicate fails loudly instead of aliasing two users
    - No relationship() back to User: sessions are only ever written, never navigated
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from identity_core.core.domain_types import SESSION_TOKEN_BYTES
from identity_core.db.base import Base
from identity_core.models.user import utc_now


class Session(Base):
    """Issued session — opaque token with a fixed expiry."""
    __tablename__ = "sessions"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    token: Mapped[str] = mapped_column(
        String(SESSION_TOKEN_BYTES * 2), nullable=False, unique=True,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False,
    )
    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now,
    )

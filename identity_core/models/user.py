"""User ORM — identity record keyed by case-folded username and email.

Invariants:
    - id is a UUID assigned on insert
    - lower(username) and lower(email) are each unique (functional unique indexes)
    - password holds a 60-char bcrypt hash, never plaintext
    - created_at/updated_at are timezone-aware UTC

Design Decisions:
    - Functional indexes on lower(): the database is the final arbiter of
      case-insensitive uniqueness when two creates race
    - Python-side defaults: Core inserts built from this table get id and
      timestamps without dialect-specific SQL functions
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from identity_core.core.domain_types import (
    EMAIL_MAX_LENGTH, PASSWORD_HASH_LENGTH, USERNAME_MAX_LENGTH,
)
from identity_core.db.base import Base


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """User identity — owns its sessions by reference only."""
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    username: Mapped[str] = mapped_column(
        String(USERNAME_MAX_LENGTH), nullable=False,
    )
    email: Mapped[str] = mapped_column(
        String(EMAIL_MAX_LENGTH), nullable=False,
    )
    password: Mapped[str] = mapped_column(
        String(PASSWORD_HASH_LENGTH), nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now,
    )


Index("uq_users_username_lower", func.lower(User.username), unique=True)
Index("uq_users_email_lower", func.lower(User.email), unique=True)

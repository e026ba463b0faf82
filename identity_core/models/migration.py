"""Migration Ledger ORM — one row per applied schema migration.

Invariants:
    - name is the primary key: a migration can be recorded at most once
    - Rows are inserted in the same transaction as the migration they describe
    - The table is created by the first mutating migration run, not by a migration

Design Decisions:
    - Separate from alembic_version: Alembic keeps only the current head,
      the ledger keeps the full history with timestamps
"""

from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from identity_core.db.base import Base
from identity_core.models.user import utc_now


class MigrationLedgerEntry(Base):
    """Applied migration — name plus when it ran."""
    __tablename__ = "schema_migrations"

    name: Mapped[str] = mapped_column(String(255), primary_key=True)
    applied_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now,
    )

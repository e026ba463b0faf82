"""Migration Schemas — one record per schema revision, pending or applied."""

from datetime import datetime

from pydantic import BaseModel

from identity_core.core.domain_types import MigrationState


class MigrationRecord(BaseModel):
    """Revision name, its one-line description, and when it was applied (None while pending)."""
    name: str
    description: str | None = None
    applied_at: datetime | None = None

    @property
    def state(self) -> MigrationState:
        if self.applied_at is None:
            return MigrationState.PENDING
        return MigrationState.APPLIED

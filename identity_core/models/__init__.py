"""ORM Models — SQLAlchemy declarative tables for users, sessions and the migration ledger.

Invariants:
    - All models inherit from Base (db/base.py)
    - Services execute Core statements built from Model.__table__, not ORM sessions

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before migrations run
"""

from identity_core.models.user import User  # noqa: F401
from identity_core.models.session import Session  # noqa: F401
from identity_core.models.migration import MigrationLedgerEntry  # noqa: F401

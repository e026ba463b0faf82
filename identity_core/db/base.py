"""SQLAlchemy Declarative Base — shared base class for all ORM tables.

Invariants:
    - users, sessions and schema_migrations all hang off Base.metadata
    - Base.metadata is what Alembic compares against for autogenerate

Design Decisions:
    - Separate file for Base: avoids circular imports between models
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all identity-core ORM models."""
    pass

"""Alembic environment — async migration runner for identity-core.

Runs in two ways:
    - Programmatically (MigrationCoordinator): a live sync connection is
      handed over in config.attributes["connection"]
    - From the alembic CLI: builds its own async engine from Settings

Design Decisions:
    - transaction_per_migration: each revision commits on its own, so a
      failure at revision k leaves revisions before k applied
    - Every applied revision is written to schema_migrations inside its own
      transaction (on_version_apply), whoever triggered the run
    - Offline (--sql) mode emits DDL only; the ledger is not maintained there
"""

import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

from alembic import context

from identity_core.config import get_settings
from identity_core.db.base import Base
# Import all models so Base.metadata has them
from identity_core.models.user import User, utc_now  # noqa: F401
from identity_core.models.session import Session  # noqa: F401
from identity_core.models.migration import MigrationLedgerEntry

config = context.config
if config.config_file_name is not None and "connection" not in config.attributes:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata
ledger = MigrationLedgerEntry.__table__


def _get_database_url() -> str:
    return get_settings().sqlalchemy_url


def _record_in_ledger(ctx, step, heads, run_args) -> None:
    """on_version_apply hook: runs inside the revision's own transaction."""
    if not step.is_upgrade:
        return
    applied_at = utc_now()
    ctx.connection.execute(
        ledger.insert().values(name=step.up_revision_id, applied_at=applied_at),
    )
    applied = config.attributes.get("applied_migrations")
    if applied is not None:
        applied.append({
            "name": step.up_revision_id,
            "description": step.up_revision.doc,
            "applied_at": applied_at,
        })


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode."""
    context.configure(
        url=_get_database_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        transaction_per_migration=True,
    )
    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    ledger.create(connection, checkfirst=True)
    connection.commit()
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        transaction_per_migration=True,
        on_version_apply=_record_in_ledger,
    )
    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    """Run migrations in 'online' mode with async engine."""
    configuration = config.get_section(config.config_ini_section, {})
    configuration["sqlalchemy.url"] = _get_database_url()
    connectable = async_engine_from_config(
        configuration,
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)
        await connection.commit()
    await connectable.dispose()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode."""
    connection = config.attributes.get("connection")
    if connection is not None:
        do_run_migrations(connection)
        return
    asyncio.run(run_async_migrations())


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()

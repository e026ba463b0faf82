"""Migration Coordinator — previews and applies pending schema revisions.

Invariants:
    - list_pending() never writes: it reads alembic_version and the script directory only
    - apply_pending() applies revisions oldest-first, each in its own transaction,
      and returns exactly the revisions it applied ([] when already at head)
    - A revision, once applied, is never applied again (Pending -> Applied is terminal)
    - Every failure surfaces as ServiceError with the original exception as cause;
      revisions committed before the failure stay committed
    - Each call holds one connection for its duration and releases it before returning

Design Decisions:
    - Alembic is the migration engine; the live connection is handed to env.py via
      config.attributes so no second engine or event loop is created
    - Alembic runs synchronously inside AsyncConnection.run_sync
    - No downgrade entry point: migrations are forward-only
"""

import logging

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from sqlalchemy.engine import Connection

from identity_core.core.errors import ServiceError
from identity_core.infrastructure.database import DatabaseGateway
from identity_core.schemas.migration import MigrationRecord

logger = logging.getLogger(__name__)

MIGRATIONS_LOCATION = "identity_core:migrations"


def build_alembic_config() -> Config:
    config = Config()
    config.set_main_option("script_location", MIGRATIONS_LOCATION)
    return config


def _pending_revisions(connection: Connection) -> list[MigrationRecord]:
    script = ScriptDirectory.from_config(build_alembic_config())
    current_heads = MigrationContext.configure(connection).get_current_heads()
    revisions = list(script.iterate_revisions(
        "heads", current_heads, implicit_base=True,
    ))
    return [
        MigrationRecord(name=revision.revision, description=revision.doc)
        for revision in reversed(revisions)
    ]


def _upgrade_to_head(connection: Connection) -> list[MigrationRecord]:
    config = build_alembic_config()
    applied: list[dict] = []
    config.attributes["connection"] = connection
    config.attributes["applied_migrations"] = applied
    command.upgrade(config, "heads")
    return [MigrationRecord(**entry) for entry in applied]


class MigrationCoordinator:
    """Runs the Alembic engine in preview or mutating mode."""

    def __init__(self, gateway: DatabaseGateway):
        self._gateway = gateway

    async def list_pending(self) -> list[MigrationRecord]:
        try:
            async with self._gateway.connect() as connection:
                return await connection.run_sync(_pending_revisions)
        except Exception as e:
            logger.error(f"Listing migrations failed: {e}", exc_info=True)
            raise ServiceError(
                message="Error fetching pending migrations.", cause=e,
            ) from e

    async def apply_pending(self) -> list[MigrationRecord]:
        try:
            async with self._gateway.connect() as connection:
                applied = await connection.run_sync(_upgrade_to_head)
                await connection.commit()
        except Exception as e:
            logger.error(f"Running migrations failed: {e}", exc_info=True)
            raise ServiceError(
                message="Error running migrations.", cause=e,
            ) from e

        for record in applied:
            logger.info("Migration applied", extra={"migration": record.name})
        return applied

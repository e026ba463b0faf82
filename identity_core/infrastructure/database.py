"""Connection Gateway — one database connection per logical operation.

Invariants:
    - Every query() opens its own connection and closes it on every exit path
    - Statements run inside a transaction: commit on success, rollback on failure
    - Failures are logged and re-raised; callers get a result or an exception, never None
    - No retries, no pooling (NullPool): connection count stays observable per request

Design Decisions:
    - Singleton gateway initialized on startup: FastAPI lifespan manages lifecycle
      (no global import side effects)
    - Statements may be raw SQL text (":name" binds) or SQLAlchemy Core executables
    - TLS policy resolved once from Settings: explicit CA > required in production > off
"""

import logging
import ssl
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, AsyncIterator

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection, create_async_engine
from sqlalchemy.pool import NullPool
from sqlalchemy.sql import Executable

from identity_core.config import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QueryResult:
    """Rows as plain dicts plus the affected/returned row count."""
    rows: list[dict[str, Any]] = field(default_factory=list)
    row_count: int = 0


def resolve_ssl(settings: Settings) -> ssl.SSLContext | bool:
    """TLS for the PostgreSQL driver: trust the configured CA, else require it only in production."""
    if settings.postgres_ca:
        return ssl.create_default_context(cadata=settings.postgres_ca)
    return settings.is_production


class DatabaseGateway:
    """Executes statements on short-lived connections."""

    def __init__(self, settings: Settings):
        url = make_url(settings.sqlalchemy_url)
        connect_args: dict[str, Any] = {}
        if url.get_backend_name() == "postgresql":
            connect_args["ssl"] = resolve_ssl(settings)
        self.database_name = url.database
        self.engine = create_async_engine(
            url, poolclass=NullPool, connect_args=connect_args,
        )

    @property
    def dialect_name(self) -> str:
        return self.engine.dialect.name

    @asynccontextmanager
    async def connect(self) -> AsyncIterator[AsyncConnection]:
        """Provide one connection; closed (and any open transaction rolled back) on exit."""
        async with self.engine.connect() as connection:
            yield connection

    async def query(
        self,
        statement: str | Executable,
        parameters: dict[str, Any] | None = None,
    ) -> QueryResult:
        """Run a single statement on a fresh connection."""
        if isinstance(statement, str):
            statement = text(statement)
        try:
            async with self.connect() as connection:
                result = await connection.execute(statement, parameters)
                if result.returns_rows:
                    rows = [dict(row) for row in result.mappings()]
                    row_count = len(rows)
                else:
                    rows = []
                    row_count = result.rowcount
                await connection.commit()
        except SQLAlchemyError as e:
            logger.error(f"DB query failed: {e}")
            raise
        return QueryResult(rows=rows, row_count=row_count)

    async def dispose(self) -> None:
        await self.engine.dispose()


# Singleton (initialized on startup)
gateway: DatabaseGateway | None = None


def init_gateway(settings: Settings) -> DatabaseGateway:
    global gateway
    gateway = DatabaseGateway(settings)
    return gateway


def get_gateway() -> DatabaseGateway:
    """FastAPI dependency for the connection gateway."""
    if not gateway:
        raise RuntimeError("Database not initialized")
    return gateway

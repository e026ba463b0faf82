"""Status — reports database version, connection limit and open connections.

Invariants:
    - Read-only: every figure comes from a plain query through the gateway
    - Always 200 when the database answers; a database failure is a 500
    - SQLite (tests, local runs) reports its version only; the limits are PostgreSQL figures
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from identity_core.infrastructure.database import DatabaseGateway, get_gateway

router = APIRouter(prefix="/api/v1/status", tags=["status"])


@router.get("")
async def get_status(gateway: DatabaseGateway = Depends(get_gateway)):
    return {
        "updated_at": datetime.now(timezone.utc).isoformat(),
        "dependencies": {"database": await _database_status(gateway)},
    }


async def _database_status(gateway: DatabaseGateway) -> dict:
    if gateway.dialect_name != "postgresql":
        result = await gateway.query("SELECT sqlite_version() AS version;")
        return {
            "version": result.rows[0]["version"],
            "max_connections": None,
            "opened_connections": None,
        }

    version = await gateway.query("SHOW server_version;")
    max_connections = await gateway.query("SHOW max_connections;")
    opened = await gateway.query(
        "SELECT count(*)::int AS count FROM pg_stat_activity WHERE datname = :database;",
        {"database": gateway.database_name},
    )
    return {
        "version": version.rows[0]["server_version"],
        "max_connections": int(max_connections.rows[0]["max_connections"]),
        "opened_connections": opened.rows[0]["count"],
    }

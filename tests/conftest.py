"""Root conftest — shared test configuration and database fixtures.

Invariants:
    - Every test gets a fresh SQLite file database under tmp_path
    - Settings are built explicitly per test (environment=test → cheapest bcrypt cost)
    - get_gateway and get_settings are overridden so routes hit the test database

Design Decisions:
    - SQLite file, not :memory: — the gateway opens a new connection per query,
      and each :memory: connection would see an empty database
    - Migrations are applied through MigrationCoordinator, the same path production uses
"""

import os
from uuid import uuid4

import pytest
from httpx import ASGITransport, AsyncClient

# Ensure tests never reach a real database or pay production hash cost
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")

from identity_core.config import Settings, get_settings  # noqa: E402
from identity_core.infrastructure.database import (  # noqa: E402
    DatabaseGateway, get_gateway,
)
from identity_core.main import app  # noqa: E402
from identity_core.schemas.user import UserCreate  # noqa: E402
from identity_core.services.migrator import MigrationCoordinator  # noqa: E402
from identity_core.services.password import CredentialService  # noqa: E402
from identity_core.services.user_store import IdentityStore  # noqa: E402


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        environment="test",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'identity.db'}",
    )


@pytest.fixture
async def gateway(settings):
    """Gateway on an empty database (no tables yet)."""
    gw = DatabaseGateway(settings)
    yield gw
    await gw.dispose()


@pytest.fixture
async def migrated_gateway(gateway):
    """Gateway on a database with every migration applied."""
    await MigrationCoordinator(gateway).apply_pending()
    return gateway


@pytest.fixture
def credentials(settings) -> CredentialService:
    return CredentialService(settings)


@pytest.fixture
def identity_store(migrated_gateway, credentials) -> IdentityStore:
    return IdentityStore(migrated_gateway, credentials)


@pytest.fixture
def create_user(identity_store):
    """Factory: insert a user with unique defaults, overridable per field."""

    async def _create(
        username: str | None = None,
        email: str | None = None,
        password: str = "validPassword",
    ):
        suffix = uuid4().hex[:12]
        return await identity_store.create(UserCreate(
            username=username or f"user{suffix}",
            email=email or f"{suffix}@example.com",
            password=password,
        ))

    return _create


@pytest.fixture
async def client(migrated_gateway, settings):
    """FastAPI test client with gateway and settings overridden."""
    app.dependency_overrides[get_gateway] = lambda: migrated_gateway
    app.dependency_overrides[get_settings] = lambda: settings

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
async def bare_client(gateway, settings):
    """Client on an unmigrated database (for the migrations endpoints)."""
    app.dependency_overrides[get_gateway] = lambda: gateway
    app.dependency_overrides[get_settings] = lambda: settings

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()

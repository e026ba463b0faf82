"""Dependency Wiring — builds services per request from Settings and the gateway.

Invariants:
    - Services are constructed with explicit collaborators; none reads globals
    - get_settings and get_gateway are the only two override points tests need
"""

from fastapi import Depends

from identity_core.config import Settings, get_settings
from identity_core.infrastructure.database import DatabaseGateway, get_gateway
from identity_core.services.authentication import AuthenticationGate
from identity_core.services.migrator import MigrationCoordinator
from identity_core.services.password import CredentialService
from identity_core.services.session_issuer import SessionIssuer
from identity_core.services.user_store import IdentityStore


def get_credential_service(
    settings: Settings = Depends(get_settings),
) -> CredentialService:
    return CredentialService(settings)


def get_identity_store(
    gateway: DatabaseGateway = Depends(get_gateway),
    credentials: CredentialService = Depends(get_credential_service),
) -> IdentityStore:
    return IdentityStore(gateway, credentials)


def get_session_issuer(
    gateway: DatabaseGateway = Depends(get_gateway),
) -> SessionIssuer:
    return SessionIssuer(gateway)


def get_authentication_gate(
    users: IdentityStore = Depends(get_identity_store),
    credentials: CredentialService = Depends(get_credential_service),
) -> AuthenticationGate:
    return AuthenticationGate(users, credentials)


def get_migration_coordinator(
    gateway: DatabaseGateway = Depends(get_gateway),
) -> MigrationCoordinator:
    return MigrationCoordinator(gateway)

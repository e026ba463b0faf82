"""Migrations — preview and apply pending schema revisions.

Invariants:
    - GET never writes; returns pending revisions oldest-first (200)
    - POST returns 201 with the applied list when work was done, 200 with [] otherwise
    - Failures surface as ServiceError (503) via the global handlers
"""

from fastapi import APIRouter, Depends, Response, status

from identity_core.api.dependencies import get_migration_coordinator
from identity_core.schemas.migration import MigrationRecord
from identity_core.services.migrator import MigrationCoordinator

router = APIRouter(prefix="/api/v1/migrations", tags=["migrations"])


@router.get("", response_model=list[MigrationRecord])
async def list_pending_migrations(
    coordinator: MigrationCoordinator = Depends(get_migration_coordinator),
):
    """Dry run: what would POST apply?"""
    return await coordinator.list_pending()


@router.post("", response_model=list[MigrationRecord])
async def run_pending_migrations(
    response: Response,
    coordinator: MigrationCoordinator = Depends(get_migration_coordinator),
):
    applied = await coordinator.apply_pending()
    response.status_code = (
        status.HTTP_201_CREATED if applied else status.HTTP_200_OK
    )
    return applied

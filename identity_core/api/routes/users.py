"""Users — registration, lookup and partial update.

Invariants:
    - POST returns 201 with the stored record (hashed password included)
    - GET/PATCH address users by username, case-insensitively
    - PATCH without a body still resolves the user first (404 beats 400)
"""

from fastapi import APIRouter, Depends, status

from identity_core.api.dependencies import get_identity_store
from identity_core.schemas.user import UserCreate, UserRecord, UserUpdate
from identity_core.services.user_store import IdentityStore

router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.post(
    "", response_model=UserRecord, status_code=status.HTTP_201_CREATED,
)
async def create_user(
    body: UserCreate, users: IdentityStore = Depends(get_identity_store),
):
    return await users.create(body)


@router.get("/{username}", response_model=UserRecord)
async def get_user(
    username: str, users: IdentityStore = Depends(get_identity_store),
):
    return await users.find_by_username(username)


@router.patch("/{username}", response_model=UserRecord)
async def update_user(
    username: str,
    body: UserUpdate | None = None,
    users: IdentityStore = Depends(get_identity_store),
):
    return await users.update(username, body or UserUpdate())

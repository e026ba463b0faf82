"""Identity Store — create, look up and update users with case-insensitive uniqueness.

Invariants:
    - No two users share a username or an email under case folding
    - Uniqueness is checked username first, then email; the first failure wins
    - Lookups compare lower(column) = lower(value); NotFoundError when nothing matches
    - update() treats a present username/email as a rename attempt: sending the
      current value byte-for-byte is rejected as "already in use", not ignored
    - Passwords are hashed before any write; plaintext never reaches the database
    - Every call acquires and releases its own connection through the gateway

Design Decisions:
    - In-process checks give the friendly ValidationError; the lower() unique
      indexes are the source of truth. An IntegrityError at write time means a
      concurrent writer won: the checks are re-run so the loser still gets the
      same ValidationError instead of a 500
    - Core statements built from User.__table__: portable between PostgreSQL
      and SQLite, no ORM session state to manage
"""

import logging

from sqlalchemy import func, insert, select, update
from sqlalchemy.exc import IntegrityError

from identity_core.core.errors import NotFoundError, ValidationError
from identity_core.infrastructure.database import DatabaseGateway
from identity_core.models.user import User, utc_now
from identity_core.schemas.user import UserCreate, UserRecord, UserUpdate
from identity_core.services.password import CredentialService

logger = logging.getLogger(__name__)

users = User.__table__


def _username_in_use() -> ValidationError:
    return ValidationError(
        message="Username already in use.",
        action="Please choose a different username.",
    )


def _email_in_use() -> ValidationError:
    return ValidationError(
        message="Email already in use.",
        action="Please choose a different email.",
    )


class IdentityStore:
    """User persistence with uniqueness enforcement."""

    def __init__(self, gateway: DatabaseGateway, credentials: CredentialService):
        self._gateway = gateway
        self._credentials = credentials

    # ─── Create ──────────────────────────────────────────────────

    async def create(self, candidate: UserCreate) -> UserRecord:
        await self._validate_unique_username(candidate.username)
        await self._validate_unique_email(candidate.email)
        hashed = await self._credentials.hash(candidate.password)

        statement = insert(users).values(
            username=candidate.username,
            email=candidate.email,
            password=hashed,
        ).returning(users)
        try:
            result = await self._gateway.query(statement)
        except IntegrityError:
            await self._validate_unique_username(candidate.username)
            await self._validate_unique_email(candidate.email)
            raise

        created = UserRecord.model_validate(result.rows[0])
        logger.info("User created", extra={"user_id": created.id})
        return created

    # ─── Lookup ──────────────────────────────────────────────────

    async def find_by_username(self, username: str) -> UserRecord:
        row = await self._find_one(users.c.username, username)
        if row is None:
            raise NotFoundError(
                message="User not found.",
                action="Please check the username and try again.",
            )
        return UserRecord.model_validate(row)

    async def find_by_email(self, email: str) -> UserRecord:
        row = await self._find_one(users.c.email, email)
        if row is None:
            raise NotFoundError(
                message="User not found.",
                action="Please check the email and try again.",
            )
        return UserRecord.model_validate(row)

    async def _find_one(self, column, value: str) -> dict | None:
        statement = (
            select(users)
            .where(func.lower(column) == func.lower(value))
            .limit(1)
        )
        result = await self._gateway.query(statement)
        return result.rows[0] if result.rows else None

    # ─── Update ──────────────────────────────────────────────────

    async def update(self, username: str, changes: UserUpdate) -> UserRecord:
        current = await self.find_by_username(username)
        values = changes.changes()

        if "username" in values:
            if values["username"] == current.username:
                raise _username_in_use()
            await self._validate_unique_username(values["username"])

        if "email" in values:
            if values["email"] == current.email:
                raise _email_in_use()
            await self._validate_unique_email(values["email"])

        if "password" in values:
            values["password"] = await self._credentials.hash(values["password"])

        statement = (
            update(users)
            .where(users.c.id == current.id)
            .values(
                username=values.get("username", current.username),
                email=values.get("email", current.email),
                password=values.get("password", current.password),
                updated_at=utc_now(),
            )
            .returning(users)
        )
        try:
            result = await self._gateway.query(statement)
        except IntegrityError:
            if "username" in values:
                await self._validate_unique_username(values["username"])
            if "email" in values:
                await self._validate_unique_email(values["email"])
            raise

        updated = UserRecord.model_validate(result.rows[0])
        logger.info("User updated", extra={"user_id": updated.id})
        return updated

    # ─── Uniqueness ──────────────────────────────────────────────

    async def _validate_unique_username(self, username: str) -> None:
        if await self._find_one(users.c.username, username) is not None:
            raise _username_in_use()

    async def _validate_unique_email(self, email: str) -> None:
        if await self._find_one(users.c.email, email) is not None:
            raise _email_in_use()

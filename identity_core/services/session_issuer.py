"""Session Issuer — mints bearer tokens for authenticated users.

Invariants:
    - Tokens are 48 bytes from the OS CSPRNG, hex-rendered (96 chars)
    - expires_at - created_at == SESSION_LIFETIME exactly (one clock reading)
    - Issue only: validation and revocation live elsewhere

Design Decisions:
    - The unique constraint on sessions.token backs the randomness guarantee;
      a collision surfaces as an IntegrityError (500), never as a shared session
"""

import logging
import secrets

from sqlalchemy import insert

from identity_core.core.domain_types import (
    SESSION_LIFETIME, SESSION_TOKEN_BYTES, SessionToken, UserId,
)
from identity_core.infrastructure.database import DatabaseGateway
from identity_core.models.session import Session
from identity_core.models.user import utc_now
from identity_core.schemas.session import SessionRecord

logger = logging.getLogger(__name__)

sessions = Session.__table__


def generate_token() -> SessionToken:
    return SessionToken(secrets.token_hex(SESSION_TOKEN_BYTES))


class SessionIssuer:
    """Creates session rows."""

    def __init__(self, gateway: DatabaseGateway):
        self._gateway = gateway

    async def create(self, user_id: UserId) -> SessionRecord:
        now = utc_now()
        statement = insert(sessions).values(
            token=generate_token(),
            user_id=user_id,
            expires_at=now + SESSION_LIFETIME,
            created_at=now,
            updated_at=now,
        ).returning(sessions)
        result = await self._gateway.query(statement)

        issued = SessionRecord.model_validate(result.rows[0])
        logger.info("Session issued", extra={"user_id": user_id})
        return issued

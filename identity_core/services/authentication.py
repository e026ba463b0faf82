"""Authentication Gate — answers "is this email/password pair valid?".

Invariants:
    - Unknown email and wrong password raise the identical UnauthorizedError
      (same name, message, action, status_code)
    - Both failure paths cost one bcrypt operation, so timing does not tell them apart
    - Errors other than NotFound from the lookup propagate unchanged
"""

import logging

from identity_core.core.errors import NotFoundError, UnauthorizedError
from identity_core.schemas.user import UserRecord
from identity_core.services.password import CredentialService
from identity_core.services.user_store import IdentityStore

logger = logging.getLogger(__name__)


def _invalid_credentials() -> UnauthorizedError:
    return UnauthorizedError(
        message="Invalid email or password.",
        action=(
            "Please check your credentials and try again. "
            "If the problem persists, consider resetting your password."
        ),
    )


class AuthenticationGate:
    """Composes the identity store and credential service."""

    def __init__(self, users: IdentityStore, credentials: CredentialService):
        self._users = users
        self._credentials = credentials

    async def authenticate(self, email: str, password: str) -> UserRecord:
        try:
            user = await self._users.find_by_email(email)
        except NotFoundError:
            # Burn one hash so an unknown email costs what a wrong password does
            await self._credentials.hash(password)
            logger.info("Authentication failed")
            raise _invalid_credentials() from None

        if not await self._credentials.compare(password, user.password):
            logger.info("Authentication failed", extra={"user_id": user.id})
            raise _invalid_credentials()

        return user

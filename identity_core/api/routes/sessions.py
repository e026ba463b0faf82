"""Sessions — exchange an email/password pair for a session token.

Invariants:
    - 201 with the session record and a Set-Cookie carrying the token
    - Cookie: HttpOnly, Path=/, Max-Age = session lifetime, Secure in production
    - Any credential failure is the same 401 UnauthorizedError
"""

from fastapi import APIRouter, Depends, Response, status

from identity_core.api.dependencies import (
    get_authentication_gate, get_session_issuer,
)
from identity_core.config import Settings, get_settings
from identity_core.core.domain_types import SESSION_LIFETIME
from identity_core.schemas.session import SessionCreate, SessionRecord
from identity_core.services.authentication import AuthenticationGate
from identity_core.services.session_issuer import SessionIssuer

router = APIRouter(prefix="/api/v1/sessions", tags=["sessions"])


@router.post(
    "", response_model=SessionRecord, status_code=status.HTTP_201_CREATED,
)
async def create_session(
    body: SessionCreate,
    response: Response,
    gate: AuthenticationGate = Depends(get_authentication_gate),
    issuer: SessionIssuer = Depends(get_session_issuer),
    settings: Settings = Depends(get_settings),
):
    user = await gate.authenticate(body.email, body.password)
    session = await issuer.create(user.id)

    response.set_cookie(
        key=settings.session_cookie_name,
        value=session.token,
        max_age=int(SESSION_LIFETIME.total_seconds()),
        path="/",
        secure=settings.is_production,
        httponly=True,
    )
    return session

"""Error Taxonomy — closed set of typed errors for every identity-core failure mode.

Invariants:
    - Every error carries kind (ErrorKind), message, action and status_code
    - The set of kinds is closed: six members, one status code each
    - to_response() always produces {name, message, action, status_code}
    - to_error_response() is the only place an arbitrary exception becomes a status code
    - Anything outside the five pass-through kinds renders as a generic 500;
      the original exception is kept as cause, never rendered

Design Decisions:
    - Single hierarchy with IdentityCoreError base: FastAPI global handler catches all
    - kind discriminant over isinstance chains: the adapter dispatches on one field
    - Errors are never mutated after construction; the adapter builds new ones
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Discriminant for the error taxonomy."""
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    UNAUTHORIZED = "unauthorized"
    METHOD_NOT_ALLOWED = "method_not_allowed"
    SERVICE_UNAVAILABLE = "service_unavailable"
    INTERNAL = "internal"


STATUS_CODES: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.METHOD_NOT_ALLOWED: 405,
    ErrorKind.INTERNAL: 500,
    ErrorKind.SERVICE_UNAVAILABLE: 503,
}

PASS_THROUGH_KINDS = frozenset({
    ErrorKind.VALIDATION,
    ErrorKind.NOT_FOUND,
    ErrorKind.UNAUTHORIZED,
    ErrorKind.METHOD_NOT_ALLOWED,
    ErrorKind.SERVICE_UNAVAILABLE,
})


class IdentityCoreError(Exception):
    """Base exception for all identity-core errors."""

    name = "IdentityCoreError"
    kind = ErrorKind.INTERNAL
    default_message = "An unexpected internal error occurred."
    default_action = "Please contact support."

    def __init__(
        self,
        message: str | None = None,
        action: str | None = None,
        cause: BaseException | None = None,
    ):
        self.message = message or self.default_message
        self.action = action or self.default_action
        self.cause = cause
        super().__init__(self.message)
        if cause is not None:
            self.__cause__ = cause

    @property
    def status_code(self) -> int:
        return STATUS_CODES[self.kind]

    def to_response(self) -> dict:
        """Convert to the uniform JSON error envelope."""
        return {
            "name": self.name,
            "message": self.message,
            "action": self.action,
            "status_code": self.status_code,
        }


# ─── Caller Errors (400-level) ──────────────────────────────────

class ValidationError(IdentityCoreError):
    """Bad input: duplicate username/email, malformed payload."""
    name = "ValidationError"
    kind = ErrorKind.VALIDATION
    default_message = "A validation error has occurred."
    default_action = "Please check the input data."


class NotFoundError(IdentityCoreError):
    """Referenced entity does not exist."""
    name = "NotFoundError"
    kind = ErrorKind.NOT_FOUND
    default_message = "The requested resource was not found."
    default_action = "Please check the resource identifier."


class UnauthorizedError(IdentityCoreError):
    """Credential mismatch."""
    name = "UnauthorizedError"
    kind = ErrorKind.UNAUTHORIZED
    default_message = "Authentication failed."
    default_action = "Please check your credentials."


class MethodNotAllowedError(IdentityCoreError):
    """Unsupported HTTP verb on a route. Message and action are fixed."""
    name = "MethodNotAllowedError"
    kind = ErrorKind.METHOD_NOT_ALLOWED
    default_message = "This method is not allowed for that endpoint."
    default_action = "Check if the HTTP request is valid for this endpoint."

    def __init__(self, cause: BaseException | None = None):
        super().__init__(cause=cause)


# ─── Infrastructure Errors (500-level) ──────────────────────────

class ServiceError(IdentityCoreError):
    """A dependency (database, migration runner) failed."""
    name = "ServiceError"
    kind = ErrorKind.SERVICE_UNAVAILABLE
    default_message = "Service currently unavailable."
    default_action = "Verify if the service is available."


class InternalServerError(IdentityCoreError):
    """Catch-all. Message and action are fixed so causes never leak."""
    name = "InternalServerError"
    kind = ErrorKind.INTERNAL

    def __init__(self, cause: BaseException | None = None):
        super().__init__(cause=cause)


# ─── Boundary Adapter ───────────────────────────────────────────

def normalize_error(exc: BaseException) -> IdentityCoreError:
    """Return exc itself if it is a pass-through kind, else an InternalServerError wrapping it."""
    if isinstance(exc, IdentityCoreError) and exc.kind in PASS_THROUGH_KINDS:
        return exc
    return InternalServerError(cause=exc)


def to_error_response(exc: BaseException) -> tuple[int, dict]:
    """Map any exception to (status_code, envelope)."""
    error = normalize_error(exc)
    return error.status_code, error.to_response()

"""Error Taxonomy — verifies envelopes, status codes and the boundary adapter.

Invariants:
    - Six kinds, each with a fixed status code
    - to_response() is exactly {name, message, action, status_code}
    - Pass-through kinds come back unchanged; anything else becomes a generic 500
    - The generic 500 never repeats the underlying message
"""

import pytest

from identity_core.core.errors import (
    ErrorKind,
    IdentityCoreError,
    InternalServerError,
    MethodNotAllowedError,
    NotFoundError,
    PASS_THROUGH_KINDS,
    ServiceError,
    STATUS_CODES,
    UnauthorizedError,
    ValidationError,
    normalize_error,
    to_error_response,
)


def test_taxonomy_has_six_kinds_with_status_codes():
    assert len(ErrorKind) == 6
    assert set(STATUS_CODES) == set(ErrorKind)
    assert ErrorKind.INTERNAL not in PASS_THROUGH_KINDS
    assert len(PASS_THROUGH_KINDS) == 5


@pytest.mark.parametrize("error, name, status", [
    (ValidationError(), "ValidationError", 400),
    (UnauthorizedError(), "UnauthorizedError", 401),
    (NotFoundError(), "NotFoundError", 404),
    (MethodNotAllowedError(), "MethodNotAllowedError", 405),
    (InternalServerError(), "InternalServerError", 500),
    (ServiceError(), "ServiceError", 503),
])
def test_each_error_renders_uniform_envelope(error, name, status):
    body = error.to_response()
    assert set(body) == {"name", "message", "action", "status_code"}
    assert body["name"] == name
    assert body["status_code"] == status
    assert error.status_code == status
    assert body["message"]
    assert body["action"]


def test_custom_message_and_action_are_kept():
    error = ValidationError(message="Username already in use.", action="Pick another.")
    assert error.to_response() == {
        "name": "ValidationError",
        "message": "Username already in use.",
        "action": "Pick another.",
        "status_code": 400,
    }


def test_method_not_allowed_message_is_fixed():
    assert MethodNotAllowedError().to_response() == {
        "name": "MethodNotAllowedError",
        "message": "This method is not allowed for that endpoint.",
        "action": "Check if the HTTP request is valid for this endpoint.",
        "status_code": 405,
    }


def test_cause_is_retained_for_logging():
    cause = RuntimeError("connection refused")
    error = ServiceError(message="Error running migrations.", cause=cause)
    assert error.cause is cause
    assert error.__cause__ is cause
    assert "connection refused" not in str(error.to_response())


@pytest.mark.parametrize("error", [
    ValidationError(), NotFoundError(), UnauthorizedError(),
    MethodNotAllowedError(), ServiceError(),
])
def test_pass_through_kinds_are_returned_unchanged(error):
    assert normalize_error(error) is error
    status, body = to_error_response(error)
    assert status == error.status_code
    assert body == error.to_response()


def test_unknown_exception_becomes_generic_internal_error():
    cause = KeyError("secret_column")
    status, body = to_error_response(cause)

    assert status == 500
    assert body == {
        "name": "InternalServerError",
        "message": "An unexpected internal error occurred.",
        "action": "Please contact support.",
        "status_code": 500,
    }
    assert normalize_error(cause).cause is cause


def test_base_error_is_not_passed_through():
    status, body = to_error_response(IdentityCoreError("raw internals"))
    assert status == 500
    assert body["name"] == "InternalServerError"
    assert "raw internals" not in body["message"]

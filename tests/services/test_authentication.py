"""Authentication Gate — verifies success and indistinguishable failures.

Invariants:
    - Correct email/password returns the user record
    - Unknown email and wrong password produce identical error envelopes
"""

import pytest

from identity_core.core.errors import UnauthorizedError
from identity_core.services.authentication import AuthenticationGate


@pytest.fixture
def gate(identity_store, credentials) -> AuthenticationGate:
    return AuthenticationGate(identity_store, credentials)


async def test_valid_credentials_return_user(gate, create_user):
    created = await create_user(email="sam@example.com", password="s3cret")
    user = await gate.authenticate("sam@example.com", "s3cret")
    assert user.id == created.id


async def test_email_match_ignores_case(gate, create_user):
    created = await create_user(email="tina@example.com", password="s3cret")
    user = await gate.authenticate("TINA@example.com", "s3cret")
    assert user.id == created.id


async def test_unknown_email_and_wrong_password_are_indistinguishable(gate, create_user):
    await create_user(email="uma@example.com", password="right")

    with pytest.raises(UnauthorizedError) as unknown:
        await gate.authenticate("nobody@example.com", "right")
    with pytest.raises(UnauthorizedError) as wrong:
        await gate.authenticate("uma@example.com", "wrong")

    assert unknown.value.to_response() == wrong.value.to_response()
    assert unknown.value.to_response() == {
        "name": "UnauthorizedError",
        "message": "Invalid email or password.",
        "action": (
            "Please check your credentials and try again. "
            "If the problem persists, consider resetting your password."
        ),
        "status_code": 401,
    }


async def test_unknown_email_still_spends_a_hash(gate, credentials, monkeypatch):
    calls = []
    original_hash = credentials.hash

    async def counting_hash(plaintext):
        calls.append(plaintext)
        return await original_hash(plaintext)

    monkeypatch.setattr(credentials, "hash", counting_hash)

    with pytest.raises(UnauthorizedError):
        await gate.authenticate("nobody@example.com", "anything")
    assert calls == ["anything"]

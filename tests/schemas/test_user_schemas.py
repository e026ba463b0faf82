"""User Schemas — verifies payload bounds and the present-vs-absent update semantics."""

import pytest
from pydantic import ValidationError

from identity_core.schemas.migration import MigrationRecord
from identity_core.core.domain_types import MigrationState
from identity_core.schemas.user import UserCreate, UserUpdate


def test_user_create_accepts_bounds():
    UserCreate(username="u" * 32, email="a@b", password="p")


@pytest.mark.parametrize("field,value", [
    ("username", ""),
    ("username", "u" * 33),
    ("email", "a@"),
    ("email", "e" * 255),
    ("password", ""),
])
def test_user_create_rejects_out_of_bounds(field, value):
    payload = {"username": "user", "email": "user@example.com", "password": "pw"}
    payload[field] = value
    with pytest.raises(ValidationError):
        UserCreate(**payload)


def test_update_changes_only_sent_fields():
    assert UserUpdate().changes() == {}
    assert UserUpdate(email="new@example.com").changes() == {"email": "new@example.com"}


def test_update_drops_explicit_nulls():
    update = UserUpdate.model_validate({"username": None, "password": "pw"})
    assert update.changes() == {"password": "pw"}


def test_migration_record_state():
    assert MigrationRecord(name="001").state == MigrationState.PENDING
    assert MigrationRecord(name="001", applied_at="2025-01-01T00:00:00Z").state == MigrationState.APPLIED

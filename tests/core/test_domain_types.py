"""Domain Types — verifies bounds and enums shared by models, schemas and services."""

from datetime import timedelta

from identity_core.core.domain_types import (
    EMAIL_MAX_LENGTH,
    Environment,
    MigrationState,
    PASSWORD_HASH_LENGTH,
    SESSION_LIFETIME,
    SESSION_TOKEN_BYTES,
    USERNAME_MAX_LENGTH,
)
from identity_core.models.session import Session
from identity_core.models.user import User


def test_session_lifetime_is_thirty_days():
    assert SESSION_LIFETIME == timedelta(days=30)
    assert int(SESSION_LIFETIME.total_seconds()) == 2592000


def test_column_bounds_match_models():
    assert User.__table__.c.username.type.length == USERNAME_MAX_LENGTH
    assert User.__table__.c.email.type.length == EMAIL_MAX_LENGTH
    assert User.__table__.c.password.type.length == PASSWORD_HASH_LENGTH
    assert Session.__table__.c.token.type.length == SESSION_TOKEN_BYTES * 2


def test_environment_values():
    assert {e.value for e in Environment} == {"development", "test", "production"}
    assert Environment("production") is Environment.PRODUCTION


def test_migration_states():
    assert {s.value for s in MigrationState} == {"pending", "applied"}

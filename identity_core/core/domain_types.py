"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId and SessionId wrap UUIDs — never use bare UUID in domain logic
    - SESSION_LIFETIME is the single source for session expiry and cookie max-age
    - Column bounds here match the users/sessions migrations exactly

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from datetime import timedelta
from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)
SessionId = NewType("SessionId", UUID)
SessionToken = NewType("SessionToken", str)
PasswordHash = NewType("PasswordHash", str)


# ─── Bounds ──────────────────────────────────────────────────────

USERNAME_MAX_LENGTH = 32    # GitHub caps usernames at 39
EMAIL_MAX_LENGTH = 254      # RFC 5321 path limit minus angle brackets
PASSWORD_HASH_LENGTH = 60   # bcrypt modular crypt format

SESSION_TOKEN_BYTES = 48
SESSION_LIFETIME = timedelta(days=30)


# ─── Enums ───────────────────────────────────────────────────────

class Environment(str, Enum):
    """Runtime profile — drives hash cost and transport security."""
    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


class MigrationState(str, Enum):
    """Pending -> Applied. There is no way back."""
    PENDING = "pending"
    APPLIED = "applied"

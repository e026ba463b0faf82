"""User Schemas — creation/update payloads and the persisted user record.

Invariants:
    - UserCreate requires all three fields, non-empty, within column bounds
    - UserUpdate distinguishes "absent" from "present": only fields the caller
      sent end up in changes(), so {"username": same} is an update attempt
    - UserRecord carries the hashed password exactly as stored

Design Decisions:
    - from_attributes on records: built straight from result row mappings
"""

from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field

from identity_core.core.domain_types import (
    EMAIL_MAX_LENGTH, USERNAME_MAX_LENGTH, UserId,
)


class UserCreate(BaseModel):
    """Registration payload."""
    username: str = Field(min_length=1, max_length=USERNAME_MAX_LENGTH)
    email: str = Field(min_length=3, max_length=EMAIL_MAX_LENGTH)
    password: str = Field(min_length=1)


class UserUpdate(BaseModel):
    """Partial update payload — every field optional."""
    username: str | None = Field(None, min_length=1, max_length=USERNAME_MAX_LENGTH)
    email: str | None = Field(None, min_length=3, max_length=EMAIL_MAX_LENGTH)
    password: str | None = Field(None, min_length=1)

    def changes(self) -> dict[str, str]:
        """Fields the caller actually sent, null values dropped."""
        return {
            key: value
            for key, value in self.model_dump(exclude_unset=True).items()
            if value is not None
        }


class UserRecord(BaseModel):
    """A row of the users table."""
    model_config = ConfigDict(from_attributes=True)

    id: UserId
    username: str
    email: str
    password: str
    created_at: datetime
    updated_at: datetime

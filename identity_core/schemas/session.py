"""Session Schemas — login payload and the issued session record.

Invariants:
    - SessionCreate never reveals which field was wrong; that is the gate's job
    - SessionRecord.token is the bearer secret, returned once at issuance
"""

from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field

from identity_core.core.domain_types import SessionId, UserId


class SessionCreate(BaseModel):
    """Login payload."""
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class SessionRecord(BaseModel):
    """A row of the sessions table."""
    model_config = ConfigDict(from_attributes=True)

    id: SessionId
    token: str
    user_id: UserId
    expires_at: datetime
    created_at: datetime
    updated_at: datetime

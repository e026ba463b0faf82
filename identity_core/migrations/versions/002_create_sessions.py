"""Create sessions table for issued bearer tokens.

Revision ID: 002_create_sessions
Revises: 001_create_users
Create Date: 2025-05-20

token holds 48 random bytes rendered as 96 hex chars and carries a unique
constraint; user_id references users.id.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "002_create_sessions"
down_revision: Union[str, None] = "001_create_users"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "sessions",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("token", sa.String(96), nullable=False),
        sa.Column("user_id", sa.Uuid(as_uuid=True), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("token", name="uq_sessions_token"),
    )


def downgrade() -> None:
    raise NotImplementedError("Migrations are forward-only")

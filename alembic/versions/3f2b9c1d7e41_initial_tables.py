"""initial_tables

Revision ID: 3f2b9c1d7e41
Revises:
Create Date: 2026-10-17 10:12:44.120391

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "3f2b9c1d7e41"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create realms, realm_localizations and users tables."""
    op.create_table(
        "realms",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("supported_locales", sa.JSON(), nullable=False),
        sa.Column("default_locale", sa.String(16), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            onupdate=sa.func.now(),
        ),
    )
    op.create_index("ix_realms_name", "realms", ["name"], unique=True)

    op.create_table(
        "realm_localizations",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "realm_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("realms.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("locale", sa.String(16), nullable=False),
        sa.Column("key", sa.String(255), nullable=False),
        sa.Column("value", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint("realm_id", "locale", "key", name="uq_realm_localization"),
    )
    op.create_index("ix_realm_localizations_realm_id", "realm_localizations", ["realm_id"])

    op.create_table(
        "users",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "realm_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("realms.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("username", sa.String(255), nullable=False),
        sa.Column("locale", sa.String(16), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            onupdate=sa.func.now(),
        ),
        sa.UniqueConstraint("realm_id", "username", name="uq_user_realm_username"),
    )
    op.create_index("ix_users_realm_id", "users", ["realm_id"])


def downgrade() -> None:
    """Drop all tables."""
    op.drop_index("ix_users_realm_id", table_name="users")
    op.drop_table("users")
    op.drop_index("ix_realm_localizations_realm_id", table_name="realm_localizations")
    op.drop_table("realm_localizations")
    op.drop_index("ix_realms_name", table_name="realms")
    op.drop_table("realms")

"""Initial schema: resolvers table with live-row uniqueness.

Revision ID: 0001
Revises:
Create Date: 2026-10-17 00:00:00.000000
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "resolvers",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column("provider", sa.String(255), nullable=False),
        sa.Column("hostname", sa.String(255), nullable=False),
        sa.Column("alias", sa.String(255), nullable=False, server_default=""),
        sa.Column("ipv4", sa.String(15), nullable=False, server_default=""),
        sa.Column("is_deleted", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column(
            "ctime",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "mtime",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )
    op.create_index("ix_resolvers_hostname", "resolvers", ["hostname"])
    # Deleted rows may share a (provider, hostname) pair with a live one
    op.create_index(
        "uq_resolvers_provider_hostname_live",
        "resolvers",
        ["provider", "hostname"],
        unique=True,
        sqlite_where=sa.text("NOT is_deleted"),
        postgresql_where=sa.text("NOT is_deleted"),
    )


def downgrade() -> None:
    op.drop_index("uq_resolvers_provider_hostname_live", table_name="resolvers")
    op.drop_index("ix_resolvers_hostname", table_name="resolvers")
    op.drop_table("resolvers")

"""Initial schema — visit counter and contact messages.

Revision ID: 001
Revises: None
Create Date: 2026-10-18
"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Singleton visit counter
    op.create_table(
        "visit_records",
        sa.Column("id", sa.String(100), primary_key=True),
        sa.Column("visit_count", sa.Integer, nullable=False, server_default="0"),
        sa.Column("last_visit", sa.DateTime(timezone=True), nullable=False),
        sa.Column(
            "last_visitor_ip", sa.String(100), nullable=False, server_default="unknown"
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.CheckConstraint("visit_count >= 0", name="ck_visit_records_count_non_negative"),
    )

    # Contact messages
    op.create_table(
        "contact_messages",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("subject", sa.String(300), nullable=False),
        sa.Column("message", sa.Text, nullable=False),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.Column("ip_address", sa.String(100), nullable=False, server_default="unknown"),
        sa.Column("user_agent", sa.String(500), nullable=False, server_default="unknown"),
        sa.Column("status", sa.String(20), nullable=False, server_default="new"),
    )
    op.create_index("idx_contact_messages_status", "contact_messages", ["status"])
    op.create_index("idx_contact_messages_timestamp", "contact_messages", ["timestamp"])


def downgrade() -> None:
    op.drop_index("idx_contact_messages_timestamp", table_name="contact_messages")
    op.drop_index("idx_contact_messages_status", table_name="contact_messages")
    op.drop_table("contact_messages")
    op.drop_table("visit_records")

"""Create the businesses table

Revision ID: 20260301_000000
Revises: None
Create Date: 2026-03-01 00:00:00.000000

Creates the affiliated business directory. Each wallet may own at most one
business; wallets are stored lowercase.

Revision format: YYYYMMDD_HHMMSS_description

"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "20260301_000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the businesses table."""
    op.create_table(
        "businesses",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("wallet_address", sa.String(42), nullable=False),
        sa.Column("owner_name", sa.String(128), nullable=False),
        sa.Column("business_name", sa.String(128), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("location", sa.String(256), nullable=True),
        sa.Column("cashback_percentage", sa.Float(), nullable=False),
        sa.Column("cover_image_url", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "cashback_percentage >= 0 AND cashback_percentage <= 100",
            name="ck_businesses_cashback_percentage",
        ),
    )
    op.create_index("ix_businesses_wallet_address", "businesses", ["wallet_address"], unique=True)
    op.create_index("ix_businesses_created_at", "businesses", ["created_at"])


def downgrade() -> None:
    """Drop the businesses table."""
    op.drop_index("ix_businesses_created_at", table_name="businesses")
    op.drop_index("ix_businesses_wallet_address", table_name="businesses")
    op.drop_table("businesses")

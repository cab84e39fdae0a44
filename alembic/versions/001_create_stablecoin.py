"""create_stablecoin

Revision ID: 001
Revises:
Create Date: 2026-10-19 12:00:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create stablecoin catalog table."""
    op.create_table(
        "stablecoin",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("symbol", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("provider_ids", sa.JSON(), nullable=False, server_default="{}"),
        sa.Column("market_cap", sa.Float(), nullable=False, server_default="0"),
        sa.Column("volume_24h", sa.Float(), nullable=False, server_default="0"),
        sa.Column("market_data_updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_stablecoin_symbol", "stablecoin", ["symbol"], unique=True)


def downgrade() -> None:
    """Drop stablecoin catalog table."""
    op.drop_index("ix_stablecoin_symbol", table_name="stablecoin")
    op.drop_table("stablecoin")

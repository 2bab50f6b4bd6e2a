"""create_rolls_and_counters

Revision ID: 5c1e9a7d3b20
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""

from __future__ import annotations

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "5c1e9a7d3b20"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

_ts = sa.text("(CURRENT_TIMESTAMP)")


def upgrade() -> None:
    """Add the counters and rolls tables and seed the roll counter."""
    counters = op.create_table(
        "counters",
        sa.Column("id", sa.Integer(), nullable=False, primary_key=True),
        sa.Column("name", sa.String(50), nullable=False, unique=True),
        sa.Column("value", sa.BigInteger(), nullable=False),
    )
    op.bulk_insert(counters, [{"name": "rolls", "value": 0}])

    op.create_table(
        "rolls",
        sa.Column("id", sa.Integer(), nullable=False, primary_key=True),
        sa.Column("seq_id", sa.BigInteger(), nullable=False),
        sa.Column("user", sa.String(100), nullable=False),
        sa.Column("count", sa.Integer(), nullable=False),
        sa.Column("sides", sa.Integer(), nullable=False),
        sa.Column("modifier", sa.BigInteger(), nullable=False),
        sa.Column("success", sa.BigInteger(), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("rolls", sa.JSON(), nullable=False),
        sa.Column("total", sa.BigInteger(), nullable=False),
        sa.Column(
            "verdict",
            sa.Enum(
                "succeeded",
                "failed",
                "no_threshold",
                name="verdict",
                native_enum=False,
            ),
            nullable=False,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=_ts, nullable=False),
    )
    op.create_index("ix_rolls_seq_id", "rolls", ["seq_id"], unique=True)
    op.create_index("ix_rolls_user", "rolls", ["user"])


def downgrade() -> None:
    op.drop_index("ix_rolls_user", table_name="rolls")
    op.drop_index("ix_rolls_seq_id", table_name="rolls")
    op.drop_table("rolls")
    op.drop_table("counters")

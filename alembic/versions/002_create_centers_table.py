"""Create centers table

Revision ID: 002
Revises: 001
Create Date: 2026-09-14 10:20:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create centers table."""
    op.create_table(
        "centers",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=True),
            primary_key=True,
            server_default=sa.text("gen_random_uuid()"),
        ),
        # Null until the center has its own Firebase account
        sa.Column("uid", sa.Text(), nullable=True),
        sa.Column("center_name", sa.Text(), nullable=False),
        sa.Column("email", sa.Text(), nullable=False),
        sa.Column("district", sa.Text(), nullable=False),
        sa.Column("address", sa.Text(), nullable=False),
        sa.Column("verified", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
    )

    op.create_index("ix_centers_uid", "centers", ["uid"], unique=True)
    op.create_index("ix_centers_email", "centers", ["email"], unique=True)
    op.create_index("ix_centers_district", "centers", ["district"], unique=False)


def downgrade() -> None:
    """Drop centers table."""
    op.drop_index("ix_centers_district", table_name="centers")
    op.drop_index("ix_centers_email", table_name="centers")
    op.drop_index("ix_centers_uid", table_name="centers")
    op.drop_table("centers")

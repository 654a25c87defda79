"""Create citizen_registrations table

Revision ID: 003
Revises: 002
Create Date: 2026-09-21 09:00:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create citizen_registrations table."""
    op.create_table(
        "citizen_registrations",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=True),
            primary_key=True,
            server_default=sa.text("gen_random_uuid()"),
        ),
        sa.Column("full_name", sa.Text(), nullable=False),
        sa.Column("date_of_birth", sa.Date(), nullable=False),
        sa.Column("id_type", sa.String(32), nullable=False),
        sa.Column("id_number", sa.String(64), nullable=False),
        sa.Column("contact", sa.Text(), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.CheckConstraint(
            "id_type IN ('nid', 'passport', 'birth_certificate')",
            name="ck_citizen_registrations_id_type",
        ),
        sa.UniqueConstraint("id_type", "id_number", name="uq_citizen_registrations_id"),
    )


def downgrade() -> None:
    """Drop citizen_registrations table."""
    op.drop_table("citizen_registrations")

"""Initial schema - staff users, specialty assignments and insurers.

Revision ID: 001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade database schema."""
    op.create_table(
        "staff_users",
        sa.Column("employee_code", sa.String(length=20), nullable=False),
        sa.Column("display_name", sa.Text(), nullable=False),
        sa.Column("password_hash", sa.Text(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("employee_code"),
    )

    op.create_table(
        "specialty_assignments",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("employee_code", sa.String(length=20), nullable=False),
        sa.Column("specialty_code", sa.String(length=3), nullable=False),
        sa.Column("billing_code", sa.String(length=6), nullable=False),
        sa.Column("visibility", sa.String(length=10), server_default=sa.text("'NO'"), nullable=False),
        sa.Column("contract_code", sa.String(length=10), nullable=True),
        sa.Column("is_primary", sa.Boolean(), server_default=sa.text("false"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    # Every mutation is a bulk update keyed by employee code
    op.create_index(
        "ix_specialty_assignments_employee_code",
        "specialty_assignments",
        ["employee_code"],
    )

    op.create_table(
        "insurers",
        sa.Column("code", sa.String(length=10), nullable=False),
        sa.Column("label", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("code"),
    )


def downgrade() -> None:
    """Downgrade database schema."""
    op.drop_table("insurers")
    op.drop_index("ix_specialty_assignments_employee_code", table_name="specialty_assignments")
    op.drop_table("specialty_assignments")
    op.drop_table("staff_users")

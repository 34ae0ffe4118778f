"""Add recurring-series columns to event

parent_event_id links generated instances to their series parent; deleting
the parent leaves the instances in place with parent_event_id NULL.

Revision ID: 8a4e6d2c5f31
Revises: 3f1c2a9d7b10
Create Date: 2026-10-06 15:41:07.502913

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "8a4e6d2c5f31"
down_revision: Union[str, Sequence[str], None] = "3f1c2a9d7b10"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Add parent link and recurrence rule columns."""
    with op.batch_alter_table("event") as batch_op:
        batch_op.add_column(sa.Column("parent_event_id", sa.String(), nullable=True))
        batch_op.add_column(
            sa.Column(
                "is_recurring",
                sa.Boolean(),
                nullable=False,
                server_default=sa.false(),
            )
        )
        batch_op.add_column(
            sa.Column("recurrence_pattern", sa.String(length=50), nullable=True)
        )
        batch_op.add_column(sa.Column("recurrence_interval", sa.Integer(), nullable=True))
        batch_op.add_column(
            sa.Column("recurrence_end_date", sa.DateTime(timezone=True), nullable=True)
        )
        batch_op.add_column(sa.Column("recurrence_count", sa.Integer(), nullable=True))
        batch_op.create_foreign_key(
            "fk_event_parent_event_id_event",
            "event",
            ["parent_event_id"],
            ["id"],
            ondelete="SET NULL",
        )
        batch_op.create_index("ix_event_parent_event_id", ["parent_event_id"])


def downgrade() -> None:
    """Remove recurrence columns."""
    with op.batch_alter_table("event") as batch_op:
        batch_op.drop_index("ix_event_parent_event_id")
        batch_op.drop_constraint("fk_event_parent_event_id_event", type_="foreignkey")
        batch_op.drop_column("recurrence_count")
        batch_op.drop_column("recurrence_end_date")
        batch_op.drop_column("recurrence_interval")
        batch_op.drop_column("recurrence_pattern")
        batch_op.drop_column("is_recurring")
        batch_op.drop_column("parent_event_id")

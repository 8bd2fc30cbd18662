"""Patient conditions, condition-linked medicines and prescriptions.

Revision ID: 7c1a9e3f5b20
Revises: 4b8e2c1d9f07
Create Date: 2026-10-18 09:41:07.552310

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "7c1a9e3f5b20"
down_revision: Union[str, Sequence[str], None] = "4b8e2c1d9f07"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "conditions",
        sa.Column("condition_id", sa.String(length=26), primary_key=True),
        sa.Column("name", sa.String(length=120), nullable=False, unique=True),
        sa.Column("description", sa.Text()),
        *_timestamps(),
    )

    op.create_table(
        "patient_conditions",
        sa.Column("record_id", sa.String(length=26), primary_key=True),
        sa.Column("patient_id", sa.String(length=26), sa.ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False),
        sa.Column(
            "condition_id",
            sa.String(length=26),
            sa.ForeignKey("conditions.condition_id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("diagnosed_by", sa.String(length=26), sa.ForeignKey("users.user_id", ondelete="SET NULL")),
        sa.Column("diagnosed_date", sa.Date(), nullable=False),
        sa.Column("notes", sa.Text()),
        *_timestamps(),
    )
    op.create_index("ix_patient_conditions_patient_date", "patient_conditions", ["patient_id", "diagnosed_date"])

    with op.batch_alter_table("medicines") as batch_op:
        batch_op.add_column(sa.Column("condition_id", sa.String(length=26)))
        batch_op.create_foreign_key(
            "fk_medicines_condition_id",
            "conditions",
            ["condition_id"],
            ["condition_id"],
            ondelete="SET NULL",
        )
        batch_op.create_index("ix_medicines_condition_id", ["condition_id"])

    with op.batch_alter_table("medicine_reminders") as batch_op:
        batch_op.add_column(sa.Column("prescribed_by", sa.String(length=26)))
        batch_op.create_foreign_key(
            "fk_medicine_reminders_prescribed_by",
            "users",
            ["prescribed_by"],
            ["user_id"],
            ondelete="SET NULL",
        )
        batch_op.create_index("ix_medicine_reminders_prescribed_by", ["prescribed_by"])


def downgrade() -> None:
    with op.batch_alter_table("medicine_reminders") as batch_op:
        batch_op.drop_index("ix_medicine_reminders_prescribed_by")
        batch_op.drop_constraint("fk_medicine_reminders_prescribed_by", type_="foreignkey")
        batch_op.drop_column("prescribed_by")

    with op.batch_alter_table("medicines") as batch_op:
        batch_op.drop_index("ix_medicines_condition_id")
        batch_op.drop_constraint("fk_medicines_condition_id", type_="foreignkey")
        batch_op.drop_column("condition_id")

    op.drop_index("ix_patient_conditions_patient_date", table_name="patient_conditions")
    op.drop_table("patient_conditions")
    op.drop_table("conditions")

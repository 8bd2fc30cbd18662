"""Initial schema for the hospital portal.

Revision ID: 4b8e2c1d9f07
Revises:
Create Date: 2026-09-14 10:12:41.208533

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "4b8e2c1d9f07"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

user_role = sa.Enum("patient", "doctor", "hospital_admin", "pharmacist_admin", name="userrole")
appointment_status = sa.Enum("pending", "confirmed", "completed", "cancelled", name="appointmentstatus")
availability_category = sa.Enum("all", "weekdays", "weekends", name="availabilitycategory")


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("user_id", sa.String(length=26), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("role", user_role, nullable=True),
        sa.Column("full_name", sa.String(length=100), nullable=False),
        sa.Column("phone", sa.String(length=32)),
        sa.Column("address", sa.String(length=255)),
        sa.Column("date_of_birth", sa.Date()),
        sa.Column("avatar_url", sa.String(length=255)),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "doctor_availability",
        sa.Column(
            "doctor_id",
            sa.String(length=26),
            sa.ForeignKey("users.user_id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("availability_type", availability_category, nullable=False, server_default="all"),
        *_timestamps(),
    )

    op.create_table(
        "appointments",
        sa.Column("appointment_id", sa.String(length=26), primary_key=True),
        sa.Column("patient_id", sa.String(length=26), sa.ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False),
        sa.Column("doctor_id", sa.String(length=26), sa.ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False),
        sa.Column("appointment_date", sa.Date(), nullable=False),
        sa.Column("reason", sa.Text(), nullable=False),
        sa.Column("notes", sa.Text()),
        sa.Column("status", appointment_status, nullable=False, server_default="pending"),
        *_timestamps(),
    )
    op.create_index("ix_appointments_doctor_date", "appointments", ["doctor_id", "appointment_date"])
    op.create_index("ix_appointments_patient_date", "appointments", ["patient_id", "appointment_date"])

    op.create_table(
        "medicines",
        sa.Column("medicine_id", sa.String(length=26), primary_key=True),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("description", sa.Text()),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        sa.Column("stock_quantity", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("requires_prescription", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.CheckConstraint("price >= 0", name="ck_medicines_price_positive"),
        sa.CheckConstraint("stock_quantity >= 0", name="ck_medicines_stock_positive"),
    )

    op.create_table(
        "medicine_purchases",
        sa.Column("purchase_id", sa.String(length=26), primary_key=True),
        sa.Column("patient_id", sa.String(length=26), sa.ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False),
        sa.Column(
            "medicine_id",
            sa.String(length=26),
            sa.ForeignKey("medicines.medicine_id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("total_price", sa.Numeric(10, 2), nullable=False),
        sa.Column("prescription_verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("purchase_date", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint("quantity > 0", name="ck_medicine_purchases_quantity_positive"),
    )

    op.create_table(
        "medicine_reminders",
        sa.Column("reminder_id", sa.String(length=26), primary_key=True),
        sa.Column("patient_id", sa.String(length=26), sa.ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False),
        sa.Column(
            "medicine_id",
            sa.String(length=26),
            sa.ForeignKey("medicines.medicine_id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("dosage", sa.String(length=100), nullable=False),
        sa.Column("frequency", sa.String(length=100), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date()),
        sa.Column("reminder_times", sa.JSON(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index("ix_medicine_reminders_patient_id", "medicine_reminders", ["patient_id"])


def downgrade() -> None:
    op.drop_index("ix_medicine_reminders_patient_id", table_name="medicine_reminders")
    op.drop_table("medicine_reminders")
    op.drop_table("medicine_purchases")
    op.drop_table("medicines")
    op.drop_index("ix_appointments_patient_date", table_name="appointments")
    op.drop_index("ix_appointments_doctor_date", table_name="appointments")
    op.drop_table("appointments")
    op.drop_table("doctor_availability")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
    availability_category.drop(op.get_bind(), checkfirst=False)
    appointment_status.drop(op.get_bind(), checkfirst=False)
    user_role.drop(op.get_bind(), checkfirst=False)

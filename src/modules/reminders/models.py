"""Medicine reminder ORM model."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

from sqlalchemy import JSON, Boolean, Date, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.core.database import Base
from src.modules.pharmacy.models import Medicine
from src.shared.models import TimestampMixin
from src.shared.ulid import ulid_primary_key, ulid_reference

if TYPE_CHECKING:  # pragma: no cover
    from src.modules.users.models import User


class MedicineReminder(Base, TimestampMixin):
    __tablename__ = "medicine_reminders"

    reminder_id: Mapped[str] = ulid_primary_key()
    patient_id: Mapped[str] = ulid_reference("users.user_id", index=True)
    medicine_id: Mapped[str] = ulid_reference("medicines.medicine_id")
    # Set when a doctor issued the reminder as a prescription.
    prescribed_by: Mapped[str | None] = ulid_reference("users.user_id", ondelete="SET NULL", nullable=True, index=True)
    dosage: Mapped[str] = mapped_column(String(100), nullable=False)
    frequency: Mapped[str] = mapped_column(String(100), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date | None] = mapped_column(Date)
    reminder_times: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    medicine: Mapped[Medicine] = relationship()
    patient: Mapped[User] = relationship(foreign_keys=[patient_id])

"""Medical conditions and patient diagnoses."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

from sqlalchemy import Date, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.core.database import Base
from src.shared.models import TimestampMixin
from src.shared.ulid import ulid_primary_key, ulid_reference

if TYPE_CHECKING:  # pragma: no cover
    from src.modules.users.models import User


class Condition(Base, TimestampMixin):
    __tablename__ = "conditions"

    condition_id: Mapped[str] = ulid_primary_key()
    name: Mapped[str] = mapped_column(String(120), nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(Text)


class PatientCondition(Base, TimestampMixin):
    """A diagnosis recorded by a doctor on a patient's record."""

    __tablename__ = "patient_conditions"
    __table_args__ = (Index("ix_patient_conditions_patient_date", "patient_id", "diagnosed_date"),)

    record_id: Mapped[str] = ulid_primary_key()
    patient_id: Mapped[str] = ulid_reference("users.user_id")
    condition_id: Mapped[str] = ulid_reference("conditions.condition_id")
    diagnosed_by: Mapped[str | None] = ulid_reference("users.user_id", ondelete="SET NULL", nullable=True)
    diagnosed_date: Mapped[date] = mapped_column(Date, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text)

    condition: Mapped[Condition] = relationship()
    patient: Mapped[User] = relationship(foreign_keys=[patient_id])

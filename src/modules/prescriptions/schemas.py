"""Prescription schemas.

A prescription is a medicine reminder that a doctor writes for a patient,
so the payload reuses the reminder validation rules.
"""

from datetime import date

from pydantic import Field

from src.modules.reminders.schemas import ReminderCreate, ReminderPublic
from src.modules.schedule.service import today


class PrescriptionCreate(ReminderCreate):
    patient_id: str = Field(..., min_length=1)
    frequency: str = Field("once_daily", min_length=1, max_length=100)
    start_date: date = Field(default_factory=today)
    reminder_times: list[str] = Field(default_factory=lambda: ["08:00"], min_length=1)


class PrescriptionPublic(ReminderPublic):
    patient_id: str
    patient_name: str | None = None

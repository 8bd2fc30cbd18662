"""Booking form: selection state, validation and the single-flight submit.

A :class:`BookingForm` mirrors one patient-facing booking form. The calendar
asks :meth:`BookingForm.is_selectable` which cells to offer, and
:meth:`BookingForm.submit` re-validates the whole selection before handing a
``pending`` record to the injected store. Only one submission may be in
flight per form; a second call while the first is awaiting the store returns
without doing anything.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date
from enum import StrEnum

from src.core.cache import QueryCache
from src.core.exceptions import BusinessLogicError, ValidationError
from src.modules.appointments.models import Appointment
from src.modules.appointments.schemas import AppointmentRecord
from src.modules.appointments.store import AppointmentStore
from src.modules.providers.schemas import ProviderOption
from src.modules.schedule.service import is_available, is_selectable, today
from src.shared.enums import AppointmentStatus

logger = logging.getLogger(__name__)

DASHBOARD_PATH = "/api/v1/dashboard"
APPOINTMENTS_NAMESPACE = "appointments"

MISSING_FIELDS = "Please fill all fields"
UNKNOWN_DOCTOR = "Selected doctor is not available for booking"
DATE_IN_PAST = "Appointment date cannot be in the past"
DOCTOR_UNAVAILABLE = "Doctor is not available on this day"


class SubmissionState(StrEnum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"


@dataclass
class SubmissionResult:
    state: SubmissionState
    appointment: Appointment | None = None
    error: BusinessLogicError | None = None
    redirect_to: str | None = None
    skipped: bool = False

    @property
    def ok(self) -> bool:
        return self.appointment is not None


@dataclass
class BookingForm:
    patient_id: str
    providers: Sequence[ProviderOption]
    store: AppointmentStore
    cache: QueryCache
    doctor_id: str | None = None
    appointment_date: date | None = None
    reason: str = ""
    # Local copy only; the created record is always pending.
    status: str = AppointmentStatus.PENDING.value
    state: SubmissionState = field(default=SubmissionState.IDLE)
    error: str | None = None

    def _today(self) -> date:
        return today()

    @property
    def selected_doctor(self) -> ProviderOption | None:
        if not self.doctor_id:
            return None
        return next((option for option in self.providers if option.id == self.doctor_id), None)

    @property
    def can_submit(self) -> bool:
        return (
            self.state is SubmissionState.IDLE
            and bool(self.doctor_id)
            and self.appointment_date is not None
            and bool(self.reason.strip())
        )

    def select_doctor(self, doctor_id: str | None) -> None:
        self.doctor_id = doctor_id
        self.error = None

    def is_selectable(self, value: date) -> bool:
        doctor = self.selected_doctor
        return is_selectable(
            value,
            self._today(),
            doctor.availability if doctor else None,
            doctor_selected=doctor is not None,
        )

    def select_date(self, value: date) -> None:
        if not self.is_selectable(value):
            raise ValidationError(DATE_IN_PAST if value < self._today() else DOCTOR_UNAVAILABLE)
        self.appointment_date = value
        self.error = None

    def validate(self) -> AppointmentRecord:
        reason = self.reason.strip()
        if not self.doctor_id or self.appointment_date is None or not reason:
            raise ValidationError(MISSING_FIELDS)
        doctor = self.selected_doctor
        if doctor is None:
            raise ValidationError(UNKNOWN_DOCTOR)
        if self.appointment_date < self._today():
            raise ValidationError(DATE_IN_PAST)
        # Re-checked here: the doctor may have changed after the date was picked.
        if not is_available(self.appointment_date, doctor.availability):
            raise ValidationError(DOCTOR_UNAVAILABLE)
        return AppointmentRecord(
            doctor_id=doctor.id,
            patient_id=self.patient_id,
            appointment_date=self.appointment_date,
            reason=reason,
            status=AppointmentStatus.PENDING,
        )

    async def submit(self) -> SubmissionResult:
        if self.state is not SubmissionState.IDLE:
            logger.debug("Ignoring booking submit for patient %s while %s", self.patient_id, self.state)
            return SubmissionResult(state=self.state, skipped=True)

        self.state = SubmissionState.SUBMITTING
        self.error = None
        try:
            record = self.validate()
            appointment = await self.store.create(record)
        except BusinessLogicError as exc:
            self.state = SubmissionState.IDLE
            self.error = exc.detail
            logger.info("Booking rejected for patient %s: %s", self.patient_id, exc.detail)
            return SubmissionResult(state=self.state, error=exc)
        except BaseException:
            self.state = SubmissionState.IDLE
            raise

        await self.cache.invalidate(APPOINTMENTS_NAMESPACE)
        self.state = SubmissionState.SUCCEEDED
        logger.info(
            "Booked appointment %s with doctor %s on %s",
            appointment.appointment_id,
            record.doctor_id,
            record.appointment_date,
        )
        return SubmissionResult(state=self.state, appointment=appointment, redirect_to=DASHBOARD_PATH)

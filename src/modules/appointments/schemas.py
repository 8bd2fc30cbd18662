"""Appointments schemas."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, computed_field

from src.shared.enums import AppointmentStatus


class AppointmentRecord(BaseModel):
    """Row handed to the appointment store once a booking has been validated."""

    doctor_id: str
    patient_id: str
    appointment_date: date
    reason: str
    status: AppointmentStatus = AppointmentStatus.PENDING


class AppointmentPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    appointment_id: str = Field(serialization_alias="id")
    patient_id: str
    doctor_id: str
    appointment_date: date
    reason: str
    notes: str | None = None
    status: AppointmentStatus
    created_at: datetime | None = None


class DoctorAppointmentPublic(AppointmentPublic):
    patient_name: str | None = None
    patient_phone: str | None = None

    @computed_field(return_type=bool)
    def can_update_status(self) -> bool:
        return self.status == AppointmentStatus.PENDING


class AppointmentCreate(BaseModel):
    # Left optional so missing fields surface as booking validation messages.
    doctor_id: str | None = None
    appointment_date: date | None = None
    reason: str = ""
    status: str | None = None


class AppointmentUpdate(BaseModel):
    status: AppointmentStatus | None = None
    notes: str | None = None


class PatientAppointmentPublic(AppointmentPublic):
    doctor_name: str | None = None

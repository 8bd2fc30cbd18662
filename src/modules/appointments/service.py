"""Appointment service layer."""

from __future__ import annotations

import logging

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.core.cache import QueryCache
from src.modules.appointments.booking import APPOINTMENTS_NAMESPACE, BookingForm
from src.modules.appointments.models import Appointment
from src.modules.appointments.schemas import (
    AppointmentCreate,
    AppointmentPublic,
    AppointmentUpdate,
    DoctorAppointmentPublic,
    PatientAppointmentPublic,
)
from src.modules.appointments.store import SqlAppointmentStore
from src.modules.providers.service import ProviderDirectory
from src.modules.users.models import User

logger = logging.getLogger(__name__)


class AppointmentService:
    def __init__(self, db: AsyncSession, cache: QueryCache):
        self.db = db
        self.cache = cache

    async def build_form(self, user: User) -> BookingForm:
        providers = await ProviderDirectory(self.db).list_providers()
        return BookingForm(
            patient_id=user.user_id,
            providers=providers,
            store=SqlAppointmentStore(self.db),
            cache=self.cache,
        )

    async def book(self, payload: AppointmentCreate, user: User) -> Appointment:
        form = await self.build_form(user)
        form.select_doctor(payload.doctor_id)
        form.appointment_date = payload.appointment_date
        form.reason = payload.reason
        if payload.status is not None:
            form.status = payload.status
        result = await form.submit()
        if result.error is not None:
            raise result.error
        return result.appointment

    async def list_for_patient(self, user: User) -> list[dict]:
        async def load() -> list[dict]:
            stmt = (
                select(Appointment)
                .options(selectinload(Appointment.doctor))
                .where(Appointment.patient_id == user.user_id)
                .order_by(Appointment.appointment_date.desc(), Appointment.created_at.desc())
            )
            result = await self.db.execute(stmt)
            return [
                PatientAppointmentPublic(
                    **AppointmentPublic.model_validate(item).model_dump(),
                    doctor_name=item.doctor.full_name if item.doctor else None,
                ).model_dump(mode="json")
                for item in result.scalars().all()
            ]

        return await self.cache.remember((APPOINTMENTS_NAMESPACE, "patient", user.user_id), load)

    async def list_for_doctor(self, user: User) -> list[dict]:
        async def load() -> list[dict]:
            stmt = (
                select(Appointment)
                .options(selectinload(Appointment.patient))
                .where(Appointment.doctor_id == user.user_id)
                .order_by(Appointment.appointment_date.asc(), Appointment.created_at.asc())
            )
            result = await self.db.execute(stmt)
            return [self._doctor_view(item).model_dump(mode="json") for item in result.scalars().all()]

        return await self.cache.remember((APPOINTMENTS_NAMESPACE, "doctor", user.user_id), load)

    async def update_for_doctor(self, appointment_id: str, payload: AppointmentUpdate, user: User) -> DoctorAppointmentPublic:
        stmt = (
            select(Appointment)
            .options(selectinload(Appointment.patient))
            .where(
                Appointment.appointment_id == appointment_id,
                Appointment.doctor_id == user.user_id,
            )
        )
        appointment = (await self.db.execute(stmt)).scalar_one_or_none()
        if appointment is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Appointment not found")

        update_data = payload.model_dump(exclude_unset=True)
        if not update_data:
            return self._doctor_view(appointment)

        previous = appointment.status
        if update_data.get("status") is not None:
            appointment.status = update_data["status"]
        if "notes" in update_data:
            appointment.notes = update_data["notes"]
        await self.db.commit()
        if appointment.status != previous:
            logger.info(
                "Appointment %s status %s -> %s by doctor %s",
                appointment.appointment_id,
                previous,
                appointment.status,
                user.user_id,
            )
        await self.cache.invalidate(APPOINTMENTS_NAMESPACE)
        return self._doctor_view(appointment)

    async def admin_list(self) -> list[Appointment]:
        stmt = select(Appointment).order_by(Appointment.appointment_date.desc())
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    def _doctor_view(appointment: Appointment) -> DoctorAppointmentPublic:
        patient = appointment.patient
        return DoctorAppointmentPublic(
            **AppointmentPublic.model_validate(appointment).model_dump(),
            patient_name=patient.full_name if patient else None,
            patient_phone=patient.phone if patient else None,
        )

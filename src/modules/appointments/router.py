"""Appointments API routes."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.cache import QueryCache, get_query_cache
from src.core.database import get_db
from src.core.deps import require_doctor, require_hospital_admin, require_patient
from src.modules.appointments.schemas import (
    AppointmentCreate,
    AppointmentPublic,
    AppointmentUpdate,
    DoctorAppointmentPublic,
    PatientAppointmentPublic,
)
from src.modules.appointments.service import AppointmentService
from src.modules.users.models import User

router = APIRouter(prefix="/api/v1/appointments", tags=["appointments"])
admin_router = APIRouter(prefix="/api/v1/admin/appointments", tags=["admin-appointments"])


def get_service(
    db: AsyncSession = Depends(get_db),
    cache: QueryCache = Depends(get_query_cache),
) -> AppointmentService:
    return AppointmentService(db, cache)


@router.get("/me", response_model=list[PatientAppointmentPublic])
async def my_appointments(
    current_user: User = Depends(require_patient),
    service: AppointmentService = Depends(get_service),
) -> list[dict]:
    return await service.list_for_patient(current_user)


@router.post("", response_model=AppointmentPublic, status_code=status.HTTP_201_CREATED)
async def create_appointment(
    payload: AppointmentCreate,
    current_user: User = Depends(require_patient),
    service: AppointmentService = Depends(get_service),
) -> AppointmentPublic:
    return await service.book(payload, current_user)


@router.get("/doctor", response_model=list[DoctorAppointmentPublic])
async def doctor_appointments(
    current_user: User = Depends(require_doctor),
    service: AppointmentService = Depends(get_service),
) -> list[dict]:
    return await service.list_for_doctor(current_user)


@router.patch("/doctor/{appointment_id}", response_model=DoctorAppointmentPublic)
async def update_doctor_appointment(
    appointment_id: str,
    payload: AppointmentUpdate,
    current_user: User = Depends(require_doctor),
    service: AppointmentService = Depends(get_service),
) -> DoctorAppointmentPublic:
    return await service.update_for_doctor(appointment_id, payload, current_user)


@admin_router.get("", response_model=list[AppointmentPublic])
async def admin_list_appointments(
    _: User = Depends(require_hospital_admin),
    service: AppointmentService = Depends(get_service),
) -> list[AppointmentPublic]:
    return await service.admin_list()

"""Condition catalog and patient record routes."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.cache import QueryCache, get_query_cache
from src.core.database import get_db
from src.core.deps import get_current_user, require_doctor, require_patient, require_role
from src.modules.conditions.models import Condition
from src.modules.conditions.schemas import (
    ConditionCreate,
    ConditionPublic,
    PatientRecordCreate,
    PatientRecordPublic,
    PatientSummary,
)
from src.modules.conditions.service import PatientRecordService
from src.modules.users.models import User
from src.modules.users.service import list_patients
from src.shared.enums import UserRole

router = APIRouter(prefix="/api/v1/conditions", tags=["conditions"])
records_router = APIRouter(prefix="/api/v1/patient-records", tags=["patient-records"])

require_clinical_staff = require_role(UserRole.DOCTOR, UserRole.HOSPITAL_ADMIN)


def get_service(
    db: AsyncSession = Depends(get_db),
    cache: QueryCache = Depends(get_query_cache),
) -> PatientRecordService:
    return PatientRecordService(db, cache)


@router.get("", response_model=list[ConditionPublic])
async def list_conditions(
    _: User = Depends(get_current_user),
    service: PatientRecordService = Depends(get_service),
) -> list[Condition]:
    return await service.list_conditions()


@router.post("", response_model=ConditionPublic, status_code=status.HTTP_201_CREATED)
async def create_condition(
    payload: ConditionCreate,
    _: User = Depends(require_clinical_staff),
    service: PatientRecordService = Depends(get_service),
) -> Condition:
    return await service.create_condition(payload)


@records_router.get("", response_model=list[PatientRecordPublic])
async def list_patient_records(
    _: User = Depends(require_doctor),
    service: PatientRecordService = Depends(get_service),
) -> list[PatientRecordPublic]:
    return await service.list_records()


@records_router.get("/patients", response_model=list[PatientSummary])
async def list_patient_accounts(
    _: User = Depends(require_doctor),
    db: AsyncSession = Depends(get_db),
) -> list[User]:
    return await list_patients(db)


@records_router.get("/me", response_model=list[PatientRecordPublic])
async def my_records(
    current_user: User = Depends(require_patient),
    service: PatientRecordService = Depends(get_service),
) -> list[PatientRecordPublic]:
    return await service.list_records(patient_id=current_user.user_id)


@records_router.post("", response_model=PatientRecordPublic, status_code=status.HTTP_201_CREATED)
async def add_patient_record(
    payload: PatientRecordCreate,
    current_user: User = Depends(require_doctor),
    service: PatientRecordService = Depends(get_service),
) -> PatientRecordPublic:
    return await service.add_record(payload, current_user)

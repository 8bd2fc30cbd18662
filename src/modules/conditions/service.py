"""Condition catalog and doctor-maintained patient records."""

from __future__ import annotations

import logging

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.core.cache import QueryCache
from src.core.exceptions import StoreError, ValidationError
from src.modules.conditions.models import Condition, PatientCondition
from src.modules.conditions.schemas import ConditionCreate, PatientRecordCreate, PatientRecordPublic
from src.modules.users.models import User
from src.modules.users.service import get_patient

logger = logging.getLogger(__name__)

# The medicine shop is filtered by diagnoses, so records change its listings.
MEDICINES_NAMESPACE = "medicines"


async def condition_ids_for(db: AsyncSession, patient_id: str) -> list[str]:
    stmt = select(PatientCondition.condition_id).where(PatientCondition.patient_id == patient_id).distinct()
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def get_condition(db: AsyncSession, condition_id: str) -> Condition:
    condition = await db.get(Condition, condition_id)
    if condition is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Condition not found")
    return condition


class PatientRecordService:
    def __init__(self, db: AsyncSession, cache: QueryCache):
        self.db = db
        self.cache = cache

    async def list_conditions(self) -> list[Condition]:
        result = await self.db.execute(select(Condition).order_by(Condition.name))
        return list(result.scalars().all())

    async def create_condition(self, payload: ConditionCreate) -> Condition:
        name = payload.name.strip()
        if not name:
            raise ValidationError("Condition name cannot be empty")
        description = payload.description.strip() if payload.description else None
        condition = Condition(name=name, description=description or None)
        self.db.add(condition)
        try:
            await self.db.commit()
        except IntegrityError as exc:
            await self.db.rollback()
            raise StoreError("Condition already exists") from exc
        return condition

    async def list_records(self, patient_id: str | None = None) -> list[PatientRecordPublic]:
        stmt = (
            select(PatientCondition)
            .options(selectinload(PatientCondition.condition), selectinload(PatientCondition.patient))
            .order_by(PatientCondition.diagnosed_date.desc(), PatientCondition.created_at.desc())
        )
        if patient_id is not None:
            stmt = stmt.where(PatientCondition.patient_id == patient_id)
        result = await self.db.execute(stmt)
        return [self._to_public(record) for record in result.scalars().all()]

    async def add_record(self, payload: PatientRecordCreate, doctor: User) -> PatientRecordPublic:
        patient = await get_patient(self.db, payload.patient_id)
        condition = await get_condition(self.db, payload.condition_id)
        record = PatientCondition(
            patient_id=patient.user_id,
            condition_id=condition.condition_id,
            diagnosed_by=doctor.user_id,
            diagnosed_date=payload.diagnosed_date,
            notes=(payload.notes or "").strip() or None,
        )
        self.db.add(record)
        await self.db.commit()
        logger.info(
            "Doctor %s recorded %s for patient %s",
            doctor.user_id,
            condition.name,
            patient.user_id,
        )
        await self.cache.invalidate(MEDICINES_NAMESPACE)
        public = PatientRecordPublic.model_validate(record)
        public.patient_name = patient.full_name
        public.condition_name = condition.name
        return public

    @staticmethod
    def _to_public(record: PatientCondition) -> PatientRecordPublic:
        public = PatientRecordPublic.model_validate(record)
        public.patient_name = record.patient.full_name if record.patient else None
        public.condition_name = record.condition.name if record.condition else None
        return public

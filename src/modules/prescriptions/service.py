"""Doctor prescriptions, stored as patient medicine reminders."""

from __future__ import annotations

import logging

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.core.exceptions import ValidationError
from src.modules.pharmacy.models import Medicine
from src.modules.prescriptions.schemas import PrescriptionCreate, PrescriptionPublic
from src.modules.reminders.models import MedicineReminder
from src.modules.users.models import User
from src.modules.users.service import get_patient

logger = logging.getLogger(__name__)


def to_public(reminder: MedicineReminder, medicine: Medicine | None, patient: User | None) -> PrescriptionPublic:
    public = PrescriptionPublic.model_validate(reminder)
    public.medicine_name = medicine.name if medicine else None
    public.patient_name = patient.full_name if patient else None
    return public


class PrescriptionService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def prescribe(self, payload: PrescriptionCreate, doctor: User) -> PrescriptionPublic:
        patient = await get_patient(self.db, payload.patient_id)
        medicine = await self.db.get(Medicine, payload.medicine_id)
        if medicine is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Medicine not found")
        if not medicine.requires_prescription:
            raise ValidationError("Medicine does not require a prescription")

        reminder = MedicineReminder(
            prescribed_by=doctor.user_id,
            **payload.model_dump(),
        )
        self.db.add(reminder)
        await self.db.commit()
        await self.db.refresh(reminder)
        logger.info(
            "Doctor %s prescribed %s to patient %s",
            doctor.user_id,
            medicine.medicine_id,
            patient.user_id,
        )
        return to_public(reminder, medicine, patient)

    async def list_for_doctor(self, doctor: User) -> list[PrescriptionPublic]:
        stmt = (
            select(MedicineReminder)
            .options(selectinload(MedicineReminder.medicine), selectinload(MedicineReminder.patient))
            .where(MedicineReminder.prescribed_by == doctor.user_id)
            .order_by(MedicineReminder.created_at.desc())
        )
        result = await self.db.execute(stmt)
        return [to_public(item, item.medicine, item.patient) for item in result.scalars().all()]

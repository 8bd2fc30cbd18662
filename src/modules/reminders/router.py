"""Medicine reminder routes."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.core.database import get_db
from src.core.deps import require_patient
from src.modules.pharmacy.models import Medicine
from src.modules.reminders.models import MedicineReminder
from src.modules.reminders.schemas import ReminderCreate, ReminderPublic
from src.modules.users.models import User

router = APIRouter(prefix="/api/v1/reminders", tags=["reminders"])


def _to_public(reminder: MedicineReminder, medicine: Medicine | None) -> ReminderPublic:
    public = ReminderPublic.model_validate(reminder)
    public.medicine_name = medicine.name if medicine else None
    return public


@router.get("", response_model=list[ReminderPublic])
async def list_reminders(
    current_user: User = Depends(require_patient),
    db: AsyncSession = Depends(get_db),
) -> list[ReminderPublic]:
    result = await db.execute(
        select(MedicineReminder)
        .options(selectinload(MedicineReminder.medicine))
        .where(MedicineReminder.patient_id == current_user.user_id)
        .order_by(MedicineReminder.created_at.desc())
    )
    return [_to_public(item, item.medicine) for item in result.scalars().all()]


@router.post("", response_model=ReminderPublic, status_code=status.HTTP_201_CREATED)
async def create_reminder(
    payload: ReminderCreate,
    current_user: User = Depends(require_patient),
    db: AsyncSession = Depends(get_db),
) -> ReminderPublic:
    medicine = await db.get(Medicine, payload.medicine_id)
    if medicine is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Medicine not found")

    reminder = MedicineReminder(patient_id=current_user.user_id, **payload.model_dump())
    db.add(reminder)
    await db.commit()
    await db.refresh(reminder)
    return _to_public(reminder, medicine)


@router.delete("/{reminder_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_reminder(
    reminder_id: str,
    current_user: User = Depends(require_patient),
    db: AsyncSession = Depends(get_db),
) -> None:
    result = await db.execute(
        select(MedicineReminder).where(
            MedicineReminder.reminder_id == reminder_id,
            MedicineReminder.patient_id == current_user.user_id,
        )
    )
    reminder = result.scalar_one_or_none()
    if reminder is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Reminder not found")
    await db.delete(reminder)
    await db.commit()

"""Lookups over user accounts shared by the doctor-facing modules."""

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.modules.users.models import User
from src.shared.enums import UserRole


async def list_patients(db: AsyncSession) -> list[User]:
    stmt = (
        select(User)
        .where(User.role == UserRole.PATIENT, User.is_active.is_(True))
        .order_by(User.full_name)
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def get_patient(db: AsyncSession, patient_id: str) -> User:
    """Return an active patient account or raise 404."""
    user = await db.get(User, patient_id)
    if user is None or user.role != UserRole.PATIENT or not user.is_active:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Patient not found")
    return user

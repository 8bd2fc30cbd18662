"""Doctor directory backed by the users and availability tables."""

from __future__ import annotations

import logging

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.modules.providers.models import DoctorAvailability
from src.modules.providers.schemas import ProviderOption
from src.modules.schedule.service import coerce_category
from src.modules.users.models import User
from src.shared.enums import AvailabilityCategory, UserRole

logger = logging.getLogger(__name__)


class ProviderDirectory:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_providers(self) -> list[ProviderOption]:
        stmt = (
            select(User, DoctorAvailability.availability_type)
            .outerjoin(DoctorAvailability, DoctorAvailability.doctor_id == User.user_id)
            .where(User.role == UserRole.DOCTOR, User.is_active.is_(True))
            .order_by(User.full_name)
        )
        result = await self.db.execute(stmt)
        return [self._to_option(user, availability) for user, availability in result.all()]

    async def get_provider(self, doctor_id: str) -> ProviderOption:
        stmt = (
            select(User, DoctorAvailability.availability_type)
            .outerjoin(DoctorAvailability, DoctorAvailability.doctor_id == User.user_id)
            .where(
                User.user_id == doctor_id,
                User.role == UserRole.DOCTOR,
                User.is_active.is_(True),
            )
        )
        row = (await self.db.execute(stmt)).one_or_none()
        if row is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Doctor not found")
        user, availability = row
        return self._to_option(user, availability)

    async def set_availability(self, doctor_id: str, category: AvailabilityCategory) -> ProviderOption:
        await self.get_provider(doctor_id)
        record = await self.db.get(DoctorAvailability, doctor_id)
        if record is None:
            record = DoctorAvailability(doctor_id=doctor_id, availability_type=category)
            self.db.add(record)
        else:
            record.availability_type = category
        await self.db.commit()
        logger.info("Doctor %s availability set to %s", doctor_id, category)
        return await self.get_provider(doctor_id)

    @staticmethod
    def _to_option(user: User, availability: AvailabilityCategory | str | None) -> ProviderOption:
        return ProviderOption(
            id=user.user_id,
            display_name=user.full_name,
            availability=coerce_category(availability),
        )

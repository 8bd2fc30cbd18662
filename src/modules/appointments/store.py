"""Persistence port for new appointments."""

from __future__ import annotations

import logging
from typing import Protocol

from fastapi import status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.exceptions import StoreError
from src.modules.appointments.models import Appointment
from src.modules.appointments.schemas import AppointmentRecord

logger = logging.getLogger(__name__)


class AppointmentStore(Protocol):
    async def create(self, record: AppointmentRecord) -> Appointment:
        """Persist ``record``; raise StoreError when the data layer refuses it."""


class SqlAppointmentStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, record: AppointmentRecord) -> Appointment:
        appointment = Appointment(**record.model_dump())
        self.db.add(appointment)
        try:
            await self.db.commit()
        except IntegrityError as exc:
            await self.db.rollback()
            logger.warning("Appointment insert rejected for patient %s: %s", record.patient_id, exc.orig)
            raise StoreError("Appointment could not be saved") from exc
        except SQLAlchemyError as exc:
            await self.db.rollback()
            logger.error("Appointment store failure for patient %s: %s", record.patient_id, exc)
            raise StoreError(
                "Appointment service is temporarily unavailable",
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            ) from exc
        await self.db.refresh(appointment)
        return appointment

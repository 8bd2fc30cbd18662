"""Doctor prescription routes."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.database import get_db
from src.core.deps import require_doctor
from src.modules.prescriptions.schemas import PrescriptionCreate, PrescriptionPublic
from src.modules.prescriptions.service import PrescriptionService
from src.modules.users.models import User

router = APIRouter(prefix="/api/v1/prescriptions", tags=["prescriptions"])


def get_service(db: AsyncSession = Depends(get_db)) -> PrescriptionService:
    return PrescriptionService(db)


@router.get("", response_model=list[PrescriptionPublic])
async def list_prescriptions(
    current_user: User = Depends(require_doctor),
    service: PrescriptionService = Depends(get_service),
) -> list[PrescriptionPublic]:
    return await service.list_for_doctor(current_user)


@router.post("", response_model=PrescriptionPublic, status_code=status.HTTP_201_CREATED)
async def prescribe(
    payload: PrescriptionCreate,
    current_user: User = Depends(require_doctor),
    service: PrescriptionService = Depends(get_service),
) -> PrescriptionPublic:
    return await service.prescribe(payload, current_user)

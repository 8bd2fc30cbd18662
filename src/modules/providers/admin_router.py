"""Admin routes for doctor availability."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.cache import QueryCache, get_query_cache
from src.core.database import get_db
from src.core.deps import require_hospital_admin
from src.modules.providers.schemas import AvailabilityUpdate, ProviderOption
from src.modules.providers.service import ProviderDirectory
from src.modules.users.models import User

router = APIRouter(prefix="/api/v1/admin/providers", tags=["admin-providers"])


@router.put("/{doctor_id}/availability", response_model=ProviderOption)
async def set_doctor_availability(
    doctor_id: str,
    payload: AvailabilityUpdate,
    _: User = Depends(require_hospital_admin),
    db: AsyncSession = Depends(get_db),
    cache: QueryCache = Depends(get_query_cache),
) -> ProviderOption:
    option = await ProviderDirectory(db).set_availability(doctor_id, payload.availability)
    await cache.invalidate("providers")
    return option

"""Doctor directory and booking calendar routes."""

from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.cache import QueryCache, get_query_cache
from src.core.database import get_db
from src.core.deps import require_doctor
from src.modules.providers.schemas import AvailabilityUpdate, ProviderOption
from src.modules.providers.service import ProviderDirectory
from src.modules.schedule.schemas import CalendarDay
from src.modules.schedule.service import MAX_CALENDAR_DAYS, build_calendar, today
from src.modules.users.models import User

router = APIRouter(prefix="/api/v1/providers", tags=["providers"])


def get_directory(db: AsyncSession = Depends(get_db)) -> ProviderDirectory:
    return ProviderDirectory(db)


@router.get("", response_model=list[ProviderOption])
async def list_providers(
    directory: ProviderDirectory = Depends(get_directory),
    cache: QueryCache = Depends(get_query_cache),
) -> list[dict]:
    async def load() -> list[dict]:
        return [option.model_dump(mode="json") for option in await directory.list_providers()]

    return await cache.remember(("providers", "list"), load)


@router.get("/{doctor_id}/calendar", response_model=list[CalendarDay])
async def provider_calendar(
    doctor_id: str,
    start: date | None = Query(default=None),
    days: int = Query(default=35, ge=1, le=MAX_CALENDAR_DAYS),
    directory: ProviderDirectory = Depends(get_directory),
) -> list[CalendarDay]:
    provider = await directory.get_provider(doctor_id)
    current_date = today()
    return build_calendar(start or current_date, days, provider.availability, current_date)


@router.put("/me/availability", response_model=ProviderOption)
async def set_my_availability(
    payload: AvailabilityUpdate,
    current_user: User = Depends(require_doctor),
    directory: ProviderDirectory = Depends(get_directory),
    cache: QueryCache = Depends(get_query_cache),
) -> ProviderOption:
    option = await directory.set_availability(current_user.user_id, payload.availability)
    await cache.invalidate("providers")
    return option

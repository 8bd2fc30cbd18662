"""Patient-facing medicine shop routes."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.cache import QueryCache, get_query_cache
from src.core.database import get_db
from src.core.deps import get_current_user, require_patient
from src.modules.pharmacy.models import MedicinePurchase
from src.modules.pharmacy.schemas import MedicinePublic, PurchaseCreate, PurchasePublic
from src.modules.pharmacy.service import PharmacyService
from src.modules.users.models import User

router = APIRouter(prefix="/api/v1/pharmacy", tags=["pharmacy"])


def get_service(
    db: AsyncSession = Depends(get_db),
    cache: QueryCache = Depends(get_query_cache),
) -> PharmacyService:
    return PharmacyService(db, cache)


@router.get("/medicines", response_model=list[MedicinePublic])
async def list_medicines(
    current_user: User = Depends(get_current_user),
    service: PharmacyService = Depends(get_service),
) -> list[dict]:
    return await service.list_in_stock(current_user)


@router.post("/purchases", response_model=PurchasePublic, status_code=status.HTTP_201_CREATED)
async def purchase_medicine(
    payload: PurchaseCreate,
    current_user: User = Depends(require_patient),
    service: PharmacyService = Depends(get_service),
) -> MedicinePurchase:
    return await service.purchase(payload, current_user)


@router.get("/purchases/me", response_model=list[PurchasePublic])
async def my_purchases(
    current_user: User = Depends(require_patient),
    service: PharmacyService = Depends(get_service),
) -> list[MedicinePurchase]:
    return await service.list_purchases_for_patient(current_user)

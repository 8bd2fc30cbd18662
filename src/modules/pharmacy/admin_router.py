"""Pharmacist inventory routes."""

from fastapi import APIRouter, Depends, status

from src.core.deps import require_pharmacist
from src.modules.pharmacy.models import Medicine, MedicinePurchase
from src.modules.pharmacy.router import get_service
from src.modules.pharmacy.schemas import MedicineCreate, MedicinePublic, MedicineUpdate, PurchasePublic
from src.modules.pharmacy.service import PharmacyService
from src.modules.users.models import User

router = APIRouter(prefix="/api/v1/admin/pharmacy", tags=["admin-pharmacy"])


@router.get("/medicines", response_model=list[MedicinePublic])
async def list_inventory(
    _: User = Depends(require_pharmacist),
    service: PharmacyService = Depends(get_service),
) -> list[Medicine]:
    return await service.admin_list_medicines()


@router.post("/medicines", response_model=MedicinePublic, status_code=status.HTTP_201_CREATED)
async def create_medicine(
    payload: MedicineCreate,
    _: User = Depends(require_pharmacist),
    service: PharmacyService = Depends(get_service),
) -> Medicine:
    return await service.admin_create(payload)


@router.put("/medicines/{medicine_id}", response_model=MedicinePublic)
async def update_medicine(
    medicine_id: str,
    payload: MedicineUpdate,
    _: User = Depends(require_pharmacist),
    service: PharmacyService = Depends(get_service),
) -> Medicine:
    return await service.admin_update(medicine_id, payload)


@router.delete("/medicines/{medicine_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_medicine(
    medicine_id: str,
    _: User = Depends(require_pharmacist),
    service: PharmacyService = Depends(get_service),
) -> None:
    await service.admin_delete(medicine_id)


@router.get("/purchases", response_model=list[PurchasePublic])
async def list_purchases(
    _: User = Depends(require_pharmacist),
    service: PharmacyService = Depends(get_service),
) -> list[MedicinePurchase]:
    return await service.admin_list_purchases()

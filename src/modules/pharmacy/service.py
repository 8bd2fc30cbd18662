"""Pharmacy service layer."""

from __future__ import annotations

import logging

from fastapi import HTTPException, status
from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.cache import QueryCache
from src.core.exceptions import StoreError, ValidationError
from src.modules.conditions.service import condition_ids_for, get_condition
from src.modules.pharmacy.models import Medicine, MedicinePurchase
from src.modules.pharmacy.schemas import MedicineCreate, MedicinePublic, MedicineUpdate, PurchaseCreate
from src.modules.users.models import User
from src.shared.enums import UserRole

logger = logging.getLogger(__name__)

MEDICINES_NAMESPACE = "medicines"


class PharmacyService:
    def __init__(self, db: AsyncSession, cache: QueryCache):
        self.db = db
        self.cache = cache

    async def list_in_stock(self, user: User) -> list[dict]:
        """In-stock medicines; patients only see those treating their diagnosed conditions."""
        if user.role != UserRole.PATIENT:
            return await self.cache.remember(
                (MEDICINES_NAMESPACE, "in-stock", "all"),
                lambda: self._load_in_stock(None),
            )

        async def load_for_patient() -> list[dict]:
            condition_ids = await condition_ids_for(self.db, user.user_id)
            if not condition_ids:
                return []
            return await self._load_in_stock(condition_ids)

        return await self.cache.remember(
            (MEDICINES_NAMESPACE, "in-stock", "patient", user.user_id),
            load_for_patient,
        )

    async def _load_in_stock(self, condition_ids: list[str] | None) -> list[dict]:
        stmt = select(Medicine).where(Medicine.stock_quantity > 0).order_by(Medicine.name)
        if condition_ids is not None:
            stmt = stmt.where(Medicine.condition_id.in_(condition_ids))
        result = await self.db.execute(stmt)
        return [MedicinePublic.model_validate(item).model_dump(mode="json") for item in result.scalars().all()]

    async def purchase(self, payload: PurchaseCreate, user: User) -> MedicinePurchase:
        medicine = await self._get_medicine(payload.medicine_id)
        if payload.quantity > medicine.stock_quantity:
            raise ValidationError("Insufficient stock")

        # Guarded decrement so two buyers cannot oversell the last units.
        result = await self.db.execute(
            update(Medicine)
            .where(
                Medicine.medicine_id == medicine.medicine_id,
                Medicine.stock_quantity >= payload.quantity,
            )
            .values(stock_quantity=Medicine.stock_quantity - payload.quantity)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            await self.db.rollback()
            raise ValidationError("Insufficient stock")

        purchase = MedicinePurchase(
            patient_id=user.user_id,
            medicine_id=medicine.medicine_id,
            quantity=payload.quantity,
            total_price=medicine.price * payload.quantity,
            prescription_verified=medicine.requires_prescription,
        )
        self.db.add(purchase)
        await self.db.commit()
        await self.db.refresh(purchase)
        logger.info(
            "Patient %s bought %d x %s for %s",
            user.user_id,
            payload.quantity,
            medicine.medicine_id,
            purchase.total_price,
        )
        await self.cache.invalidate(MEDICINES_NAMESPACE)
        return purchase

    async def list_purchases_for_patient(self, user: User) -> list[MedicinePurchase]:
        stmt = (
            select(MedicinePurchase)
            .where(MedicinePurchase.patient_id == user.user_id)
            .order_by(MedicinePurchase.purchase_date.desc())
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def admin_list_medicines(self) -> list[Medicine]:
        result = await self.db.execute(select(Medicine).order_by(Medicine.created_at.desc()))
        return list(result.scalars().all())

    async def admin_list_purchases(self) -> list[MedicinePurchase]:
        result = await self.db.execute(select(MedicinePurchase).order_by(MedicinePurchase.purchase_date.desc()))
        return list(result.scalars().all())

    async def admin_create(self, payload: MedicineCreate) -> Medicine:
        data = payload.model_dump()
        data["name"] = data["name"].strip()
        if not data["name"]:
            raise ValidationError("Medicine name cannot be empty")
        if data["description"] is not None:
            data["description"] = data["description"].strip() or None
        if data["condition_id"] is not None:
            await get_condition(self.db, data["condition_id"])
        medicine = Medicine(**data)
        self.db.add(medicine)
        await self.db.commit()
        await self.db.refresh(medicine)
        await self.cache.invalidate(MEDICINES_NAMESPACE)
        return medicine

    async def admin_update(self, medicine_id: str, payload: MedicineUpdate) -> Medicine:
        medicine = await self._get_medicine(medicine_id)
        update_data = payload.model_dump(exclude_unset=True)
        if "name" in update_data:
            name = (update_data["name"] or "").strip()
            if not name:
                raise ValidationError("Medicine name cannot be empty")
            update_data["name"] = name
        if update_data.get("condition_id") is not None:
            await get_condition(self.db, update_data["condition_id"])
        for field, value in update_data.items():
            if value is None and field not in ("description", "condition_id"):
                continue
            setattr(medicine, field, value)
        await self.db.commit()
        await self.db.refresh(medicine)
        await self.cache.invalidate(MEDICINES_NAMESPACE)
        return medicine

    async def admin_delete(self, medicine_id: str) -> None:
        medicine = await self._get_medicine(medicine_id)
        purchases = await self.db.scalar(
            select(func.count(MedicinePurchase.purchase_id)).where(MedicinePurchase.medicine_id == medicine_id)
        )
        if purchases:
            # Purchases back the revenue figures and must outlive the catalog entry.
            raise StoreError("Medicine has purchase history and cannot be deleted")
        await self.db.delete(medicine)
        await self.db.commit()
        await self.cache.invalidate(MEDICINES_NAMESPACE)

    async def _get_medicine(self, medicine_id: str) -> Medicine:
        medicine = await self.db.get(Medicine, medicine_id)
        if medicine is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Medicine not found")
        return medicine

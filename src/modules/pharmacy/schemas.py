"""Pharmacy schemas."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class MedicinePublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    medicine_id: str = Field(serialization_alias="id")
    name: str
    description: str | None = None
    price: Decimal
    stock_quantity: int
    requires_prescription: bool
    condition_id: str | None = None


class MedicineCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    description: str | None = None
    price: Decimal = Field(..., ge=0)
    stock_quantity: int = Field(..., ge=0)
    requires_prescription: bool = True
    condition_id: str | None = None


class MedicineUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=120)
    description: str | None = None
    price: Decimal | None = Field(default=None, ge=0)
    stock_quantity: int | None = Field(default=None, ge=0)
    requires_prescription: bool | None = None
    condition_id: str | None = None


class PurchaseCreate(BaseModel):
    medicine_id: str
    quantity: int = Field(1, ge=1)


class PurchasePublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    purchase_id: str = Field(serialization_alias="id")
    patient_id: str
    medicine_id: str
    quantity: int
    total_price: Decimal
    prescription_verified: bool
    purchase_date: datetime | None = None

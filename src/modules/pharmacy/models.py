"""Pharmacy ORM models (medicines, purchases)."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, CheckConstraint, DateTime, Integer, Numeric, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.core.database import Base
from src.modules.conditions.models import Condition
from src.shared.models import TimestampMixin
from src.shared.ulid import ulid_primary_key, ulid_reference

if TYPE_CHECKING:  # pragma: no cover
    from src.modules.users.models import User


class Medicine(Base, TimestampMixin):
    __tablename__ = "medicines"
    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_medicines_price_positive"),
        CheckConstraint("stock_quantity >= 0", name="ck_medicines_stock_positive"),
    )

    medicine_id: Mapped[str] = ulid_primary_key()
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    stock_quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    requires_prescription: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    condition_id: Mapped[str | None] = ulid_reference("conditions.condition_id", ondelete="SET NULL", nullable=True, index=True)

    # Purchases are sales history; the database refuses to drop a medicine that has any.
    condition: Mapped[Condition | None] = relationship()
    purchases: Mapped[list[MedicinePurchase]] = relationship(back_populates="medicine", passive_deletes="all")


class MedicinePurchase(Base):
    __tablename__ = "medicine_purchases"
    __table_args__ = (CheckConstraint("quantity > 0", name="ck_medicine_purchases_quantity_positive"),)

    purchase_id: Mapped[str] = ulid_primary_key()
    patient_id: Mapped[str] = ulid_reference("users.user_id")
    medicine_id: Mapped[str] = ulid_reference("medicines.medicine_id", ondelete="RESTRICT")
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    total_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    prescription_verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    purchase_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    medicine: Mapped[Medicine] = relationship(back_populates="purchases")
    patient: Mapped[User] = relationship()

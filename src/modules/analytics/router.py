"""Hospital-wide analytics for administrators."""

from decimal import Decimal

from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.database import get_db
from src.core.deps import require_hospital_admin
from src.modules.analytics.schemas import AnalyticsSummary
from src.modules.appointments.models import Appointment
from src.modules.pharmacy.models import Medicine, MedicinePurchase
from src.modules.users.models import User

router = APIRouter(prefix="/api/v1/admin/analytics", tags=["admin-analytics"])


async def build_summary(db: AsyncSession) -> AnalyticsSummary:
    total_users = (await db.execute(select(func.count(User.user_id)))).scalar_one()
    total_appointments = (await db.execute(select(func.count(Appointment.appointment_id)))).scalar_one()
    total_medicines = (await db.execute(select(func.count(Medicine.medicine_id)))).scalar_one()
    revenue = (
        await db.execute(select(func.coalesce(func.sum(MedicinePurchase.total_price), 0)))
    ).scalar_one()
    return AnalyticsSummary(
        total_users=total_users,
        total_appointments=total_appointments,
        total_medicines=total_medicines,
        total_revenue=Decimal(str(revenue)).quantize(Decimal("0.01")),
    )


@router.get("", response_model=AnalyticsSummary)
async def analytics_summary(
    _: User = Depends(require_hospital_admin),
    db: AsyncSession = Depends(get_db),
) -> AnalyticsSummary:
    return await build_summary(db)

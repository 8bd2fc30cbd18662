"""Analytics schemas."""

from decimal import Decimal

from pydantic import BaseModel


class AnalyticsSummary(BaseModel):
    total_users: int
    total_appointments: int
    total_medicines: int
    total_revenue: Decimal

"""Schedule schemas."""

from datetime import date

from pydantic import BaseModel, Field

from src.shared.enums import Weekday


class CalendarDay(BaseModel):
    day: date = Field(serialization_alias="date")
    weekday: Weekday
    selectable: bool

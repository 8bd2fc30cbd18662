"""Medicine reminder schemas."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class ReminderCreate(BaseModel):
    medicine_id: str = Field(..., min_length=1)
    dosage: str = Field(..., min_length=1, max_length=100)
    frequency: str = Field(..., min_length=1, max_length=100)
    start_date: date
    end_date: date | None = None
    reminder_times: list[str] = Field(..., min_length=1)

    @field_validator("dosage", "frequency")
    @classmethod
    def strip_text(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("must not be blank")
        return cleaned

    @field_validator("reminder_times")
    @classmethod
    def validate_times(cls, values: list[str]) -> list[str]:
        normalized: list[str] = []
        for value in values:
            try:
                parsed = datetime.strptime(value.strip(), "%H:%M")
            except ValueError as exc:
                raise ValueError(f"reminder time {value!r} must be HH:MM") from exc
            normalized.append(parsed.strftime("%H:%M"))
        return normalized

    @model_validator(mode="after")
    def validate_range(self) -> "ReminderCreate":
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class ReminderPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    reminder_id: str = Field(serialization_alias="id")
    medicine_id: str
    medicine_name: str | None = None
    prescribed_by: str | None = None
    dosage: str
    frequency: str
    start_date: date
    end_date: date | None = None
    reminder_times: list[str]
    is_active: bool

"""Condition and patient record schemas."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field


class ConditionPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    condition_id: str = Field(serialization_alias="id")
    name: str
    description: str | None = None


class ConditionCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    description: str | None = None


class PatientSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: str = Field(serialization_alias="id")
    full_name: str


class PatientRecordCreate(BaseModel):
    patient_id: str = Field(..., min_length=1)
    condition_id: str = Field(..., min_length=1)
    diagnosed_date: date
    notes: str | None = None


class PatientRecordPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    record_id: str = Field(serialization_alias="id")
    patient_id: str
    patient_name: str | None = None
    condition_id: str
    condition_name: str | None = None
    diagnosed_by: str | None = None
    diagnosed_date: date
    notes: str | None = None

"""Provider directory schemas."""

from pydantic import BaseModel, ConfigDict

from src.shared.enums import AvailabilityCategory


class ProviderOption(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    display_name: str
    availability: AvailabilityCategory = AvailabilityCategory.ALL


class AvailabilityUpdate(BaseModel):
    availability: AvailabilityCategory

"""Doctor availability ORM model."""

from sqlalchemy import Enum
from sqlalchemy.orm import Mapped, mapped_column

from src.core.database import Base
from src.shared.enums import AvailabilityCategory, enum_values
from src.shared.models import TimestampMixin
from src.shared.ulid import ulid_reference


class DoctorAvailability(Base, TimestampMixin):
    """Weekly availability pattern of a doctor; a missing row means ``all``."""

    __tablename__ = "doctor_availability"

    doctor_id: Mapped[str] = ulid_reference("users.user_id", primary_key=True)
    availability_type: Mapped[AvailabilityCategory] = mapped_column(
        Enum(
            AvailabilityCategory,
            values_callable=enum_values,
            validate_strings=True,
            name="availabilitycategory",
        ),
        nullable=False,
        default=AvailabilityCategory.ALL,
    )

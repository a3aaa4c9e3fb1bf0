"""Location model - represents a physical or virtual venue."""

from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, IntIdMixin, SoftDeleteMixin, TimestampMixin

if TYPE_CHECKING:
    from app.models.business_hour import BusinessHour
    from app.models.holiday import Holiday

DEFAULT_LOCATION_TIMEZONE = "Europe/Budapest"


class Location(Base, IntIdMixin, TimestampMixin, SoftDeleteMixin):
    """A venue with its own canonical time zone."""

    __tablename__ = "locations"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    base_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    website: Mapped[str | None] = mapped_column(String(255), nullable=True)
    timezone: Mapped[str] = mapped_column(
        String(64), nullable=False, default=DEFAULT_LOCATION_TIMEZONE
    )  # IANA name, e.g. "Europe/Budapest"
    industry_id: Mapped[int] = mapped_column(Integer, nullable=False, default=0)  # 0 = not specified
    is_event_location: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    company_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    company_address: Mapped[str | None] = mapped_column(Text, nullable=True)
    company_phone: Mapped[str | None] = mapped_column(String(50), nullable=True)

    # Relationships
    business_hours: Mapped[list["BusinessHour"]] = relationship(
        "BusinessHour", back_populates="location", cascade="all, delete-orphan"
    )
    holidays: Mapped[list["Holiday"]] = relationship(
        "Holiday", back_populates="location", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<Location(id={self.id}, name='{self.name}', timezone='{self.timezone}')>"

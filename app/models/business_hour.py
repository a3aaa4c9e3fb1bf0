"""BusinessHour model - one weekly opening entry per location and weekday."""

from typing import TYPE_CHECKING

from sqlalchemy import Boolean, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, IntIdMixin, TimestampMixin

if TYPE_CHECKING:
    from app.models.location import Location


class BusinessHour(Base, IntIdMixin, TimestampMixin):
    """Opening hours for a weekday (1=Monday, 7=Sunday)."""

    __tablename__ = "business_hours"
    __table_args__ = (
        UniqueConstraint("location_id", "day_of_week", name="uq_business_hours_location_day"),
    )

    location_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("locations.id", ondelete="CASCADE"), nullable=False, index=True
    )
    day_of_week: Mapped[int] = mapped_column(Integer, nullable=False)
    open_time: Mapped[str | None] = mapped_column(String(8), nullable=True)  # HH:MM:SS
    close_time: Mapped[str | None] = mapped_column(String(8), nullable=True)
    is_closed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    location: Mapped["Location"] = relationship("Location", back_populates="business_hours")

    @property
    def open_label(self) -> str | None:
        """Opening time as HH:MM, None when closed."""
        if self.is_closed or self.open_time is None:
            return None
        return self.open_time[:5]

    @property
    def close_label(self) -> str | None:
        """Closing time as HH:MM, None when closed."""
        if self.is_closed or self.close_time is None:
            return None
        return self.close_time[:5]

    def __repr__(self) -> str:
        """String representation."""
        if self.is_closed:
            return f"<BusinessHour(location_id={self.location_id}, day={self.day_of_week}, closed)>"
        return (
            f"<BusinessHour(location_id={self.location_id}, day={self.day_of_week}, "
            f"{self.open_time}-{self.close_time})>"
        )

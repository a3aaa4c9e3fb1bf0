"""Holiday model - a single closed day for a location."""

from datetime import date
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Date, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, IntIdMixin, TimestampMixin

if TYPE_CHECKING:
    from app.models.location import Location


class Holiday(Base, IntIdMixin, TimestampMixin):
    """Closed day; recurring holidays repeat every year on the same month/day."""

    __tablename__ = "location_holidays"
    __table_args__ = (
        UniqueConstraint("location_id", "holiday_date", name="uq_location_holiday_date"),
    )

    location_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("locations.id", ondelete="CASCADE"), nullable=False, index=True
    )
    holiday_date: Mapped[date] = mapped_column(Date, nullable=False)
    note: Mapped[str] = mapped_column(String(255), nullable=False)
    is_recurring: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    location: Mapped["Location"] = relationship("Location", back_populates="holidays")

    def matches(self, day: date) -> bool:
        """Whether this holiday closes the given calendar day."""
        if self.holiday_date == day:
            return True
        return self.is_recurring and (self.holiday_date.month, self.holiday_date.day) == (
            day.month,
            day.day,
        )

    def __repr__(self) -> str:
        """String representation."""
        return f"<Holiday(id={self.id}, date={self.holiday_date}, recurring={self.is_recurring})>"

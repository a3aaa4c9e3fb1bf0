"""Service model - represents what can be booked."""

from typing import TYPE_CHECKING

from sqlalchemy import Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, IntIdMixin, SoftDeleteMixin, TimestampMixin

if TYPE_CHECKING:
    from app.models.appointment import Appointment


class Service(Base, IntIdMixin, TimestampMixin, SoftDeleteMixin):
    """A bookable service (e.g., 'Consultation')."""

    __tablename__ = "services"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    duration_minutes: Mapped[int] = mapped_column(Integer, nullable=False, default=30)
    price: Mapped[float | None] = mapped_column(Float, nullable=True)
    background_color: Mapped[str] = mapped_column(String(7), nullable=False, default="#2c89d9")
    text_color: Mapped[str] = mapped_column(String(7), nullable=False, default="#ffffff")

    appointments: Mapped[list["Appointment"]] = relationship(
        "Appointment", back_populates="service"
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<Service(id={self.id}, name='{self.name}', duration={self.duration_minutes})>"

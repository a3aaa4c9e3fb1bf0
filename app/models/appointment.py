"""Appointment model - represents a scheduled booking."""

from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, CheckConstraint, Float, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, IntIdMixin, SoftDeleteMixin, TimestampMixin, UTCDateTime

if TYPE_CHECKING:
    from app.models.customer import Customer
    from app.models.employee import Employee
    from app.models.service import Service


class AppointmentStatus(str, Enum):
    """Appointment status enum."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELED = "canceled"


class PaymentStatus(str, Enum):
    """Payment status enum."""

    PENDING = "pending"
    AUTHORIZED = "authorized"
    PAID = "paid"
    REFUNDED = "refunded"
    FAILED = "failed"
    CANCELED = "canceled"


class Appointment(Base, IntIdMixin, TimestampMixin, SoftDeleteMixin):
    """A booking of a service with a provider."""

    __tablename__ = "appointments"
    __table_args__ = (
        CheckConstraint(
            "scheduled_start < scheduled_end", name="check_appointment_start_before_end"
        ),
        Index("ix_appointment_employee_start", "employee_id", "scheduled_start"),
    )

    service_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("services.id", ondelete="SET NULL"), nullable=True
    )
    employee_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("employees.id", ondelete="SET NULL"), nullable=True
    )
    customer_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("customers.id", ondelete="SET NULL"), nullable=True
    )

    scheduled_start: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    scheduled_end: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=AppointmentStatus.PENDING.value,
    )
    payment_status: Mapped[str | None] = mapped_column(String(20), nullable=True)
    total_amount: Mapped[float | None] = mapped_column(Float, nullable=True)
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="HUF")

    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    internal_note: Mapped[str | None] = mapped_column(Text, nullable=True)
    should_notify: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_recurring: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Contact snapshot taken at booking time
    customer_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    customer_phone: Mapped[str | None] = mapped_column(String(50), nullable=True)

    # Relationships
    service: Mapped["Service | None"] = relationship(
        "Service", back_populates="appointments", lazy="selectin"
    )
    employee: Mapped["Employee | None"] = relationship(
        "Employee", back_populates="appointments", lazy="selectin"
    )
    customer: Mapped["Customer | None"] = relationship(
        "Customer", back_populates="appointments", lazy="selectin"
    )

    @property
    def employee_name(self) -> str | None:
        return self.employee.name if self.employee else None

    @property
    def service_name(self) -> str | None:
        return self.service.name if self.service else None

    @property
    def customer_name(self) -> str | None:
        return self.customer.full_name if self.customer else None

    def __repr__(self) -> str:
        """String representation."""
        return f"<Appointment(id={self.id}, status='{self.status}', scheduled_start={self.scheduled_start})>"

"""Customer model - represents people who book appointments."""

from typing import TYPE_CHECKING

from sqlalchemy import Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, IntIdMixin, SoftDeleteMixin, TimestampMixin

if TYPE_CHECKING:
    from app.models.appointment import Appointment


class Customer(Base, IntIdMixin, TimestampMixin, SoftDeleteMixin):
    """A customer account; appointments also keep a contact snapshot."""

    __tablename__ = "customers"
    __table_args__ = (Index("ix_customer_email", "email"),)

    name: Mapped[str] = mapped_column(String(255), nullable=False)  # account / display name
    first_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)

    appointments: Mapped[list["Appointment"]] = relationship(
        "Appointment", back_populates="customer"
    )

    @property
    def full_name(self) -> str:
        """First and last name, falling back to the account name."""
        parts = [part for part in (self.first_name, self.last_name) if part]
        return " ".join(parts) if parts else self.name

    def __repr__(self) -> str:
        """String representation."""
        return f"<Customer(id={self.id}, name='{self.name}')>"

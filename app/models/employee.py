"""Employee model - staff who provide services."""

from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Float, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, IntIdMixin, SoftDeleteMixin, TimestampMixin

if TYPE_CHECKING:
    from app.models.appointment import Appointment
    from app.models.employee_category import EmployeeCategory
    from app.models.employee_schedule import EmployeeScheduleDay
    from app.models.location import Location
    from app.models.service import Service


class EmployeeVisibility(str, Enum):
    """Employee visibility enum."""

    PUBLIC = "public"
    PRIVATE = "private"
    ARCHIVED = "archived"


class Employee(Base, IntIdMixin, TimestampMixin, SoftDeleteMixin):
    """A provider; assigned to locations and services, with a weekly schedule."""

    __tablename__ = "employees"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    specialization: Mapped[str | None] = mapped_column(String(255), nullable=True)
    available_online: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    visibility: Mapped[str] = mapped_column(
        String(20), nullable=False, default=EmployeeVisibility.PUBLIC.value
    )

    # Relationships (selectin: collections are replaced wholesale on update)
    categories: Mapped[list["EmployeeCategory"]] = relationship(
        "EmployeeCategory",
        secondary="employee_category_relationships",
        back_populates="employees",
        lazy="selectin",
        order_by="EmployeeCategory.name",
    )
    locations: Mapped[list["Location"]] = relationship(
        "Location",
        secondary="employee_locations",
        lazy="selectin",
        order_by="Location.id",
    )
    service_assignments: Mapped[list["EmployeeServiceAssignment"]] = relationship(
        "EmployeeServiceAssignment",
        back_populates="employee",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="EmployeeServiceAssignment.order",
    )
    schedule_days: Mapped[list["EmployeeScheduleDay"]] = relationship(
        "EmployeeScheduleDay",
        back_populates="employee",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="EmployeeScheduleDay.day_of_week",
    )
    appointments: Mapped[list["Appointment"]] = relationship(
        "Appointment", back_populates="employee"
    )

    @property
    def location_ids(self) -> list[int]:
        """Identifiers of assigned locations."""
        return [location.id for location in self.locations]

    def works_at(self, location_id: int) -> bool:
        """Whether the employee is assigned to the location."""
        return location_id in self.location_ids

    def __repr__(self) -> str:
        """String representation."""
        return f"<Employee(id={self.id}, name='{self.name}', visibility='{self.visibility}')>"


class EmployeeServiceAssignment(Base):
    """A service an employee performs, with display order and optional price override."""

    __tablename__ = "employee_services"

    employee_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("employees.id", ondelete="CASCADE"), primary_key=True
    )
    service_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("services.id", ondelete="CASCADE"), primary_key=True
    )
    order: Mapped[int] = mapped_column("sort_order", Integer, nullable=False, default=0)
    price: Mapped[float | None] = mapped_column(Float, nullable=True)  # null = service price

    employee: Mapped["Employee"] = relationship("Employee", back_populates="service_assignments")
    service: Mapped["Service"] = relationship("Service", lazy="selectin")

    def __repr__(self) -> str:
        """String representation."""
        return f"<EmployeeServiceAssignment(employee_id={self.employee_id}, service_id={self.service_id})>"

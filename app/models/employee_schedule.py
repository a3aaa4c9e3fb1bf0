"""Employee weekly schedule - working hours per weekday plus breaks."""

from typing import TYPE_CHECKING

from sqlalchemy import Boolean, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, IntIdMixin

if TYPE_CHECKING:
    from app.models.employee import Employee


class EmployeeScheduleDay(Base, IntIdMixin):
    """Working hours for one weekday (1=Monday, 7=Sunday)."""

    __tablename__ = "employee_schedule_days"
    __table_args__ = (
        UniqueConstraint("employee_id", "day_of_week", name="uq_employee_schedule_day"),
    )

    employee_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("employees.id", ondelete="CASCADE"), nullable=False, index=True
    )
    day_of_week: Mapped[int] = mapped_column(Integer, nullable=False)
    start_time: Mapped[str | None] = mapped_column(String(5), nullable=True)  # HH:MM
    end_time: Mapped[str | None] = mapped_column(String(5), nullable=True)
    is_off: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    employee: Mapped["Employee"] = relationship("Employee", back_populates="schedule_days")
    breaks: Mapped[list["EmployeeBreak"]] = relationship(
        "EmployeeBreak",
        back_populates="schedule_day",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="EmployeeBreak.start_time",
    )

    def __repr__(self) -> str:
        """String representation."""
        if self.is_off:
            return f"<EmployeeScheduleDay(employee_id={self.employee_id}, day={self.day_of_week}, off)>"
        return (
            f"<EmployeeScheduleDay(employee_id={self.employee_id}, day={self.day_of_week}, "
            f"{self.start_time}-{self.end_time}, breaks={len(self.breaks)})>"
        )


class EmployeeBreak(Base, IntIdMixin):
    """A break inside a working day."""

    __tablename__ = "employee_breaks"

    schedule_day_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("employee_schedule_days.id", ondelete="CASCADE"), nullable=False
    )
    start_time: Mapped[str] = mapped_column(String(5), nullable=False)
    end_time: Mapped[str] = mapped_column(String(5), nullable=False)

    schedule_day: Mapped["EmployeeScheduleDay"] = relationship(
        "EmployeeScheduleDay", back_populates="breaks"
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<EmployeeBreak({self.start_time}-{self.end_time})>"

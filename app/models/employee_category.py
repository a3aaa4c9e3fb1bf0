"""EmployeeCategory model - reusable labels for grouping employees."""

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, IntIdMixin, TimestampMixin

if TYPE_CHECKING:
    from app.models.employee import Employee


class EmployeeCategory(Base, IntIdMixin, TimestampMixin):
    """A category such as 'General' or 'Orthodontist'; the slug is unique."""

    __tablename__ = "employee_categories"

    name: Mapped[str] = mapped_column(String(150), nullable=False)
    slug: Mapped[str] = mapped_column(String(160), nullable=False, unique=True)

    employees: Mapped[list["Employee"]] = relationship(
        "Employee", secondary="employee_category_relationships", back_populates="categories"
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<EmployeeCategory(id={self.id}, slug='{self.slug}')>"

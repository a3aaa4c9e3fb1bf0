"""Association tables for many-to-many relationships."""

from datetime import datetime, timezone

from sqlalchemy import Column, ForeignKey, Integer, Table

from app.models.base import Base, UTCDateTime

# Association table: which locations each employee works at
employee_locations = Table(
    "employee_locations",
    Base.metadata,
    Column(
        "employee_id",
        Integer,
        ForeignKey("employees.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "location_id",
        Integer,
        ForeignKey("locations.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "created_at",
        UTCDateTime,
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    ),
)

# Association table: categories assigned to each employee
employee_category_relationships = Table(
    "employee_category_relationships",
    Base.metadata,
    Column(
        "employee_id",
        Integer,
        ForeignKey("employees.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "category_id",
        Integer,
        ForeignKey("employee_categories.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "created_at",
        UTCDateTime,
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    ),
)

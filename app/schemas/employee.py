"""Pydantic schemas for Employee."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.location import LocationResponse
from app.schemas.service import ServiceSummary


class BreakInput(BaseModel):
    start_time: str | None = None
    end_time: str | None = None


class ScheduleDayInput(BaseModel):
    """One weekday of the working schedule; no times and no breaks means day off."""

    start_time: str | None = Field(None, description="Work start (HH:MM)")
    end_time: str | None = Field(None, description="Work end (HH:MM)")
    breaks: list[BreakInput] = Field(default_factory=list)


class ServiceAssignmentInput(BaseModel):
    service_id: int
    order: int = 0
    price: float | str | None = Field(None, description="Price override (null = service price)")


# Payload schema (validated by the employee service)
class EmployeePayload(BaseModel):
    """Submitted employee data; relation fields left as None are not synced."""

    name: str = Field("", description="Display name")
    email: str | None = None
    phone: str | None = None
    specialization: str | None = None
    available_online: bool = False
    visibility: str = Field("public", description="public, private or archived")
    category_ids: list[int] | None = Field(None, description="Existing categories")
    new_categories: str | list[str] | None = Field(
        None, description="Names to create or reuse; commas, semicolons or new lines separate them"
    )
    location_ids: list[int] | None = Field(None, description="Assigned locations")
    services: list[ServiceAssignmentInput] | None = Field(None, description="Assigned services")
    schedule: dict[int, ScheduleDayInput] | None = Field(
        None, description="Weekly schedule keyed by day of week (1=Monday)"
    )


# Response schemas
class EmployeeCategoryResponse(BaseModel):
    id: int
    name: str
    slug: str

    model_config = ConfigDict(from_attributes=True)


class BreakResponse(BaseModel):
    start_time: str
    end_time: str

    model_config = ConfigDict(from_attributes=True)


class ScheduleDayResponse(BaseModel):
    day_of_week: int
    start_time: str | None
    end_time: str | None
    is_off: bool
    breaks: list[BreakResponse] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


class ServiceAssignmentResponse(BaseModel):
    service_id: int
    order: int
    price: float | None
    service: ServiceSummary

    model_config = ConfigDict(from_attributes=True)


class EmployeeResponse(BaseModel):
    """Schema for employee responses."""

    id: int
    name: str
    email: str | None
    phone: str | None
    specialization: str | None
    available_online: bool
    visibility: str
    is_deleted: bool
    categories: list[EmployeeCategoryResponse] = Field(default_factory=list)
    location_ids: list[int]
    locations: list[LocationResponse] = Field(default_factory=list)
    service_assignments: list[ServiceAssignmentResponse] = Field(default_factory=list)
    schedule_days: list[ScheduleDayResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class EmployeeSummary(BaseModel):
    """Simplified employee for embedding in calendar responses."""

    id: int
    name: str
    visibility: str

    model_config = ConfigDict(from_attributes=True)

"""Pydantic schemas for Appointment."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


# Payload schema for create and update
class AppointmentPayload(BaseModel):
    """Submitted appointment data.

    Date and times are wall-clock values in the site time zone. On update, fields
    that are not sent keep the stored value; the date and times are always required.
    """

    provider_id: int | None = Field(None, description="Employee performing the service")
    service_id: int | None = Field(None, description="Service ID")
    customer_id: int | None = Field(None, description="Customer ID")
    appointment_date: str = Field("", description="Date (YYYY-MM-DD)")
    appointment_start: str = Field("", description="Start time (HH:MM)")
    appointment_end: str = Field("", description="End time (HH:MM)")
    status: str | None = Field(None, description="pending, confirmed, completed or canceled")
    payment_status: str | None = None
    notes: str | None = None
    internal_note: str | None = None
    send_notifications: bool | None = None
    is_recurring: bool | None = None
    customer_email: str | None = None
    customer_phone: str | None = None
    total_amount: float | None = None
    currency: str | None = None


class AppointmentFilters(BaseModel):
    """Filters for paginated appointment listing."""

    page: int = Field(1, ge=1)
    per_page: int = Field(20, ge=1, le=200)
    order_by: str = "scheduled_start"
    order: str = "desc"
    include_deleted: bool = False
    only_deleted: bool = False
    appointment_id: int | None = None
    appointment_from: datetime | None = None
    appointment_to: datetime | None = None
    created_from: datetime | None = None
    created_to: datetime | None = None
    customer_search: str | None = None
    employee_id: int | None = None
    service_id: int | None = None
    status: str | None = None


# Response schema
class AppointmentResponse(BaseModel):
    """Schema for appointment responses."""

    id: int
    service_id: int | None
    service_name: str | None
    employee_id: int | None
    employee_name: str | None
    customer_id: int | None
    customer_name: str | None
    customer_email: str | None
    customer_phone: str | None
    scheduled_start: datetime
    scheduled_end: datetime
    status: str
    payment_status: str | None
    total_amount: float | None
    currency: str
    notes: str | None
    internal_note: str | None
    should_notify: bool
    is_recurring: bool
    is_deleted: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AppointmentPage(BaseModel):
    appointments: list[AppointmentResponse]
    total: int
    per_page: int
    page: int

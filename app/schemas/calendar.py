"""Pydantic schemas for the daily calendar."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict

from app.schemas.business_hours import HolidayResponse
from app.schemas.employee import EmployeeSummary
from app.schemas.location import LocationResponse


class ViewWindow(BaseModel):
    """Visible time range of the calendar grid (HH:MM:SS)."""

    slot_min_time: str
    slot_max_time: str
    scroll_time: str


class CalendarAppointment(BaseModel):
    """Appointment as rendered on the calendar grid."""

    id: int
    employee_id: int | None
    employee_name: str | None
    service_id: int | None
    service_name: str | None
    customer_id: int | None
    customer_name: str | None
    scheduled_start: datetime
    scheduled_end: datetime
    status: str
    payment_status: str | None
    is_recurring: bool

    model_config = ConfigDict(from_attributes=True)


class DailyScheduleResponse(BaseModel):
    """Schedule of one location for one day."""

    location: LocationResponse
    date: date
    timezone: str
    timezone_fell_back: bool
    employees: list[EmployeeSummary]
    slots: list[str]
    slot_length: int
    appointments: list[CalendarAppointment]
    window_appointments: list[CalendarAppointment]
    is_closed: bool
    open: datetime
    close: datetime
    used_default_hours: bool
    holiday: HolidayResponse | None
    view_window: ViewWindow

    model_config = ConfigDict(from_attributes=True)

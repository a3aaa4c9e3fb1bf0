"""Pydantic schemas for Smooth Booking API."""

from app.schemas.appointment import (
    AppointmentFilters,
    AppointmentPage,
    AppointmentPayload,
    AppointmentResponse,
)
from app.schemas.business_hours import (
    BusinessHoursPayload,
    DayHours,
    DayHoursInput,
    DayOption,
    HolidayPayload,
    HolidayResponse,
)
from app.schemas.calendar import CalendarAppointment, DailyScheduleResponse, ViewWindow
from app.schemas.customer import CustomerPayload, CustomerResponse
from app.schemas.employee import (
    EmployeeCategoryResponse,
    EmployeePayload,
    EmployeeResponse,
    EmployeeSummary,
    ScheduleDayInput,
    ServiceAssignmentInput,
)
from app.schemas.location import IndustryGroup, LocationPayload, LocationResponse
from app.schemas.service import ServicePayload, ServiceResponse, ServiceSummary

__all__ = [
    # Location
    "LocationPayload",
    "LocationResponse",
    "IndustryGroup",
    # Business hours
    "BusinessHoursPayload",
    "DayHoursInput",
    "DayHours",
    "DayOption",
    # Holidays
    "HolidayPayload",
    "HolidayResponse",
    # Service
    "ServicePayload",
    "ServiceResponse",
    "ServiceSummary",
    # Customer
    "CustomerPayload",
    "CustomerResponse",
    # Employee
    "EmployeePayload",
    "EmployeeCategoryResponse",
    "EmployeeResponse",
    "EmployeeSummary",
    "ScheduleDayInput",
    "ServiceAssignmentInput",
    # Appointment
    "AppointmentPayload",
    "AppointmentFilters",
    "AppointmentResponse",
    "AppointmentPage",
    # Calendar
    "DailyScheduleResponse",
    "CalendarAppointment",
    "ViewWindow",
]

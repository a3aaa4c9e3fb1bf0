"""SQLAlchemy models for Smooth Booking."""

from app.models.appointment import Appointment, AppointmentStatus, PaymentStatus
from app.models.associations import employee_category_relationships, employee_locations
from app.models.base import Base, IntIdMixin, SoftDeleteMixin, TimestampMixin, UTCDateTime
from app.models.business_hour import BusinessHour
from app.models.customer import Customer
from app.models.employee import Employee, EmployeeServiceAssignment, EmployeeVisibility
from app.models.employee_category import EmployeeCategory
from app.models.employee_schedule import EmployeeBreak, EmployeeScheduleDay
from app.models.holiday import Holiday
from app.models.location import DEFAULT_LOCATION_TIMEZONE, Location
from app.models.service import Service

__all__ = [
    # Base
    "Base",
    "IntIdMixin",
    "SoftDeleteMixin",
    "TimestampMixin",
    "UTCDateTime",
    # Models
    "Location",
    "BusinessHour",
    "Holiday",
    "Employee",
    "EmployeeServiceAssignment",
    "EmployeeCategory",
    "EmployeeScheduleDay",
    "EmployeeBreak",
    "Service",
    "Customer",
    "Appointment",
    # Association Tables
    "employee_locations",
    "employee_category_relationships",
    # Enums
    "AppointmentStatus",
    "PaymentStatus",
    "EmployeeVisibility",
    # Constants
    "DEFAULT_LOCATION_TIMEZONE",
]

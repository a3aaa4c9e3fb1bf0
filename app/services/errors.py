"""Typed errors raised by the booking services.

Each error carries a stable ``code`` so callers (HTTP handlers, scripts) can map
it to a response without parsing messages:

- ``NotFoundError``: a referenced entity does not exist. Recoverable (404).
- ``ValidationError``: the submitted payload is invalid. Nothing was written.
- ``PersistenceError``: the database rejected a write. Logged, not retried.
"""


class BookingError(Exception):
    """Base error for the booking domain."""

    code = "booking_error"
    default_message = "The request could not be completed."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict[str, str]:
        return {"code": self.code, "detail": self.message}


# Not found


class NotFoundError(BookingError):
    code = "not_found"
    default_message = "The requested resource could not be found."


class LocationNotFound(NotFoundError):
    code = "location_not_found"
    default_message = "The requested location could not be found."


class EmployeeNotFound(NotFoundError):
    code = "employee_not_found"
    default_message = "The requested employee could not be found."


class ServiceNotFound(NotFoundError):
    code = "service_not_found"
    default_message = "The requested service could not be found."


class CustomerNotFound(NotFoundError):
    code = "customer_not_found"
    default_message = "The requested customer could not be found."


class AppointmentNotFound(NotFoundError):
    code = "appointment_not_found"
    default_message = "The requested appointment could not be found."


class HolidayNotFound(NotFoundError):
    code = "holiday_not_found"
    default_message = "The requested holiday could not be found."


# Validation


class ValidationError(BookingError):
    code = "validation_error"
    default_message = "The submitted data is invalid."


class MissingTime(ValidationError):
    code = "business_hours_missing_time"
    default_message = "Please select both opening and closing times for each open day."


class InvalidTime(ValidationError):
    code = "business_hours_invalid_time"
    default_message = "Please choose valid times in 15 minute steps."


class OrderViolation(ValidationError):
    code = "business_hours_order"
    default_message = "Closing time must be later than opening time."


class InvalidPeriod(ValidationError):
    code = "invalid_period"
    default_message = "The end time must be after the start time."


class InvalidAppointmentSchedule(ValidationError):
    code = "invalid_appointment_schedule"
    default_message = "The provided appointment schedule is invalid."


class InvalidEmail(ValidationError):
    code = "invalid_email"
    default_message = "The provided email address is invalid."


class InvalidSchedule(ValidationError):
    code = "invalid_schedule"
    default_message = "The working schedule is invalid."


class InvalidScheduleBreak(ValidationError):
    code = "invalid_schedule_break"
    default_message = "Breaks must fall within working hours and end after they start."


class InvalidProvider(ValidationError):
    code = "invalid_provider"
    default_message = "A provider must be selected."


class InvalidService(ValidationError):
    code = "invalid_service"
    default_message = "A service must be selected."


class InvalidCustomer(ValidationError):
    code = "invalid_customer"
    default_message = "The selected customer does not exist."


class MissingName(ValidationError):
    code = "missing_name"
    default_message = "A name is required."


class InvalidTimezone(ValidationError):
    code = "invalid_timezone"
    default_message = "Please select a valid time zone."


class InvalidIndustry(ValidationError):
    code = "invalid_industry"
    default_message = "Please choose a valid industry option."


class InvalidPrice(ValidationError):
    code = "invalid_price"
    default_message = "Prices must be numeric."


class InvalidVisibility(ValidationError):
    code = "invalid_visibility"
    default_message = "Visibility must be public, private or archived."


class InvalidCategory(ValidationError):
    code = "invalid_category"
    default_message = "One of the selected categories does not exist."


class InvalidLocation(ValidationError):
    code = "invalid_location"
    default_message = "One of the selected locations does not exist."


class InvalidDate(ValidationError):
    code = "invalid_date"
    default_message = "Provide valid dates in the YYYY-MM-DD format."


class InvalidDateRange(ValidationError):
    code = "invalid_date_range"
    default_message = "The end date must be after or equal to the start date."


class RangeTooLong(ValidationError):
    code = "range_too_long"
    default_message = "Date ranges are limited to one year."


class NoteTooLong(ValidationError):
    code = "note_too_long"
    default_message = "Please enter a note shorter than 255 characters."


class StateConflict(ValidationError):
    code = "state_conflict"
    default_message = "The record is not in a state that allows this change."


# Persistence


class PersistenceError(BookingError):
    code = "persistence_error"
    default_message = "Unable to save changes. Please try again."

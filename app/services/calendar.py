"""Calendar service - builds the per-location daily schedule.

The schedule is a read-only view assembled on every request from the location,
its weekly business hours and holidays, the employees assigned to it and their
appointments. Bad per-location data degrades the result instead of failing it:

- an invalid location time zone falls back to the site default, then UTC;
- a malformed business-hours row falls back to a 08:00-18:00 window.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta, timezone
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from app.config import SchedulingConfig, get_settings
from app.models import Appointment, Employee, Location
from app.schemas.business_hours import HolidayResponse
from app.services import appointment as appointment_service
from app.services import business_hours as business_hours_service
from app.services import employee as employee_service
from app.services import holiday as holiday_service
from app.services import location as location_service
from app.services.cache import NULL_CACHE, Cache
from app.utils.timeutils import (
    day_bounds,
    local_datetime,
    parse_clock,
    resolve_timezone,
    slots_for_range,
    to_minutes,
)

logger = logging.getLogger(__name__)

DEFAULT_OPEN = time(8, 0)
DEFAULT_CLOSE = time(18, 0)
QUERY_PADDING = timedelta(days=7)
VIEW_PADDING_MINUTES = 120


@dataclass
class DailySchedule:
    """Aggregated calendar for one location on one day."""

    location: Location
    date: date
    timezone: str
    timezone_fell_back: bool
    employees: list[Employee]
    slots: list[str]
    slot_length: int
    appointments: list[Appointment]
    window_appointments: list[Appointment]
    is_closed: bool
    open: datetime
    close: datetime
    used_default_hours: bool = False
    holiday: HolidayResponse | None = None
    view_window: dict[str, str] = field(default_factory=dict)


def _clock_label(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}:00"


def build_view_window(opens_at: datetime | time, closes_at: datetime | time) -> dict[str, str]:
    """Visible calendar range: two hours either side of the opening hours, within the day."""
    open_minutes = to_minutes(opens_at)
    close_minutes = to_minutes(closes_at)
    return {
        "slot_min_time": _clock_label(max(0, open_minutes - VIEW_PADDING_MINUTES)),
        "slot_max_time": _clock_label(min(24 * 60, close_minutes + VIEW_PADDING_MINUTES)),
        "scroll_time": _clock_label(open_minutes),
    }


def get_slots_for_range(opens_at: datetime, closes_at: datetime, slot_length: int) -> list[str]:
    """Slot labels from opening (inclusive) to closing (exclusive)."""
    return slots_for_range(opens_at, closes_at, slot_length)


def resolve_day_hours(
    hours: dict[str, Any] | None, day: date, zone, location_id: int | None = None
) -> tuple[bool, datetime, datetime, bool]:
    """Opening window for a day as (is_closed, opens_at, closes_at, used_default_hours).

    Closed days and malformed rows use the default window so the grid can still render.
    """
    default = (local_datetime(day, DEFAULT_OPEN, zone), local_datetime(day, DEFAULT_CLOSE, zone))
    if not hours or hours.get("is_closed", True):
        return True, default[0], default[1], True

    opens = parse_clock(hours.get("open"))
    closes = parse_clock(hours.get("close"))
    if opens is None or closes is None or to_minutes(closes) <= to_minutes(opens):
        logger.warning(
            f"Malformed business hours for location #{location_id} on {day.isoformat()}: "
            f"{hours.get('open')!r}-{hours.get('close')!r}, using default window"
        )
        return False, default[0], default[1], True

    return False, local_datetime(day, opens, zone), local_datetime(day, closes, zone), False


def appointments_on_day(
    appointments: list[Appointment], day: date, zone
) -> list[Appointment]:
    """Appointments whose start, in the given zone, falls on the day."""
    day_start, day_end = day_bounds(day, zone)
    return [
        appointment
        for appointment in appointments
        if day_start <= appointment.scheduled_start.astimezone(zone) <= day_end
    ]


async def get_daily_schedule(
    db: AsyncSession,
    location_id: int,
    day: date,
    config: SchedulingConfig | None = None,
    cache: Cache = NULL_CACHE,
) -> DailySchedule:
    """Build the schedule of a location for a calendar day.

    Raises LocationNotFound when the location does not exist.
    """
    config = config or get_settings().scheduling_config()
    location = await location_service.get_location(db, location_id)

    resolution = resolve_timezone(location.timezone, config.default_timezone)
    zone = resolution.zone

    employees = await employee_service.list_employees(db, location_id=location.id)

    template = await business_hours_service.get_location_hours(db, location.id, cache)
    is_closed, opens_at, closes_at, used_default = resolve_day_hours(
        template.get(day.isoweekday()), day, zone, location.id
    )

    holiday = await holiday_service.find_holiday(db, location.id, day, cache)
    if holiday is not None:
        is_closed = True

    slot_length = config.slot_length
    slots = get_slots_for_range(opens_at, closes_at, slot_length)

    window_appointments: list[Appointment] = []
    if employees:
        day_start, day_end = day_bounds(day, zone)
        window_appointments = await appointment_service.get_appointments_for_employees(
            db,
            [employee.id for employee in employees],
            (day_start - QUERY_PADDING).astimezone(timezone.utc),
            (day_end + QUERY_PADDING).astimezone(timezone.utc),
        )

    return DailySchedule(
        location=location,
        date=day,
        timezone=resolution.name,
        timezone_fell_back=resolution.fell_back,
        employees=employees,
        slots=slots,
        slot_length=slot_length,
        appointments=appointments_on_day(window_appointments, day, zone),
        window_appointments=window_appointments,
        is_closed=is_closed,
        open=opens_at,
        close=closes_at,
        used_default_hours=used_default,
        holiday=holiday,
        view_window=build_view_window(opens_at, closes_at),
    )

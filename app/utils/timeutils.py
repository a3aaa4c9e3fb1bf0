"""Time zone resolution and wall-clock helpers."""

import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError, available_timezones

logger = logging.getLogger(__name__)

_HHMM = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)(?::([0-5]\d))?$")


@dataclass(frozen=True)
class TimezoneResolution:
    """Resolved zone plus whether a fallback was used."""

    zone: ZoneInfo | timezone
    name: str
    fell_back: bool


def load_zone(name: str | None) -> ZoneInfo | None:
    """Load an IANA zone, None when the name is empty or unknown."""
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return None


def is_valid_timezone(name: str | None) -> bool:
    return load_zone(name) is not None


def timezone_options() -> list[str]:
    """Sorted IANA zone names."""
    return sorted(available_timezones())


def resolve_timezone(name: str | None, default: str | None) -> TimezoneResolution:
    """Resolve a zone name: requested zone, then site default, then UTC."""
    zone = load_zone(name)
    if zone is not None:
        return TimezoneResolution(zone=zone, name=name, fell_back=False)

    logger.warning(f"Invalid time zone '{name}', falling back to site default '{default}'")
    zone = load_zone(default)
    if zone is not None:
        return TimezoneResolution(zone=zone, name=default, fell_back=True)

    logger.warning(f"Invalid site default time zone '{default}', falling back to UTC")
    return TimezoneResolution(zone=timezone.utc, name="UTC", fell_back=True)


def parse_clock(value: str | None) -> time | None:
    """Parse HH:MM or HH:MM:SS; None when malformed."""
    if value is None:
        return None
    match = _HHMM.match(value.strip())
    if not match:
        return None
    hour, minute, second = match.groups()
    return time(int(hour), int(minute), int(second or 0))


def to_minutes(value: time | datetime) -> int:
    return value.hour * 60 + value.minute


def quarter_hour_options() -> list[str]:
    """HH:MM values from 00:00 to 23:45 in 15 minute steps."""
    return [f"{hour:02d}:{minute:02d}" for hour in range(24) for minute in range(0, 60, 15)]


def local_datetime(day: date, clock: time, zone) -> datetime:
    """Wall-clock time on a date in a zone, as an aware datetime."""
    return datetime.combine(day, clock, tzinfo=zone)


def day_bounds(day: date, zone) -> tuple[datetime, datetime]:
    """[00:00:00, 23:59:59] of a calendar day in a zone."""
    return (
        datetime.combine(day, time.min, tzinfo=zone),
        datetime.combine(day, time(23, 59, 59), tzinfo=zone),
    )


def iter_slots(opens_at: datetime, closes_at: datetime, minutes: int) -> Iterator[datetime]:
    """Slot start instants from opening (inclusive) to closing (exclusive).

    Steps run on elapsed time, so a DST change skips or repeats wall-clock labels.
    """
    zone = opens_at.tzinfo
    start = opens_at.astimezone(timezone.utc)
    end = closes_at.astimezone(timezone.utc)
    if minutes <= 0 or end <= start:
        return
    step = timedelta(minutes=minutes)
    current = start
    while current < end:
        yield current.astimezone(zone)
        current += step


def slots_for_range(opens_at: datetime, closes_at: datetime, minutes: int) -> list[str]:
    """Slot labels (HH:MM) between opening and closing."""
    return [slot.strftime("%H:%M") for slot in iter_slots(opens_at, closes_at, minutes)]

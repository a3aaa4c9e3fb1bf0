"""Holiday service - closed days per location."""

import logging
from datetime import date, timedelta
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import Holiday
from app.schemas.business_hours import HolidayPayload, HolidayResponse
from app.services import location as location_service
from app.services.cache import NULL_CACHE, Cache
from app.services.errors import (
    HolidayNotFound,
    InvalidDate,
    InvalidDateRange,
    NoteTooLong,
    RangeTooLong,
)
from app.services.repository import flush

logger = logging.getLogger(__name__)

MAX_RANGE_DAYS = 366
MAX_NOTE_LENGTH = 255
DEFAULT_NOTE = "We are not working on this day"


def _cache_key(location_id: int) -> str:
    return Cache.key("holidays", location_id)


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise InvalidDate() from e


def expand_range(start: date, end: date) -> list[date]:
    """Every day from start to end inclusive, limited to one year."""
    days = (end - start).days + 1
    if days > MAX_RANGE_DAYS:
        raise RangeTooLong("Holiday ranges are limited to one year.")
    return [start + timedelta(days=offset) for offset in range(days)]


def validate_holiday_data(data: HolidayPayload) -> dict[str, Any]:
    """Validate a holiday range and normalize its note."""
    start_raw = (data.start_date or "").strip()
    end_raw = (data.end_date or "").strip()
    if not start_raw or not end_raw:
        raise InvalidDate("Select a start and end date for the holiday.")

    start = _parse_date(start_raw)
    end = _parse_date(end_raw)
    if end < start:
        raise InvalidDateRange()

    note = (data.note or "").strip() or DEFAULT_NOTE
    if len(note) > MAX_NOTE_LENGTH:
        raise NoteTooLong()

    return {"days": expand_range(start, end), "note": note, "is_recurring": data.is_recurring}


def holiday_matches(holiday: HolidayResponse, day: date) -> bool:
    """Whether a holiday closes a calendar day; recurring ones match month and day."""
    if holiday.holiday_date == day:
        return True
    return holiday.is_recurring and (holiday.holiday_date.month, holiday.holiday_date.day) == (
        day.month,
        day.day,
    )


async def _load_holidays(db: AsyncSession, location_id: int) -> list[HolidayResponse]:
    result = await db.execute(
        select(Holiday)
        .where(Holiday.location_id == location_id)
        .order_by(Holiday.holiday_date)
    )
    return [HolidayResponse.model_validate(row) for row in result.scalars().all()]


async def get_location_holidays(
    db: AsyncSession, location_id: int, cache: Cache = NULL_CACHE
) -> list[HolidayResponse]:
    """Holidays of a location ordered by date."""
    await location_service.get_location(db, location_id)

    cached = await cache.get(_cache_key(location_id))
    if cached is not None:
        return [HolidayResponse.model_validate(item) for item in cached]

    holidays = await _load_holidays(db, location_id)
    await cache.set(_cache_key(location_id), [h.model_dump(mode="json") for h in holidays])
    return holidays


async def save_location_holiday(
    db: AsyncSession,
    location_id: int,
    data: HolidayPayload,
    cache: Cache = NULL_CACHE,
) -> list[HolidayResponse]:
    """Store one row per day of the range, replacing existing rows on the same dates."""
    await location_service.get_location(db, location_id)
    validated = validate_holiday_data(data)
    days = validated["days"]

    result = await db.execute(
        select(Holiday).where(Holiday.location_id == location_id, Holiday.holiday_date.in_(days))
    )
    existing = {row.holiday_date: row for row in result.scalars().all()}

    for day in days:
        holiday = existing.get(day)
        if holiday is None:
            holiday = Holiday(location_id=location_id, holiday_date=day)
            db.add(holiday)
        holiday.note = validated["note"]
        holiday.is_recurring = validated["is_recurring"]

    await flush(db, f"Failed saving holidays for location #{location_id}")
    await cache.delete(_cache_key(location_id))

    logger.info(f"Saved {len(days)} holiday day(s) for location #{location_id}")
    # not cached: the route commits after this returns
    return await _load_holidays(db, location_id)


async def delete_location_holiday(
    db: AsyncSession, location_id: int, holiday_id: int, cache: Cache = NULL_CACHE
) -> None:
    """Remove a holiday entry of a location."""
    await location_service.get_location(db, location_id)

    result = await db.execute(
        select(Holiday).where(Holiday.id == holiday_id, Holiday.location_id == location_id)
    )
    holiday = result.scalar_one_or_none()
    if holiday is None:
        raise HolidayNotFound()

    await db.delete(holiday)
    await flush(db, f"Failed deleting holiday #{holiday_id}")
    await cache.delete(_cache_key(location_id))


async def find_holiday(
    db: AsyncSession, location_id: int, day: date, cache: Cache = NULL_CACHE
) -> HolidayResponse | None:
    """The holiday closing the given day, if any."""
    for holiday in await get_location_holidays(db, location_id, cache):
        if holiday_matches(holiday, day):
            return holiday
    return None


async def is_holiday(
    db: AsyncSession, location_id: int, day: date, cache: Cache = NULL_CACHE
) -> bool:
    return await find_holiday(db, location_id, day, cache) is not None

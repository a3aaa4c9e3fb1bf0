"""Business hours service - weekly opening template per location."""

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import BusinessHour
from app.schemas.business_hours import DayHoursInput
from app.services import location as location_service
from app.services.cache import NULL_CACHE, Cache
from app.services.errors import InvalidTime, MissingTime, OrderViolation
from app.services.repository import flush
from app.utils.timeutils import parse_clock, quarter_hour_options, to_minutes

logger = logging.getLogger(__name__)

DAYS: dict[int, str] = {
    1: "monday",
    2: "tuesday",
    3: "wednesday",
    4: "thursday",
    5: "friday",
    6: "saturday",
    7: "sunday",
}

_ALLOWED_TIMES = frozenset(quarter_hour_options())


def get_days() -> dict[int, dict[str, str]]:
    """Day of week (1=Monday) to key and label."""
    return {day: {"key": key, "label": key.capitalize()} for day, key in DAYS.items()}


def get_time_options() -> list[str]:
    """Selectable times (HH:MM, 15 minute resolution)."""
    return quarter_hour_options()


def get_empty_template() -> dict[int, dict[str, Any]]:
    """Every day closed with no hours."""
    return {day: {"open": None, "close": None, "is_closed": True} for day in DAYS}


def _cache_key(location_id: int) -> str:
    return Cache.key("business_hours", location_id)


def _coerce_day(raw: Any) -> DayHoursInput:
    if isinstance(raw, DayHoursInput):
        return raw
    if isinstance(raw, Mapping):
        return DayHoursInput.model_validate(dict(raw))
    return DayHoursInput()


def validate_hours_payload(submitted: Mapping[Any, Any]) -> list[dict[str, Any]]:
    """Validate all seven days; raises on the first invalid day, writes nothing."""
    by_day = {int(day): raw for day, raw in submitted.items() if str(day).isdigit()}
    payload: list[dict[str, Any]] = []

    for day in DAYS:
        entry = _coerce_day(by_day.get(day))
        opens = (entry.open or "").strip()
        closes = (entry.close or "").strip()

        if entry.is_closed or (not opens and not closes):
            payload.append({"day_of_week": day, "open_time": None, "close_time": None, "is_closed": True})
            continue

        if not opens or not closes:
            raise MissingTime()

        if opens not in _ALLOWED_TIMES or closes not in _ALLOWED_TIMES:
            raise InvalidTime()

        if to_minutes(parse_clock(closes)) <= to_minutes(parse_clock(opens)):
            raise OrderViolation()

        payload.append(
            {
                "day_of_week": day,
                "open_time": f"{opens}:00",
                "close_time": f"{closes}:00",
                "is_closed": False,
            }
        )

    return payload


async def list_hour_records(db: AsyncSession, location_id: int) -> list[BusinessHour]:
    """Stored rows for a location, by weekday."""
    result = await db.execute(
        select(BusinessHour)
        .where(BusinessHour.location_id == location_id)
        .order_by(BusinessHour.day_of_week)
    )
    return list(result.scalars().all())


def _build_template(records: list[BusinessHour]) -> dict[int, dict[str, Any]]:
    template = get_empty_template()
    for record in records:
        if record.day_of_week not in template:
            continue
        template[record.day_of_week] = {
            "open": record.open_label,
            "close": record.close_label,
            "is_closed": record.is_closed,
        }
    return template


async def get_location_hours(
    db: AsyncSession, location_id: int, cache: Cache = NULL_CACHE
) -> dict[int, dict[str, Any]]:
    """Weekly template for a location; days without a row are closed."""
    await location_service.get_location(db, location_id)

    cached = await cache.get(_cache_key(location_id))
    if cached is not None:
        return {int(day): hours for day, hours in cached.items()}

    template = _build_template(await list_hour_records(db, location_id))
    await cache.set(_cache_key(location_id), template)
    return template


async def save_location_hours(
    db: AsyncSession,
    location_id: int,
    submitted: Mapping[Any, Any],
    cache: Cache = NULL_CACHE,
) -> dict[int, dict[str, Any]]:
    """Replace the location's weekly template."""
    await location_service.get_location(db, location_id)
    validated = validate_hours_payload(submitted)

    await db.execute(delete(BusinessHour).where(BusinessHour.location_id == location_id))
    db.add_all(BusinessHour(location_id=location_id, **row) for row in validated)
    await flush(db, f"Failed saving business hours for location #{location_id}")
    await cache.delete(_cache_key(location_id))

    logger.info(f"Business hours saved for location #{location_id}")
    # not cached: the route commits after this returns
    return _build_template(await list_hour_records(db, location_id))

"""Location API endpoints (locations, business hours, holidays)."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from app.api.deps import CacheDep, DbSession, DeletedFilter
from app.models import Location
from app.schemas.business_hours import (
    BusinessHoursPayload,
    DayHours,
    DayOption,
    HolidayPayload,
    HolidayResponse,
)
from app.schemas.location import IndustryGroup, LocationPayload, LocationResponse
from app.services import business_hours as business_hours_service
from app.services import holiday as holiday_service
from app.services import location as location_service
from app.utils.timeutils import timezone_options

router = APIRouter(prefix="/locations", tags=["locations"])


@router.get(
    "",
    response_model=list[LocationResponse],
    summary="List locations",
)
async def list_locations(
    db: DbSession,
    deleted: Annotated[DeletedFilter, Depends()],
) -> list[Location]:
    """List locations ordered by name."""
    return await location_service.list_locations(
        db, include_deleted=deleted.include_deleted, only_deleted=deleted.only_deleted
    )


@router.get(
    "/industries",
    response_model=list[IndustryGroup],
    summary="Industry options",
)
async def list_industries() -> list[dict]:
    """Industry options grouped for selection."""
    return location_service.get_industry_groups()


@router.get(
    "/timezones",
    response_model=list[str],
    summary="Time zone options",
)
async def list_timezones() -> list[str]:
    """Selectable IANA time zones."""
    return timezone_options()


@router.post(
    "",
    response_model=LocationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a location",
)
async def create_location(location_data: LocationPayload, db: DbSession) -> Location:
    """Create a new location."""
    location = await location_service.create_location(db, location_data)
    await db.commit()
    return location


@router.get(
    "/{location_id}",
    response_model=LocationResponse,
    summary="Get location by ID",
)
async def get_location(location_id: int, db: DbSession) -> Location:
    """Get location details."""
    return await location_service.get_location(db, location_id)


@router.put(
    "/{location_id}",
    response_model=LocationResponse,
    summary="Update location",
)
async def update_location(
    location_id: int, location_data: LocationPayload, db: DbSession
) -> Location:
    """Update a location."""
    location = await location_service.update_location(db, location_id, location_data)
    await db.commit()
    return location


@router.delete(
    "/{location_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete location",
)
async def delete_location(location_id: int, db: DbSession) -> None:
    """Soft delete a location."""
    await location_service.delete_location(db, location_id)
    await db.commit()


@router.post(
    "/{location_id}/restore",
    response_model=LocationResponse,
    summary="Restore location",
)
async def restore_location(location_id: int, db: DbSession) -> Location:
    """Restore a soft-deleted location."""
    location = await location_service.restore_location(db, location_id)
    await db.commit()
    return location


# Business hours


@router.get(
    "/business-hours/days",
    response_model=dict[int, DayOption],
    summary="Weekday options",
)
async def list_days() -> dict:
    return business_hours_service.get_days()


@router.get(
    "/{location_id}/business-hours",
    response_model=dict[int, DayHours],
    summary="Get weekly business hours",
)
async def get_business_hours(location_id: int, db: DbSession, cache: CacheDep) -> dict:
    """Weekly opening template, keyed by day of week (1=Monday)."""
    return await business_hours_service.get_location_hours(db, location_id, cache)


@router.put(
    "/{location_id}/business-hours",
    response_model=dict[int, DayHours],
    summary="Replace weekly business hours",
)
async def save_business_hours(
    location_id: int, hours: BusinessHoursPayload, db: DbSession, cache: CacheDep
) -> dict:
    """Replace the whole weekly template."""
    saved = await business_hours_service.save_location_hours(db, location_id, hours.root, cache)
    await db.commit()
    return saved


# Holidays


@router.get(
    "/{location_id}/holidays",
    response_model=list[HolidayResponse],
    summary="List holidays",
)
async def list_holidays(
    location_id: int, db: DbSession, cache: CacheDep
) -> list[HolidayResponse]:
    return await holiday_service.get_location_holidays(db, location_id, cache)


@router.post(
    "/{location_id}/holidays",
    response_model=list[HolidayResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Add holidays",
)
async def save_holiday(
    location_id: int, holiday_data: HolidayPayload, db: DbSession, cache: CacheDep
) -> list[HolidayResponse]:
    """Close the location for a date range; returns all holidays of the location."""
    holidays = await holiday_service.save_location_holiday(db, location_id, holiday_data, cache)
    await db.commit()
    return holidays


@router.delete(
    "/{location_id}/holidays/{holiday_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete holiday",
)
async def delete_holiday(
    location_id: int, holiday_id: int, db: DbSession, cache: CacheDep
) -> None:
    await holiday_service.delete_location_holiday(db, location_id, holiday_id, cache)
    await db.commit()

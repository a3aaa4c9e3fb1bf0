"""Location service - business logic for locations."""

import logging
from typing import Any

from pydantic import EmailStr, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import DEFAULT_LOCATION_TIMEZONE, Location
from app.schemas.location import LocationPayload
from app.services.errors import (
    InvalidEmail,
    InvalidIndustry,
    InvalidTimezone,
    LocationNotFound,
    MissingName,
    StateConflict,
)
from app.services.repository import apply_deleted_filter, flush
from app.utils.timeutils import is_valid_timezone

logger = logging.getLogger(__name__)

_email_adapter = TypeAdapter(EmailStr)

INDUSTRY_GROUPS: list[dict[str, Any]] = [
    {
        "label": "Education",
        "options": [
            (34, "Universities"),
            (35, "Colleges"),
            (36, "Schools"),
            (37, "Libraries"),
            (38, "Teaching"),
            (39, "Tutoring lessons"),
            (40, "Parent meetings"),
            (41, "Services"),
            (42, "Child care"),
            (43, "Driving Schools"),
            (44, "Driving Instructors"),
            (45, "Other"),
        ],
    },
    {
        "label": "Beauty and wellness",
        "options": [
            (11, "Beauty salons"),
            (12, "Hair salons"),
            (13, "Nail salons"),
            (14, "Eyelash extensions"),
            (15, "Spa"),
            (16, "Other"),
        ],
    },
    {
        "label": "Events and entertainment",
        "options": [
            (46, "Events (One time and Recurring)"),
            (47, "Business events"),
            (48, "Meeting rooms"),
            (49, "Escape rooms"),
            (50, "Art classes"),
            (51, "Equipment rental"),
            (52, "Photographers"),
            (53, "Restaurants"),
            (54, "Other"),
        ],
    },
    {
        "label": "Medical",
        "options": [
            (17, "Medical Clinics & Doctors"),
            (18, "Dentists"),
            (19, "Chiropractors"),
            (20, "Acupuncture"),
            (21, "Massage"),
            (22, "Physiologists"),
            (23, "Psychologists"),
            (24, "Other"),
        ],
    },
    {
        "label": "Officials",
        "options": [
            (55, "City councils"),
            (56, "Embassies and consulates"),
            (57, "Attorneys"),
            (58, "Legal services"),
            (59, "Financial services"),
            (60, "Interview scheduling"),
            (61, "Call centers"),
            (62, "Other"),
        ],
    },
    {
        "label": "Personal meetings and services",
        "options": [
            (25, "Consulting"),
            (26, "Counselling"),
            (27, "Coaching"),
            (28, "Spiritual services"),
            (29, "Design consultants"),
            (30, "Cleaning"),
            (31, "Household"),
            (32, "Pet services"),
            (33, "Other"),
        ],
    },
    {
        "label": "Retailers",
        "options": [
            (1, "Supermarket"),
            (2, "Retail Finance"),
            (3, "Other retailers"),
        ],
    },
    {
        "label": "Sport",
        "options": [
            (4, "Personal trainers"),
            (5, "Gyms"),
            (6, "Fitness classes"),
            (7, "Yoga classes"),
            (8, "Golf classes"),
            (9, "Sport items renting"),
            (10, "Other"),
        ],
    },
    {
        "label": "Other",
        "options": [(63, "Other")],
    },
]


def get_industry_groups() -> list[dict[str, Any]]:
    """Industry options grouped for display."""
    return [
        {
            "label": group["label"],
            "options": [{"value": value, "label": label} for value, label in group["options"]],
        }
        for group in INDUSTRY_GROUPS
    ]


def _industry_ids() -> set[int]:
    return {value for group in INDUSTRY_GROUPS for value, _ in group["options"]}


def get_industry_label(industry_id: int) -> str:
    """Human label for an industry id."""
    if industry_id == 0:
        return "Not specified"
    for group in INDUSTRY_GROUPS:
        for value, label in group["options"]:
            if value == industry_id:
                return label
    return "Custom industry"


def is_valid_email(value: str) -> bool:
    try:
        _email_adapter.validate_python(value)
    except PydanticValidationError:
        return False
    return True


def _clean(value: str | None) -> str | None:
    """Trim text; empty becomes None."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def validate_location_data(data: LocationPayload) -> dict[str, Any]:
    """Validate submitted location data and normalize it for persistence."""
    name = (data.name or "").strip()
    if not name:
        raise MissingName("Location name is required.")

    base_email = _clean(data.base_email)
    if base_email and not is_valid_email(base_email):
        raise InvalidEmail("Please provide a valid base email address.")

    if data.industry_id != 0 and data.industry_id not in _industry_ids():
        raise InvalidIndustry()

    timezone = _clean(data.timezone) or DEFAULT_LOCATION_TIMEZONE
    if not is_valid_timezone(timezone):
        raise InvalidTimezone()

    return {
        "name": name,
        "address": _clean(data.address),
        "phone": _clean(data.phone),
        "base_email": base_email,
        "website": _clean(data.website),
        "timezone": timezone,
        "industry_id": data.industry_id,
        "is_event_location": bool(data.is_event_location),
        "company_name": _clean(data.company_name),
        "company_address": _clean(data.company_address),
        "company_phone": _clean(data.company_phone),
    }


async def find_location(
    db: AsyncSession, location_id: int, include_deleted: bool = False
) -> Location | None:
    """Get location by ID, None when missing."""
    query = apply_deleted_filter(
        select(Location).where(Location.id == location_id), Location, include_deleted
    )
    result = await db.execute(query)
    return result.scalar_one_or_none()


async def get_location(db: AsyncSession, location_id: int) -> Location:
    """Get an active location or raise LocationNotFound."""
    location = await find_location(db, location_id)
    if location is None:
        raise LocationNotFound()
    return location


async def get_location_with_deleted(db: AsyncSession, location_id: int) -> Location:
    """Get a location including soft-deleted ones."""
    location = await find_location(db, location_id, include_deleted=True)
    if location is None:
        raise LocationNotFound()
    return location


async def list_locations(
    db: AsyncSession, include_deleted: bool = False, only_deleted: bool = False
) -> list[Location]:
    """List locations ordered by name."""
    query = apply_deleted_filter(select(Location), Location, include_deleted, only_deleted)
    result = await db.execute(query.order_by(func.lower(Location.name), Location.id))
    return list(result.scalars().all())


async def create_location(db: AsyncSession, location_data: LocationPayload) -> Location:
    """Create a new location."""
    validated = validate_location_data(location_data)
    location = Location(**validated)
    db.add(location)
    await flush(db, "Failed creating location")
    await db.refresh(location)
    logger.info(f"Location #{location.id} '{location.name}' created")
    return location


async def update_location(
    db: AsyncSession, location_id: int, location_data: LocationPayload
) -> Location:
    """Update a location; deleted locations must be restored first."""
    location = await get_location_with_deleted(db, location_id)
    if location.is_deleted:
        raise StateConflict("The location has been deleted and must be restored before editing.")

    validated = validate_location_data(location_data)
    for key, value in validated.items():
        setattr(location, key, value)
    await flush(db, f"Failed updating location #{location_id}")
    await db.refresh(location)
    return location


async def delete_location(db: AsyncSession, location_id: int) -> None:
    """Soft delete a location; business hours and bookings keep referencing it."""
    location = await get_location(db, location_id)
    location.is_deleted = True
    await flush(db, f"Failed deleting location #{location_id}")


async def restore_location(db: AsyncSession, location_id: int) -> Location:
    """Restore a soft-deleted location."""
    location = await get_location_with_deleted(db, location_id)
    if not location.is_deleted:
        raise StateConflict("The location is already active.")
    location.is_deleted = False
    await flush(db, f"Failed restoring location #{location_id}")
    await db.refresh(location)
    return location


async def count_locations(db: AsyncSession, include_deleted: bool = False) -> int:
    """Count locations."""
    query = apply_deleted_filter(select(func.count(Location.id)), Location, include_deleted)
    result = await db.execute(query)
    return result.scalar_one()

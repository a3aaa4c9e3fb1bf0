"""Employee service - business logic for staff management.

An employee is saved in one pass: scalar fields, weekly schedule, location,
service and category assignments are all validated first, then the relations
are synchronised by full replacement and flushed together. The first failing
check raises and nothing is written. Unknown category names are created on the
way.
"""

import logging
import re
import unicodedata
from collections.abc import Iterable, Mapping
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import (
    Employee,
    EmployeeBreak,
    EmployeeCategory,
    EmployeeScheduleDay,
    EmployeeServiceAssignment,
    EmployeeVisibility,
    Location,
    Service,
)
from app.schemas.employee import EmployeePayload, ScheduleDayInput, ServiceAssignmentInput
from app.services.errors import (
    EmployeeNotFound,
    InvalidCategory,
    InvalidEmail,
    InvalidLocation,
    InvalidPrice,
    InvalidSchedule,
    InvalidScheduleBreak,
    InvalidService,
    InvalidVisibility,
    MissingName,
    StateConflict,
)
from app.services.location import is_valid_email
from app.services.repository import apply_deleted_filter, flush
from app.utils.timeutils import parse_clock, to_minutes

logger = logging.getLogger(__name__)

WEEK_DAYS = range(1, 8)
_CATEGORY_SEPARATORS = re.compile(r"[,;\r\n]+")


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None


# Schedule validation


def _coerce_schedule_day(raw: Any) -> ScheduleDayInput:
    if isinstance(raw, ScheduleDayInput):
        return raw
    if isinstance(raw, Mapping):
        return ScheduleDayInput.model_validate(dict(raw))
    return ScheduleDayInput()


def validate_schedule(schedule: Mapping[Any, Any]) -> list[dict[str, Any]]:
    """Validate a weekly schedule; days that are not submitted are days off.

    A working day needs a start and an end (HH:MM, 24 hour) with end > start.
    Every break must sit inside the working hours and end after it starts.
    """
    by_day: dict[int, Any] = {}
    for key, raw in schedule.items():
        try:
            day = int(key)
        except (TypeError, ValueError) as e:
            raise InvalidSchedule(f"Unknown schedule day '{key}'.") from e
        if day not in WEEK_DAYS:
            raise InvalidSchedule(f"Unknown schedule day '{key}'.")
        by_day[day] = raw

    days: list[dict[str, Any]] = []
    for day in WEEK_DAYS:
        entry = _coerce_schedule_day(by_day.get(day))
        start_raw = _clean(entry.start_time)
        end_raw = _clean(entry.end_time)

        if start_raw is None and end_raw is None and not entry.breaks:
            days.append(
                {"day_of_week": day, "start_time": None, "end_time": None, "is_off": True, "breaks": []}
            )
            continue

        start = parse_clock(start_raw)
        end = parse_clock(end_raw)
        if start is None or end is None:
            raise InvalidSchedule("Working days need a start and end time in HH:MM format.")
        if to_minutes(end) <= to_minutes(start):
            raise InvalidSchedule("The working day must end after it starts.")

        breaks = []
        for item in entry.breaks:
            break_start = parse_clock(_clean(item.start_time))
            break_end = parse_clock(_clean(item.end_time))
            if break_start is None or break_end is None:
                raise InvalidScheduleBreak()
            if to_minutes(break_end) <= to_minutes(break_start):
                raise InvalidScheduleBreak()
            if to_minutes(break_start) < to_minutes(start) or to_minutes(break_end) > to_minutes(end):
                raise InvalidScheduleBreak()
            breaks.append((break_start.strftime("%H:%M"), break_end.strftime("%H:%M")))

        days.append(
            {
                "day_of_week": day,
                "start_time": start.strftime("%H:%M"),
                "end_time": end.strftime("%H:%M"),
                "is_off": False,
                "breaks": sorted(breaks),
            }
        )

    return days


def parse_price(value: float | str | None) -> float | None:
    """Price override: empty means the service price, otherwise a non-negative number."""
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip().replace(",", ".")
        if not value:
            return None
    try:
        price = float(value)
    except (TypeError, ValueError) as e:
        raise InvalidPrice() from e
    if price < 0:
        raise InvalidPrice()
    return price


def validate_employee_data(data: EmployeePayload) -> dict[str, Any]:
    """Validate scalar fields and the schedule; returns the normalized values."""
    name = (data.name or "").strip()
    if not name:
        raise MissingName("Employee name is required.")

    email = _clean(data.email)
    if email and not is_valid_email(email):
        raise InvalidEmail("Please enter a valid email address.")

    visibility = (data.visibility or "").strip().lower() or EmployeeVisibility.PUBLIC.value
    if visibility not in {v.value for v in EmployeeVisibility}:
        raise InvalidVisibility()

    validated: dict[str, Any] = {
        "fields": {
            "name": name,
            "email": email,
            "phone": _clean(data.phone),
            "specialization": _clean(data.specialization),
            "available_online": bool(data.available_online),
            "visibility": visibility,
        },
        "schedule": None,
    }
    if data.schedule is not None:
        validated["schedule"] = validate_schedule(data.schedule)
    return validated


async def _resolve_locations(db: AsyncSession, location_ids: Iterable[int]) -> list[Location]:
    ids = list(dict.fromkeys(location_ids))
    if not ids:
        return []
    result = await db.execute(
        select(Location).where(Location.id.in_(ids), Location.is_deleted.is_(False))
    )
    found = {location.id: location for location in result.scalars().all()}
    if len(found) != len(ids):
        raise InvalidLocation()
    return [found[location_id] for location_id in ids]


async def _resolve_services(
    db: AsyncSession, assignments: list[ServiceAssignmentInput]
) -> list[dict[str, Any]]:
    resolved: dict[int, dict[str, Any]] = {}
    for assignment in assignments:
        resolved[assignment.service_id] = {
            "service_id": assignment.service_id,
            "order": assignment.order,
            "price": parse_price(assignment.price),
        }
    if not resolved:
        return []

    result = await db.execute(
        select(Service.id).where(Service.id.in_(resolved), Service.is_deleted.is_(False))
    )
    if len(set(result.scalars().all())) != len(resolved):
        raise InvalidService("One of the selected services does not exist.")
    return list(resolved.values())


# Categories


def slugify(name: str) -> str:
    """ASCII, dash-separated form of a category name."""
    ascii_name = unicodedata.normalize("NFKD", name).encode("ascii", "ignore").decode("ascii")
    return re.sub(r"[^a-z0-9]+", "-", ascii_name.lower()).strip("-")


def parse_category_names(raw: str | list[str] | None) -> list[str]:
    """Split names on commas, semicolons and new lines; blanks and repeats are dropped."""
    if raw is None:
        return []
    if isinstance(raw, str):
        raw = _CATEGORY_SEPARATORS.split(raw)
    names: dict[str, str] = {}
    for item in raw:
        name = item.strip()
        slug = slugify(name)
        if slug:
            names.setdefault(slug, name)
    return list(names.values())


async def list_categories(db: AsyncSession) -> list[EmployeeCategory]:
    """All employee categories ordered by name."""
    result = await db.execute(
        select(EmployeeCategory).order_by(func.lower(EmployeeCategory.name), EmployeeCategory.id)
    )
    return list(result.scalars().all())


async def _resolve_categories(
    db: AsyncSession, category_ids: Iterable[int], new_names: list[str]
) -> list[EmployeeCategory]:
    ids = list(dict.fromkeys(category_ids))
    categories: list[EmployeeCategory] = []
    if ids:
        result = await db.execute(select(EmployeeCategory).where(EmployeeCategory.id.in_(ids)))
        found = {category.id: category for category in result.scalars().all()}
        if len(found) != len(ids):
            raise InvalidCategory()
        categories = [found[category_id] for category_id in ids]

    for name in new_names:
        slug = slugify(name)
        if any(category.slug == slug for category in categories):
            continue
        result = await db.execute(select(EmployeeCategory).where(EmployeeCategory.slug == slug))
        category = result.scalar_one_or_none()
        if category is None:
            category = EmployeeCategory(name=name, slug=slug)
            db.add(category)
            logger.info(f"Employee category '{name}' created")
        categories.append(category)
    return categories


# Relation sync


def _sync_schedule(employee: Employee, days: list[dict[str, Any]]) -> None:
    existing = {day.day_of_week: day for day in employee.schedule_days}
    synced = []
    for values in days:
        row = existing.get(values["day_of_week"]) or EmployeeScheduleDay(
            day_of_week=values["day_of_week"]
        )
        row.start_time = values["start_time"]
        row.end_time = values["end_time"]
        row.is_off = values["is_off"]
        row.breaks = [EmployeeBreak(start_time=s, end_time=e) for s, e in values["breaks"]]
        synced.append(row)
    employee.schedule_days = synced


def _sync_services(employee: Employee, assignments: list[dict[str, Any]]) -> None:
    existing = {item.service_id: item for item in employee.service_assignments}
    synced = []
    for values in assignments:
        row = existing.get(values["service_id"]) or EmployeeServiceAssignment(
            service_id=values["service_id"]
        )
        row.order = values["order"]
        row.price = values["price"]
        synced.append(row)
    employee.service_assignments = synced


async def _save(db: AsyncSession, employee: Employee, data: EmployeePayload) -> None:
    validated = validate_employee_data(data)
    locations = None
    if data.location_ids is not None:
        locations = await _resolve_locations(db, data.location_ids)
    services = None
    if data.services is not None:
        services = await _resolve_services(db, data.services)
    categories = None
    if data.category_ids is not None or data.new_categories is not None:
        categories = await _resolve_categories(
            db, data.category_ids or [], parse_category_names(data.new_categories)
        )

    for key, value in validated["fields"].items():
        setattr(employee, key, value)
    if validated["schedule"] is not None:
        _sync_schedule(employee, validated["schedule"])
    if categories is not None:
        employee.categories = categories
    if locations is not None:
        employee.locations = locations
    if services is not None:
        _sync_services(employee, services)


async def _reload(db: AsyncSession, employee_id: int) -> Employee:
    result = await db.execute(
        select(Employee)
        .where(Employee.id == employee_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one()


# Queries


async def find_employee(
    db: AsyncSession, employee_id: int, include_deleted: bool = False
) -> Employee | None:
    """Get employee by ID with locations, services and schedule loaded."""
    query = apply_deleted_filter(
        select(Employee).where(Employee.id == employee_id), Employee, include_deleted
    )
    result = await db.execute(query)
    return result.scalar_one_or_none()


async def get_employee(
    db: AsyncSession, employee_id: int, include_deleted: bool = False
) -> Employee:
    """Get employee or raise EmployeeNotFound."""
    employee = await find_employee(db, employee_id, include_deleted)
    if employee is None:
        raise EmployeeNotFound()
    return employee


def filter_by_location(employees: Iterable[Employee], location_id: int) -> list[Employee]:
    """Employees assigned to the given location."""
    return [employee for employee in employees if employee.works_at(location_id)]


async def list_employees(
    db: AsyncSession,
    include_deleted: bool = False,
    only_deleted: bool = False,
    location_id: int | None = None,
) -> list[Employee]:
    """List employees sorted case-insensitively by name."""
    query = apply_deleted_filter(select(Employee), Employee, include_deleted, only_deleted)
    result = await db.execute(query.order_by(func.lower(Employee.name), Employee.id))
    employees = list(result.scalars().all())
    if location_id is not None:
        employees = filter_by_location(employees, location_id)
    return employees


# Writes


async def create_employee(db: AsyncSession, employee_data: EmployeePayload) -> Employee:
    """Create a new employee with its schedule and assignments."""
    employee = Employee(categories=[], locations=[], service_assignments=[], schedule_days=[])
    await _save(db, employee, employee_data)
    if employee_data.schedule is None:
        _sync_schedule(employee, validate_schedule({}))

    db.add(employee)
    await flush(db, "Failed creating employee")
    logger.info(f"Employee #{employee.id} '{employee.name}' created")
    return await _reload(db, employee.id)


async def update_employee(
    db: AsyncSession, employee_id: int, employee_data: EmployeePayload
) -> Employee:
    """Update an employee; relation fields left as None keep their stored values."""
    employee = await get_employee(db, employee_id, include_deleted=True)
    if employee.is_deleted:
        raise StateConflict("The employee has been deleted and must be restored before editing.")

    await _save(db, employee, employee_data)
    await flush(db, f"Failed updating employee #{employee_id}")
    return await _reload(db, employee_id)


async def delete_employee(db: AsyncSession, employee_id: int) -> None:
    """Soft delete an employee; appointments keep referencing it."""
    employee = await get_employee(db, employee_id, include_deleted=True)
    if employee.is_deleted:
        raise StateConflict("The employee has already been deleted.")
    employee.is_deleted = True
    await flush(db, f"Failed deleting employee #{employee_id}")


async def restore_employee(db: AsyncSession, employee_id: int) -> Employee:
    """Restore a soft-deleted employee."""
    employee = await get_employee(db, employee_id, include_deleted=True)
    if not employee.is_deleted:
        raise StateConflict("The employee is already active.")
    employee.is_deleted = False
    await flush(db, f"Failed restoring employee #{employee_id}")
    return await _reload(db, employee_id)

"""Appointment service - validation, persistence and range queries for bookings."""

import logging
from collections.abc import Iterable
from datetime import datetime
from typing import Any

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import SchedulingConfig, get_settings
from app.models import Appointment, AppointmentStatus, Customer, PaymentStatus
from app.schemas.appointment import AppointmentFilters, AppointmentPayload
from app.services import customer as customer_service
from app.services import employee as employee_service
from app.services import service as service_service
from app.services.errors import (
    AppointmentNotFound,
    CustomerNotFound,
    EmployeeNotFound,
    InvalidAppointmentSchedule,
    InvalidCustomer,
    InvalidEmail,
    InvalidPeriod,
    InvalidProvider,
    InvalidService,
    ServiceNotFound,
    StateConflict,
)
from app.services.location import is_valid_email
from app.services.repository import apply_deleted_filter, flush
from app.utils.timeutils import resolve_timezone

logger = logging.getLogger(__name__)

ALLOWED_STATUSES = {status.value for status in AppointmentStatus}
ALLOWED_PAYMENT_STATUSES = {status.value for status in PaymentStatus}

ORDERABLE_COLUMNS = {
    "scheduled_start": Appointment.scheduled_start,
    "scheduled_end": Appointment.scheduled_end,
    "created_at": Appointment.created_at,
    "status": Appointment.status,
    "id": Appointment.id,
}


def normalize_status(value: str | None) -> str:
    """Unknown statuses become pending."""
    value = (value or "").strip().lower()
    return value if value in ALLOWED_STATUSES else AppointmentStatus.PENDING.value


def normalize_payment_status(value: str | None) -> str | None:
    """Unknown payment statuses become None."""
    value = (value or "").strip().lower()
    return value if value in ALLOWED_PAYMENT_STATUSES else None


def _site_config(config: SchedulingConfig | None) -> SchedulingConfig:
    return config or get_settings().scheduling_config()


def combine_datetimes(
    appointment_date: str, start_time: str, end_time: str, zone_name: str
) -> tuple[datetime, datetime]:
    """Read "YYYY-MM-DD" and two "HH:MM" values as aware datetimes in the given zone."""
    appointment_date = (appointment_date or "").strip()
    start_time = (start_time or "").strip()
    end_time = (end_time or "").strip()
    if not appointment_date or not start_time or not end_time:
        raise InvalidAppointmentSchedule("Appointment date and times are required.")

    zone = resolve_timezone(zone_name, "UTC").zone
    try:
        day = datetime.strptime(appointment_date, "%Y-%m-%d").date()
        start = datetime.strptime(start_time, "%H:%M").time()
        end = datetime.strptime(end_time, "%H:%M").time()
    except ValueError as e:
        raise InvalidAppointmentSchedule() from e

    return datetime.combine(day, start, tzinfo=zone), datetime.combine(day, end, tzinfo=zone)


def _pick(payload: AppointmentPayload, field: str, fallback: Any) -> Any:
    """Submitted value, else the fallback (the stored value on update)."""
    if field in payload.model_fields_set and getattr(payload, field) is not None:
        return getattr(payload, field)
    return fallback


async def validate_payload(
    db: AsyncSession,
    payload: AppointmentPayload,
    existing: Appointment | None = None,
    config: SchedulingConfig | None = None,
) -> dict[str, Any]:
    """Validate an appointment payload; on update, missing fields keep stored values."""
    provider_id = _pick(payload, "provider_id", existing.employee_id if existing else None)
    service_id = _pick(payload, "service_id", existing.service_id if existing else None)
    customer_id = _pick(payload, "customer_id", existing.customer_id if existing else None)

    if not provider_id or provider_id <= 0:
        raise InvalidProvider()
    if not service_id or service_id <= 0:
        raise InvalidService()

    try:
        await employee_service.get_employee(db, provider_id)
    except EmployeeNotFound as e:
        raise InvalidProvider(e.message) from e
    try:
        await service_service.get_service(db, service_id)
    except ServiceNotFound as e:
        raise InvalidService(e.message) from e

    start, end = combine_datetimes(
        payload.appointment_date,
        payload.appointment_start,
        payload.appointment_end,
        _site_config(config).default_timezone,
    )
    if start >= end:
        raise InvalidPeriod()

    customer_email = _pick(
        payload, "customer_email", existing.customer_email if existing else None
    )
    customer_email = (customer_email or "").strip() or None
    if customer_email and not is_valid_email(customer_email):
        raise InvalidEmail("The provided customer email address is invalid.")

    # an already linked customer stays valid after being deleted
    if customer_id and customer_id > 0 and (existing is None or customer_id != existing.customer_id):
        try:
            await customer_service.get_customer(db, customer_id)
        except CustomerNotFound as e:
            raise InvalidCustomer(e.message) from e

    status = _pick(payload, "status", existing.status if existing else None)
    payment_status = _pick(
        payload, "payment_status", existing.payment_status if existing else None
    )
    currency = _pick(payload, "currency", existing.currency if existing else None)

    return {
        "employee_id": provider_id,
        "service_id": service_id,
        "customer_id": customer_id if customer_id and customer_id > 0 else None,
        "customer_email": customer_email,
        "customer_phone": _pick(
            payload, "customer_phone", existing.customer_phone if existing else None
        ),
        "status": normalize_status(status),
        "payment_status": normalize_payment_status(payment_status),
        "notes": _pick(payload, "notes", existing.notes if existing else None) or None,
        "internal_note": _pick(
            payload, "internal_note", existing.internal_note if existing else None
        )
        or None,
        "should_notify": bool(
            _pick(payload, "send_notifications", existing.should_notify if existing else False)
        ),
        "is_recurring": bool(
            _pick(payload, "is_recurring", existing.is_recurring if existing else False)
        ),
        "scheduled_start": start,
        "scheduled_end": end,
        "total_amount": _pick(
            payload, "total_amount", existing.total_amount if existing else None
        ),
        "currency": (currency or "").strip().upper() or get_settings().default_currency,
    }


async def _reload(db: AsyncSession, appointment_id: int) -> Appointment:
    result = await db.execute(
        select(Appointment)
        .where(Appointment.id == appointment_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one()


def _fmt(value: datetime, zone_name: str) -> str:
    return value.astimezone(resolve_timezone(zone_name, "UTC").zone).strftime("%Y-%m-%d %H:%M")


# Queries


def _as_site_time(value: datetime, zone_name: str) -> datetime:
    """Filter bound as an aware datetime; naive values are site local time."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=resolve_timezone(zone_name, "UTC").zone)
    return value


async def paginate_appointments(
    db: AsyncSession,
    filters: AppointmentFilters | None = None,
    config: SchedulingConfig | None = None,
) -> dict[str, Any]:
    """Filtered, ordered page of appointments with the total match count."""
    filters = filters or AppointmentFilters()
    zone_name = _site_config(config).default_timezone

    query = apply_deleted_filter(
        select(Appointment), Appointment, filters.include_deleted, filters.only_deleted
    )
    if filters.appointment_id:
        query = query.where(Appointment.id == filters.appointment_id)
    if filters.employee_id:
        query = query.where(Appointment.employee_id == filters.employee_id)
    if filters.service_id:
        query = query.where(Appointment.service_id == filters.service_id)
    if filters.status:
        query = query.where(Appointment.status == filters.status)
    if filters.customer_search:
        like = f"%{filters.customer_search.strip()}%"
        query = query.join(Customer, Appointment.customer_id == Customer.id).where(
            or_(
                Customer.name.ilike(like),
                Customer.first_name.ilike(like),
                Customer.last_name.ilike(like),
            )
        )
    if filters.appointment_from:
        query = query.where(
            Appointment.scheduled_start >= _as_site_time(filters.appointment_from, zone_name)
        )
    if filters.appointment_to:
        query = query.where(
            Appointment.scheduled_end <= _as_site_time(filters.appointment_to, zone_name)
        )
    if filters.created_from:
        query = query.where(Appointment.created_at >= _as_site_time(filters.created_from, zone_name))
    if filters.created_to:
        query = query.where(
            Appointment.created_at <= _as_site_time(filters.created_to, zone_name)
        )

    total = (
        await db.execute(select(func.count()).select_from(query.order_by(None).subquery()))
    ).scalar_one()

    column = ORDERABLE_COLUMNS.get(filters.order_by, Appointment.scheduled_start)
    ordering = column.asc() if filters.order.lower() == "asc" else column.desc()
    query = (
        query.order_by(ordering, Appointment.id.desc())
        .offset((filters.page - 1) * filters.per_page)
        .limit(filters.per_page)
    )
    result = await db.execute(query)

    return {
        "appointments": list(result.scalars().all()),
        "total": total,
        "per_page": filters.per_page,
        "page": filters.page,
    }


async def find_appointment(
    db: AsyncSession, appointment_id: int, include_deleted: bool = True
) -> Appointment | None:
    """Get appointment by ID, None when missing."""
    query = apply_deleted_filter(
        select(Appointment).where(Appointment.id == appointment_id), Appointment, include_deleted
    )
    result = await db.execute(query)
    return result.scalar_one_or_none()


async def get_appointment(db: AsyncSession, appointment_id: int) -> Appointment:
    """Get an appointment, deleted ones included, or raise AppointmentNotFound."""
    appointment = await find_appointment(db, appointment_id)
    if appointment is None:
        raise AppointmentNotFound()
    return appointment


async def get_appointments_for_employees(
    db: AsyncSession,
    employee_ids: Iterable[int],
    from_: datetime,
    to: datetime,
) -> list[Appointment]:
    """Active appointments of the employees that start and end inside [from_, to]."""
    ids = sorted({employee_id for employee_id in employee_ids if employee_id and employee_id > 0})
    if not ids:
        return []

    result = await db.execute(
        select(Appointment)
        .where(
            Appointment.is_deleted.is_(False),
            Appointment.employee_id.in_(ids),
            Appointment.scheduled_start >= from_,
            Appointment.scheduled_end <= to,
        )
        .order_by(Appointment.scheduled_start, Appointment.id)
    )
    return list(result.scalars().all())


# Writes


async def create_appointment(
    db: AsyncSession, payload: AppointmentPayload, config: SchedulingConfig | None = None
) -> Appointment:
    """Create a new appointment."""
    config = _site_config(config)
    validated = await validate_payload(db, payload, config=config)

    appointment = Appointment(**validated)
    db.add(appointment)
    await flush(db, "Failed creating appointment")
    logger.info(
        f"Appointment #{appointment.id} created for provider #{validated['employee_id']}, "
        f"service #{validated['service_id']} on "
        f"{_fmt(validated['scheduled_start'], config.default_timezone)} to "
        f"{_fmt(validated['scheduled_end'], config.default_timezone)}."
    )
    return await _reload(db, appointment.id)


async def update_appointment(
    db: AsyncSession,
    appointment_id: int,
    payload: AppointmentPayload,
    config: SchedulingConfig | None = None,
) -> Appointment:
    """Update an appointment; fields not sent keep their stored values."""
    config = _site_config(config)
    appointment = await get_appointment(db, appointment_id)
    validated = await validate_payload(db, payload, existing=appointment, config=config)

    provider = appointment.employee_id if appointment.employee_id is not None else "n/a"
    logger.info(
        f"Rescheduling appointment #{appointment_id} from "
        f"{_fmt(appointment.scheduled_start, config.default_timezone)}-"
        f"{_fmt(appointment.scheduled_end, config.default_timezone)} (provider #{provider}) to "
        f"{_fmt(validated['scheduled_start'], config.default_timezone)}-"
        f"{_fmt(validated['scheduled_end'], config.default_timezone)} "
        f"for provider #{validated['employee_id']}, service #{validated['service_id']}."
    )

    for key, value in validated.items():
        setattr(appointment, key, value)
    await flush(db, f"Failed updating appointment #{appointment_id}")
    return await _reload(db, appointment_id)


async def delete_appointment(db: AsyncSession, appointment_id: int) -> None:
    """Soft delete an appointment."""
    appointment = await get_appointment(db, appointment_id)
    if appointment.is_deleted:
        raise StateConflict("The appointment has already been deleted.")
    appointment.is_deleted = True
    await flush(db, f"Failed deleting appointment #{appointment_id}")


async def restore_appointment(db: AsyncSession, appointment_id: int) -> Appointment:
    """Restore a soft-deleted appointment."""
    appointment = await get_appointment(db, appointment_id)
    if not appointment.is_deleted:
        raise StateConflict("The appointment is already active.")
    appointment.is_deleted = False
    await flush(db, f"Failed restoring appointment #{appointment_id}")
    return await _reload(db, appointment_id)

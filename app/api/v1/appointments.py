"""Appointment API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Query, status

from app.api.deps import DbSession, SiteConfig
from app.models import Appointment
from app.schemas.appointment import (
    AppointmentFilters,
    AppointmentPage,
    AppointmentPayload,
    AppointmentResponse,
)
from app.services import appointment as appointment_service

router = APIRouter(prefix="/appointments", tags=["appointments"])


@router.get(
    "",
    response_model=AppointmentPage,
    summary="List appointments",
)
async def list_appointments(
    db: DbSession,
    config: SiteConfig,
    filters: Annotated[AppointmentFilters, Query()],
) -> dict:
    """Paginated appointments; naive date filters are read in the site time zone."""
    return await appointment_service.paginate_appointments(db, filters, config)


@router.post(
    "",
    response_model=AppointmentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an appointment",
)
async def create_appointment(
    appointment_data: AppointmentPayload, db: DbSession, config: SiteConfig
) -> Appointment:
    """Book an appointment; date and times are site local wall-clock values."""
    appointment = await appointment_service.create_appointment(db, appointment_data, config)
    await db.commit()
    return appointment


@router.get(
    "/{appointment_id}",
    response_model=AppointmentResponse,
    summary="Get appointment by ID",
)
async def get_appointment(appointment_id: int, db: DbSession) -> Appointment:
    return await appointment_service.get_appointment(db, appointment_id)


@router.put(
    "/{appointment_id}",
    response_model=AppointmentResponse,
    summary="Update appointment",
)
async def update_appointment(
    appointment_id: int,
    appointment_data: AppointmentPayload,
    db: DbSession,
    config: SiteConfig,
) -> Appointment:
    appointment = await appointment_service.update_appointment(
        db, appointment_id, appointment_data, config
    )
    await db.commit()
    return appointment


@router.delete(
    "/{appointment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete appointment",
)
async def delete_appointment(appointment_id: int, db: DbSession) -> None:
    await appointment_service.delete_appointment(db, appointment_id)
    await db.commit()


@router.post(
    "/{appointment_id}/restore",
    response_model=AppointmentResponse,
    summary="Restore appointment",
)
async def restore_appointment(appointment_id: int, db: DbSession) -> Appointment:
    appointment = await appointment_service.restore_appointment(db, appointment_id)
    await db.commit()
    return appointment

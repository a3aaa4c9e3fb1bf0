"""Service catalogue - business logic for bookable services."""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import Service
from app.schemas.service import ServicePayload
from app.services.errors import MissingName, ServiceNotFound, StateConflict
from app.services.repository import apply_deleted_filter, flush

logger = logging.getLogger(__name__)


async def find_service(
    db: AsyncSession, service_id: int, include_deleted: bool = False
) -> Service | None:
    """Get service by ID, None when missing."""
    query = apply_deleted_filter(
        select(Service).where(Service.id == service_id), Service, include_deleted
    )
    result = await db.execute(query)
    return result.scalar_one_or_none()


async def get_service(db: AsyncSession, service_id: int) -> Service:
    """Get an active service or raise ServiceNotFound."""
    service = await find_service(db, service_id)
    if service is None:
        raise ServiceNotFound()
    return service


async def list_services(
    db: AsyncSession, include_deleted: bool = False, only_deleted: bool = False
) -> list[Service]:
    """List services ordered by name."""
    query = apply_deleted_filter(select(Service), Service, include_deleted, only_deleted)
    result = await db.execute(query.order_by(func.lower(Service.name), Service.id))
    return list(result.scalars().all())


async def create_service(db: AsyncSession, service_data: ServicePayload) -> Service:
    """Create a new service."""
    name = service_data.name.strip()
    if not name:
        raise MissingName("Service name is required.")

    service = Service(**service_data.model_dump(exclude={"name"}), name=name)
    db.add(service)
    await flush(db, "Failed creating service")
    await db.refresh(service)
    logger.info(f"Service #{service.id} '{service.name}' created")
    return service


async def update_service(
    db: AsyncSession, service_id: int, service_data: ServicePayload
) -> Service:
    """Update a service."""
    service = await get_service(db, service_id)
    update_dict = service_data.model_dump(exclude_unset=True)
    if "name" in update_dict:
        update_dict["name"] = update_dict["name"].strip()
        if not update_dict["name"]:
            raise MissingName("Service name is required.")

    for key, value in update_dict.items():
        setattr(service, key, value)
    await flush(db, f"Failed updating service #{service_id}")
    await db.refresh(service)
    return service


async def delete_service(db: AsyncSession, service_id: int) -> None:
    """Soft delete a service."""
    service = await get_service(db, service_id)
    service.is_deleted = True
    await flush(db, f"Failed deleting service #{service_id}")


async def restore_service(db: AsyncSession, service_id: int) -> Service:
    """Restore a soft-deleted service."""
    service = await find_service(db, service_id, include_deleted=True)
    if service is None:
        raise ServiceNotFound()
    if not service.is_deleted:
        raise StateConflict("The service is already active.")
    service.is_deleted = False
    await flush(db, f"Failed restoring service #{service_id}")
    await db.refresh(service)
    return service

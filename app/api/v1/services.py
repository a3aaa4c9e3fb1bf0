"""Service catalogue API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from app.api.deps import DbSession, DeletedFilter
from app.models import Service
from app.schemas.service import ServicePayload, ServiceResponse
from app.services import service as service_service

router = APIRouter(prefix="/services", tags=["services"])


@router.get(
    "",
    response_model=list[ServiceResponse],
    summary="List services",
)
async def list_services(
    db: DbSession,
    deleted: Annotated[DeletedFilter, Depends()],
) -> list[Service]:
    return await service_service.list_services(
        db, include_deleted=deleted.include_deleted, only_deleted=deleted.only_deleted
    )


@router.post(
    "",
    response_model=ServiceResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a service",
)
async def create_service(service_data: ServicePayload, db: DbSession) -> Service:
    service = await service_service.create_service(db, service_data)
    await db.commit()
    return service


@router.get(
    "/{service_id}",
    response_model=ServiceResponse,
    summary="Get service by ID",
)
async def get_service(service_id: int, db: DbSession) -> Service:
    return await service_service.get_service(db, service_id)


@router.patch(
    "/{service_id}",
    response_model=ServiceResponse,
    summary="Update service",
)
async def update_service(service_id: int, service_data: ServicePayload, db: DbSession) -> Service:
    """Update the fields that were sent."""
    service = await service_service.update_service(db, service_id, service_data)
    await db.commit()
    return service


@router.delete(
    "/{service_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete service",
)
async def delete_service(service_id: int, db: DbSession) -> None:
    await service_service.delete_service(db, service_id)
    await db.commit()


@router.post(
    "/{service_id}/restore",
    response_model=ServiceResponse,
    summary="Restore service",
)
async def restore_service(service_id: int, db: DbSession) -> Service:
    service = await service_service.restore_service(db, service_id)
    await db.commit()
    return service

"""Employee API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from app.api.deps import DbSession, DeletedFilter
from app.models import Employee, EmployeeCategory
from app.schemas.employee import EmployeeCategoryResponse, EmployeePayload, EmployeeResponse
from app.services import employee as employee_service

router = APIRouter(prefix="/employees", tags=["employees"])


@router.get(
    "",
    response_model=list[EmployeeResponse],
    summary="List employees",
)
async def list_employees(
    db: DbSession,
    deleted: Annotated[DeletedFilter, Depends()],
    location_id: Annotated[int | None, Query(description="Only employees of this location")] = None,
) -> list[Employee]:
    """List employees sorted by name, with locations, services and schedule."""
    return await employee_service.list_employees(
        db,
        include_deleted=deleted.include_deleted,
        only_deleted=deleted.only_deleted,
        location_id=location_id,
    )


@router.get(
    "/categories",
    response_model=list[EmployeeCategoryResponse],
    summary="List employee categories",
)
async def list_categories(db: DbSession) -> list[EmployeeCategory]:
    return await employee_service.list_categories(db)


@router.post(
    "",
    response_model=EmployeeResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an employee",
)
async def create_employee(employee_data: EmployeePayload, db: DbSession) -> Employee:
    """Create an employee with schedule, locations and services."""
    employee = await employee_service.create_employee(db, employee_data)
    await db.commit()
    return employee


@router.get(
    "/{employee_id}",
    response_model=EmployeeResponse,
    summary="Get employee by ID",
)
async def get_employee(employee_id: int, db: DbSession) -> Employee:
    return await employee_service.get_employee(db, employee_id)


@router.put(
    "/{employee_id}",
    response_model=EmployeeResponse,
    summary="Update employee",
)
async def update_employee(
    employee_id: int, employee_data: EmployeePayload, db: DbSession
) -> Employee:
    """Update an employee; omitted relation fields are left as they are."""
    employee = await employee_service.update_employee(db, employee_id, employee_data)
    await db.commit()
    return employee


@router.delete(
    "/{employee_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete employee",
)
async def delete_employee(employee_id: int, db: DbSession) -> None:
    await employee_service.delete_employee(db, employee_id)
    await db.commit()


@router.post(
    "/{employee_id}/restore",
    response_model=EmployeeResponse,
    summary="Restore employee",
)
async def restore_employee(employee_id: int, db: DbSession) -> Employee:
    employee = await employee_service.restore_employee(db, employee_id)
    await db.commit()
    return employee

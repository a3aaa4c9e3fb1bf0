"""Customer API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Query, status

from app.api.deps import DbSession
from app.models import Customer
from app.schemas.customer import CustomerPayload, CustomerResponse
from app.services import customer as customer_service

router = APIRouter(prefix="/customers", tags=["customers"])


@router.get(
    "",
    response_model=list[CustomerResponse],
    summary="List customers",
)
async def list_customers(
    db: DbSession,
    search: Annotated[str | None, Query(description="Name or email fragment")] = None,
) -> list[Customer]:
    return await customer_service.list_customers(db, search=search)


@router.post(
    "",
    response_model=CustomerResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a customer",
)
async def create_customer(customer_data: CustomerPayload, db: DbSession) -> Customer:
    customer = await customer_service.create_customer(db, customer_data)
    await db.commit()
    return customer


@router.get(
    "/{customer_id}",
    response_model=CustomerResponse,
    summary="Get customer by ID",
)
async def get_customer(customer_id: int, db: DbSession) -> Customer:
    return await customer_service.get_customer(db, customer_id)


@router.delete(
    "/{customer_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete customer",
)
async def delete_customer(customer_id: int, db: DbSession) -> None:
    await customer_service.delete_customer(db, customer_id)
    await db.commit()

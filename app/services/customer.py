"""Customer service - business logic for customer management."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import Customer
from app.schemas.customer import CustomerPayload
from app.services.errors import CustomerNotFound, InvalidEmail, MissingName
from app.services.location import is_valid_email
from app.services.repository import apply_deleted_filter, flush


async def find_customer(
    db: AsyncSession, customer_id: int, include_deleted: bool = False
) -> Customer | None:
    """Get customer by ID, None when missing."""
    query = apply_deleted_filter(
        select(Customer).where(Customer.id == customer_id), Customer, include_deleted
    )
    result = await db.execute(query)
    return result.scalar_one_or_none()


async def get_customer(db: AsyncSession, customer_id: int) -> Customer:
    """Get customer or raise CustomerNotFound."""
    customer = await find_customer(db, customer_id)
    if customer is None:
        raise CustomerNotFound()
    return customer


async def list_customers(
    db: AsyncSession, search: str | None = None, include_deleted: bool = False
) -> list[Customer]:
    """List customers, optionally matching a name or email fragment."""
    query = apply_deleted_filter(select(Customer), Customer, include_deleted)
    if search:
        like = f"%{search.strip()}%"
        query = query.where(
            Customer.name.ilike(like)
            | Customer.first_name.ilike(like)
            | Customer.last_name.ilike(like)
            | Customer.email.ilike(like)
        )
    result = await db.execute(query.order_by(func.lower(Customer.name), Customer.id))
    return list(result.scalars().all())


async def create_customer(db: AsyncSession, customer_data: CustomerPayload) -> Customer:
    """Create a new customer."""
    name = customer_data.name.strip()
    if not name:
        name = " ".join(
            part.strip() for part in (customer_data.first_name, customer_data.last_name) if part
        )
    if not name:
        raise MissingName("Customer name is required.")

    email = (customer_data.email or "").strip() or None
    if email and not is_valid_email(email):
        raise InvalidEmail()

    customer = Customer(
        name=name,
        first_name=customer_data.first_name,
        last_name=customer_data.last_name,
        phone=customer_data.phone,
        email=email,
    )
    db.add(customer)
    await flush(db, "Failed creating customer")
    await db.refresh(customer)
    return customer


async def delete_customer(db: AsyncSession, customer_id: int) -> None:
    """Soft delete a customer; appointments keep their contact snapshot."""
    customer = await get_customer(db, customer_id)
    customer.is_deleted = True
    await flush(db, f"Failed deleting customer #{customer_id}")

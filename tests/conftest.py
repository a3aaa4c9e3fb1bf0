"""Pytest configuration and fixtures.

Tests run against an in-memory SQLite database through aiosqlite; tables are
created and dropped around every test.
"""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.config import SchedulingConfig
from app.database import get_db
from app.main import app
from app.models import (
    Base,
    BusinessHour,
    Customer,
    Employee,
    EmployeeServiceAssignment,
    Location,
    Service,
)

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture(scope="function")
async def db_engine():
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def session_factory(db_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        db_engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )


@pytest_asyncio.fixture(scope="function")
async def db(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client bound to the test database."""

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def config() -> SchedulingConfig:
    """Site scheduling config used by the tests."""
    return SchedulingConfig(default_timezone="Europe/Budapest", time_slot_length=30)


@pytest_asyncio.fixture
async def location(db: AsyncSession) -> Location:
    """Create test location."""
    loc = Location(
        name="HQ",
        address="1 Andrássy út, Budapest",
        timezone="Europe/Budapest",
    )
    db.add(loc)
    await db.flush()
    return loc


@pytest_asyncio.fixture
async def location2(db: AsyncSession) -> Location:
    """Create second test location."""
    loc = Location(name="Branch", timezone="Europe/Budapest")
    db.add(loc)
    await db.flush()
    return loc


@pytest_asyncio.fixture
async def monday_hours(db: AsyncSession, location: Location) -> list[BusinessHour]:
    """Monday 09:00-17:00, every other day closed."""
    rows = [
        BusinessHour(
            location_id=location.id,
            day_of_week=1,
            open_time="09:00:00",
            close_time="17:00:00",
            is_closed=False,
        )
    ]
    rows += [
        BusinessHour(location_id=location.id, day_of_week=day, is_closed=True)
        for day in range(2, 8)
    ]
    db.add_all(rows)
    await db.flush()
    return rows


@pytest_asyncio.fixture
async def service(db: AsyncSession) -> Service:
    """Create test service."""
    s = Service(name="Consultation", duration_minutes=30, price=12000)
    db.add(s)
    await db.flush()
    return s


@pytest_asyncio.fixture
async def customer(db: AsyncSession) -> Customer:
    """Create test customer."""
    c = Customer(
        name="Acme",
        first_name="Alex",
        last_name="Smith",
        email="alex@example.com",
        phone="+361234567",
    )
    db.add(c)
    await db.flush()
    return c


@pytest_asyncio.fixture
async def employee(db: AsyncSession, location: Location, service: Service) -> Employee:
    """Create test employee working at the test location."""
    e = Employee(
        name="Eva",
        email="eva@example.com",
        categories=[],
        locations=[location],
        service_assignments=[EmployeeServiceAssignment(service_id=service.id, order=1)],
        schedule_days=[],
    )
    db.add(e)
    await db.flush()
    return e


@pytest_asyncio.fixture
async def employee2(db: AsyncSession, location2: Location) -> Employee:
    """Create employee working at the second location only."""
    e = Employee(
        name="Bence",
        categories=[],
        locations=[location2],
        service_assignments=[],
        schedule_days=[],
    )
    db.add(e)
    await db.flush()
    return e

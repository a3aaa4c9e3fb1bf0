"""Seed demo data for local calendar testing.

This script creates:
- A location with Monday-Friday business hours
- A service
- An employee working at the location with a weekly schedule
- A customer and a few appointments for today

Run this after creating the database schema with Alembic.

Usage:
    python scripts/seed_test_data.py
    python scripts/seed_test_data.py --date 2025-05-05
"""

import argparse
import asyncio
import sys
from datetime import date
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy.exc import SQLAlchemyError

from app.config import get_settings
from app.database import async_session_maker
from app.schemas.appointment import AppointmentPayload
from app.schemas.customer import CustomerPayload
from app.schemas.employee import EmployeePayload, ScheduleDayInput, ServiceAssignmentInput
from app.schemas.location import LocationPayload
from app.schemas.service import ServicePayload
from app.services import appointment as appointment_service
from app.services import business_hours as business_hours_service
from app.services import calendar as calendar_service
from app.services import customer as customer_service
from app.services import employee as employee_service
from app.services import location as location_service
from app.services import service as service_service
from app.services.errors import BookingError

TEST_LOCATION_NAME = "Demo Studio"
TEST_SERVICE_NAME = "Haircut"
TEST_EMPLOYEE_NAME = "Eva Kovács"
TEST_CUSTOMER_EMAIL = "demo.customer@example.com"

WEEKDAY_HOURS = {day: {"open": "09:00", "close": "17:00"} for day in range(1, 6)}


async def seed_data(day: date) -> None:
    """Seed demo data and print the resulting daily schedule."""
    config = get_settings().scheduling_config()
    async with async_session_maker() as db:
        try:
            print("Starting demo data seeding...")
            print("=" * 80)

            locations = await location_service.list_locations(db)
            location = next((l for l in locations if l.name == TEST_LOCATION_NAME), None)
            if location:
                print(f"Location already exists: {location.name} (ID: {location.id})")
            else:
                location = await location_service.create_location(
                    db, LocationPayload(name=TEST_LOCATION_NAME, timezone=config.default_timezone)
                )
                await business_hours_service.save_location_hours(db, location.id, WEEKDAY_HOURS)
                print(f"  Created location: {location.name} (ID: {location.id})")

            services = await service_service.list_services(db)
            service = next((s for s in services if s.name == TEST_SERVICE_NAME), None)
            if service:
                print(f"Service already exists: {service.name} (ID: {service.id})")
            else:
                service = await service_service.create_service(
                    db, ServicePayload(name=TEST_SERVICE_NAME, duration_minutes=30, price=8000)
                )
                print(f"  Created service: {service.name} (ID: {service.id})")

            employees = await employee_service.list_employees(db, location_id=location.id)
            employee = next((e for e in employees if e.name == TEST_EMPLOYEE_NAME), None)
            if employee:
                print(f"Employee already exists: {employee.name} (ID: {employee.id})")
            else:
                employee = await employee_service.create_employee(
                    db,
                    EmployeePayload(
                        name=TEST_EMPLOYEE_NAME,
                        available_online=True,
                        location_ids=[location.id],
                        services=[ServiceAssignmentInput(service_id=service.id, order=1)],
                        schedule={
                            day_of_week: ScheduleDayInput(start_time="09:00", end_time="17:00")
                            for day_of_week in range(1, 6)
                        },
                    ),
                )
                print(f"  Created employee: {employee.name} (ID: {employee.id})")

            customers = await customer_service.list_customers(db, search=TEST_CUSTOMER_EMAIL)
            customer = customers[0] if customers else None
            if customer:
                print(f"Customer already exists: {customer.name} (ID: {customer.id})")
            else:
                customer = await customer_service.create_customer(
                    db,
                    CustomerPayload(
                        first_name="Demo", last_name="Customer", email=TEST_CUSTOMER_EMAIL
                    ),
                )
                print(f"  Created customer: {customer.name} (ID: {customer.id})")

            for start, end in (("09:00", "09:30"), ("11:00", "11:30"), ("14:30", "15:00")):
                appointment = await appointment_service.create_appointment(
                    db,
                    AppointmentPayload(
                        provider_id=employee.id,
                        service_id=service.id,
                        customer_id=customer.id,
                        appointment_date=day.isoformat(),
                        appointment_start=start,
                        appointment_end=end,
                        status="confirmed",
                    ),
                    config,
                )
                print(f"  Booked appointment #{appointment.id} {start}-{end}")

            await db.commit()

            schedule = await calendar_service.get_daily_schedule(db, location.id, day, config)

            print("\n" + "=" * 80)
            print("Demo data seeding complete!")
            print("=" * 80)
            print(f"\nSchedule for {location.name} on {day.isoformat()} ({schedule.timezone}):")
            status = "closed" if schedule.is_closed else "open"
            print(f"  {status} {schedule.open:%H:%M}-{schedule.close:%H:%M}, {len(schedule.slots)} slots")
            for appointment in schedule.appointments:
                start = appointment.scheduled_start.astimezone(schedule.open.tzinfo)
                print(f"  {start:%H:%M} {appointment.employee_name}: {appointment.service_name}")

        except (BookingError, SQLAlchemyError) as e:
            print(f"\nError seeding data: {e}")
            await db.rollback()
            sys.exit(1)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed demo data for the calendar")
    parser.add_argument(
        "--date",
        type=date.fromisoformat,
        default=date.today(),
        help="Day to book the demo appointments on (YYYY-MM-DD)",
    )

    args = parser.parse_args()
    asyncio.run(seed_data(args.date))

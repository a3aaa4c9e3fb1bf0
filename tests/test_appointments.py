"""Tests for the appointment service."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest
from sqlalchemy import func, select

from app.models import Appointment
from app.schemas.appointment import AppointmentFilters, AppointmentPayload
from app.services import appointment as appointment_service
from app.services.errors import (
    AppointmentNotFound,
    InvalidAppointmentSchedule,
    InvalidCustomer,
    InvalidEmail,
    InvalidPeriod,
    InvalidProvider,
    InvalidService,
    StateConflict,
)

pytestmark = pytest.mark.asyncio


def _payload(employee, service, **overrides) -> AppointmentPayload:
    data = {
        "provider_id": employee.id,
        "service_id": service.id,
        "appointment_date": "2025-05-05",
        "appointment_start": "10:00",
        "appointment_end": "10:30",
    }
    data.update(overrides)
    return AppointmentPayload(**data)


async def _count(db) -> int:
    return (await db.execute(select(func.count(Appointment.id)))).scalar_one()


class TestNormalization:
    async def test_status(self):
        assert appointment_service.normalize_status("confirmed") == "confirmed"
        assert appointment_service.normalize_status("Completed") == "completed"
        assert appointment_service.normalize_status("bogus") == "pending"
        assert appointment_service.normalize_status(None) == "pending"

    async def test_payment_status(self):
        assert appointment_service.normalize_payment_status("paid") == "paid"
        assert appointment_service.normalize_payment_status("bogus") is None
        assert appointment_service.normalize_payment_status(None) is None

    async def test_combine_datetimes_in_zone(self):
        start, end = appointment_service.combine_datetimes(
            "2025-05-05", "10:00", "10:30", "Europe/Budapest"
        )
        assert start.astimezone(timezone.utc) == datetime(2025, 5, 5, 8, 0, tzinfo=timezone.utc)
        assert end.astimezone(timezone.utc) == datetime(2025, 5, 5, 8, 30, tzinfo=timezone.utc)

    async def test_combine_datetimes_requires_all_parts(self):
        with pytest.raises(InvalidAppointmentSchedule):
            appointment_service.combine_datetimes("2025-05-05", "", "10:30", "UTC")

    async def test_combine_datetimes_rejects_garbage(self):
        with pytest.raises(InvalidAppointmentSchedule):
            appointment_service.combine_datetimes("05/05/2025", "10:00", "10:30", "UTC")


class TestCreateAppointment:
    """Validation and creation."""

    async def test_create(self, db, employee, service, customer, config):
        appointment = await appointment_service.create_appointment(
            db,
            _payload(
                employee,
                service,
                customer_id=customer.id,
                status="confirmed",
                payment_status="weird",
                customer_email="alex@example.com",
            ),
            config,
        )

        assert appointment.id is not None
        assert appointment.employee_name == "Eva"
        assert appointment.service_name == "Consultation"
        assert appointment.customer_name == "Alex Smith"
        assert appointment.status == "confirmed"
        assert appointment.payment_status is None
        assert appointment.currency == "HUF"
        assert appointment.scheduled_start == datetime(2025, 5, 5, 8, 0, tzinfo=timezone.utc)
        assert appointment.scheduled_end > appointment.scheduled_start

    async def test_end_before_start(self, db, employee, service, config):
        with pytest.raises(InvalidPeriod):
            await appointment_service.create_appointment(
                db,
                _payload(employee, service, appointment_start="10:00", appointment_end="09:00"),
                config,
            )
        assert await _count(db) == 0

    async def test_end_equal_to_start(self, db, employee, service, config):
        with pytest.raises(InvalidPeriod):
            await appointment_service.create_appointment(
                db,
                _payload(employee, service, appointment_start="10:00", appointment_end="10:00"),
                config,
            )
        assert await _count(db) == 0

    async def test_missing_provider(self, db, employee, service, config):
        with pytest.raises(InvalidProvider):
            await appointment_service.create_appointment(
                db, _payload(employee, service, provider_id=None), config
            )

    async def test_unknown_provider(self, db, employee, service, config):
        with pytest.raises(InvalidProvider):
            await appointment_service.create_appointment(
                db, _payload(employee, service, provider_id=999), config
            )

    async def test_unknown_service(self, db, employee, service, config):
        with pytest.raises(InvalidService):
            await appointment_service.create_appointment(
                db, _payload(employee, service, service_id=999), config
            )

    async def test_invalid_email(self, db, employee, service, config):
        with pytest.raises(InvalidEmail):
            await appointment_service.create_appointment(
                db, _payload(employee, service, customer_email="nope"), config
            )

    async def test_unknown_customer(self, db, employee, service, config):
        with pytest.raises(InvalidCustomer):
            await appointment_service.create_appointment(
                db, _payload(employee, service, customer_id=999), config
            )


class TestUpdateAppointment:
    async def test_unspecified_fields_are_kept(self, db, employee, service, config):
        created = await appointment_service.create_appointment(
            db,
            _payload(employee, service, status="confirmed", notes="Bring forms", total_amount=12000),
            config,
        )

        updated = await appointment_service.update_appointment(
            db,
            created.id,
            AppointmentPayload(
                appointment_date="2025-05-06",
                appointment_start="14:00",
                appointment_end="15:00",
            ),
            config,
        )

        assert updated.employee_id == employee.id
        assert updated.status == "confirmed"
        assert updated.notes == "Bring forms"
        assert updated.total_amount == 12000
        assert updated.scheduled_start == datetime(2025, 5, 6, 12, 0, tzinfo=timezone.utc)

    async def test_update_rejects_bad_period(self, db, employee, service, config):
        created = await appointment_service.create_appointment(
            db, _payload(employee, service), config
        )

        with pytest.raises(InvalidPeriod):
            await appointment_service.update_appointment(
                db,
                created.id,
                _payload(employee, service, appointment_start="12:00", appointment_end="11:00"),
                config,
            )

    async def test_update_missing(self, db, employee, service, config):
        with pytest.raises(AppointmentNotFound):
            await appointment_service.update_appointment(
                db, 999, _payload(employee, service), config
            )


class TestDeleteRestore:
    async def test_delete_and_restore(self, db, employee, service, config):
        created = await appointment_service.create_appointment(
            db, _payload(employee, service), config
        )

        await appointment_service.delete_appointment(db, created.id)
        deleted = await appointment_service.get_appointment(db, created.id)
        assert deleted.is_deleted is True

        restored = await appointment_service.restore_appointment(db, created.id)
        assert restored.is_deleted is False

    async def test_restore_active(self, db, employee, service, config):
        created = await appointment_service.create_appointment(
            db, _payload(employee, service), config
        )
        with pytest.raises(StateConflict):
            await appointment_service.restore_appointment(db, created.id)

    async def test_missing(self, db):
        with pytest.raises(AppointmentNotFound):
            await appointment_service.delete_appointment(db, 999)
        with pytest.raises(AppointmentNotFound):
            await appointment_service.restore_appointment(db, 999)


class TestRangeQueries:
    async def test_no_employees_skips_storage(self):
        db = AsyncMock()

        result = await appointment_service.get_appointments_for_employees(
            db,
            [],
            datetime(2025, 5, 1, tzinfo=timezone.utc),
            datetime(2025, 5, 31, tzinfo=timezone.utc),
        )

        assert result == []
        db.execute.assert_not_called()

    async def test_window_and_employee_filter(
        self, db, employee, employee2, service, config
    ):
        inside = await appointment_service.create_appointment(
            db, _payload(employee, service), config
        )
        await appointment_service.create_appointment(
            db, _payload(employee, service, appointment_date="2025-06-20"), config
        )
        await appointment_service.create_appointment(
            db, _payload(employee2, service), config
        )

        result = await appointment_service.get_appointments_for_employees(
            db,
            [employee.id],
            datetime(2025, 5, 1, tzinfo=timezone.utc),
            datetime(2025, 5, 31, tzinfo=timezone.utc),
        )

        assert [a.id for a in result] == [inside.id]

    async def test_deleted_appointments_are_excluded(self, db, employee, service, config):
        created = await appointment_service.create_appointment(
            db, _payload(employee, service), config
        )
        await appointment_service.delete_appointment(db, created.id)

        result = await appointment_service.get_appointments_for_employees(
            db,
            [employee.id],
            datetime(2025, 5, 1, tzinfo=timezone.utc),
            datetime(2025, 5, 31, tzinfo=timezone.utc),
        )
        assert result == []


class TestPaginate:
    async def test_defaults_newest_first(self, db, employee, service, config):
        for day in ("2025-05-05", "2025-05-07", "2025-05-06"):
            await appointment_service.create_appointment(
                db, _payload(employee, service, appointment_date=day), config
            )

        page = await appointment_service.paginate_appointments(db, AppointmentFilters(), config)

        assert page["total"] == 3
        assert page["page"] == 1
        assert page["per_page"] == 20
        starts = [a.scheduled_start.day for a in page["appointments"]]
        assert starts == [7, 6, 5]

    async def test_page_size(self, db, employee, service, config):
        for day in ("2025-05-05", "2025-05-06", "2025-05-07"):
            await appointment_service.create_appointment(
                db, _payload(employee, service, appointment_date=day), config
            )

        page = await appointment_service.paginate_appointments(
            db, AppointmentFilters(page=2, per_page=2, order="asc"), config
        )

        assert page["total"] == 3
        assert [a.scheduled_start.day for a in page["appointments"]] == [7]

    async def test_customer_search(self, db, employee, service, customer, config):
        match = await appointment_service.create_appointment(
            db, _payload(employee, service, customer_id=customer.id), config
        )
        await appointment_service.create_appointment(db, _payload(employee, service), config)

        page = await appointment_service.paginate_appointments(
            db, AppointmentFilters(customer_search="smi"), config
        )

        assert [a.id for a in page["appointments"]] == [match.id]

    async def test_date_filters_use_site_zone(self, db, employee, service, config):
        early = await appointment_service.create_appointment(
            db, _payload(employee, service, appointment_start="00:30", appointment_end="01:00"), config
        )

        page = await appointment_service.paginate_appointments(
            db,
            AppointmentFilters(
                appointment_from=datetime(2025, 5, 5, 0, 0),
                appointment_to=datetime(2025, 5, 5, 23, 59, 59),
            ),
            config,
        )

        assert [a.id for a in page["appointments"]] == [early.id]

    async def test_deleted_only(self, db, employee, service, config):
        created = await appointment_service.create_appointment(
            db, _payload(employee, service), config
        )
        await appointment_service.create_appointment(
            db, _payload(employee, service, appointment_date="2025-05-06"), config
        )
        await appointment_service.delete_appointment(db, created.id)

        page = await appointment_service.paginate_appointments(
            db, AppointmentFilters(only_deleted=True), config
        )

        assert [a.id for a in page["appointments"]] == [created.id]

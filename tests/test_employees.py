"""Tests for the employee service."""

import pytest

from app.schemas.employee import (
    BreakInput,
    EmployeePayload,
    ScheduleDayInput,
    ServiceAssignmentInput,
)
from app.services import employee as employee_service
from app.services.errors import (
    EmployeeNotFound,
    InvalidCategory,
    InvalidEmail,
    InvalidLocation,
    InvalidPrice,
    InvalidSchedule,
    InvalidScheduleBreak,
    InvalidService,
    InvalidVisibility,
    MissingName,
    StateConflict,
)

pytestmark = pytest.mark.asyncio


def _day(start: str | None, end: str | None, *breaks: tuple[str, str]) -> ScheduleDayInput:
    return ScheduleDayInput(
        start_time=start,
        end_time=end,
        breaks=[BreakInput(start_time=s, end_time=e) for s, e in breaks],
    )


class TestValidateSchedule:
    """Weekly working schedule rules."""

    async def test_break_inside_working_hours(self):
        days = employee_service.validate_schedule({1: _day("09:00", "17:00", ("12:00", "13:00"))})

        monday = days[0]
        assert monday["is_off"] is False
        assert monday["start_time"] == "09:00"
        assert monday["breaks"] == [("12:00", "13:00")]

    async def test_break_starting_before_work(self):
        with pytest.raises(InvalidScheduleBreak):
            employee_service.validate_schedule({1: _day("09:00", "17:00", ("08:00", "09:30"))})

    async def test_break_ending_after_work(self):
        with pytest.raises(InvalidScheduleBreak):
            employee_service.validate_schedule({1: _day("09:00", "17:00", ("16:30", "17:30"))})

    async def test_break_end_before_start(self):
        with pytest.raises(InvalidScheduleBreak):
            employee_service.validate_schedule({1: _day("09:00", "17:00", ("13:00", "12:00"))})

    async def test_missing_days_are_off(self):
        days = employee_service.validate_schedule({})
        assert len(days) == 7
        assert all(day["is_off"] for day in days)

    async def test_end_before_start(self):
        with pytest.raises(InvalidSchedule):
            employee_service.validate_schedule({2: _day("17:00", "09:00")})

    async def test_malformed_time(self):
        with pytest.raises(InvalidSchedule):
            employee_service.validate_schedule({2: _day("9am", "17:00")})

    async def test_breaks_without_hours(self):
        with pytest.raises(InvalidSchedule):
            employee_service.validate_schedule({2: _day(None, None, ("12:00", "13:00"))})

    async def test_unknown_day(self):
        with pytest.raises(InvalidSchedule):
            employee_service.validate_schedule({8: _day("09:00", "17:00")})


class TestValidateEmployeeData:
    async def test_name_required(self):
        with pytest.raises(MissingName):
            employee_service.validate_employee_data(EmployeePayload(name=" "))

    async def test_invalid_email(self):
        with pytest.raises(InvalidEmail):
            employee_service.validate_employee_data(EmployeePayload(name="Eva", email="eva@"))

    async def test_invalid_visibility(self):
        with pytest.raises(InvalidVisibility):
            employee_service.validate_employee_data(EmployeePayload(name="Eva", visibility="hidden"))

    async def test_price_parsing(self):
        assert employee_service.parse_price(None) is None
        assert employee_service.parse_price("") is None
        assert employee_service.parse_price("12,5") == 12.5
        assert employee_service.parse_price(3000) == 3000.0
        with pytest.raises(InvalidPrice):
            employee_service.parse_price("free")
        with pytest.raises(InvalidPrice):
            employee_service.parse_price(-1)


class TestEmployeeLifecycle:
    """Create, update, list, delete and restore."""

    async def test_create_with_relations(self, db, location, service):
        employee = await employee_service.create_employee(
            db,
            EmployeePayload(
                name="Anna",
                email="anna@example.com",
                location_ids=[location.id],
                services=[ServiceAssignmentInput(service_id=service.id, order=2, price="9000")],
                schedule={1: _day("09:00", "17:00", ("12:00", "13:00"))},
            ),
        )

        assert employee.location_ids == [location.id]
        assert [(a.service_id, a.order, a.price) for a in employee.service_assignments] == [
            (service.id, 2, 9000.0)
        ]
        assert len(employee.schedule_days) == 7
        monday = employee.schedule_days[0]
        assert (monday.start_time, monday.end_time, monday.is_off) == ("09:00", "17:00", False)
        assert [(b.start_time, b.end_time) for b in monday.breaks] == [("12:00", "13:00")]
        assert employee.schedule_days[6].is_off is True

    async def test_unknown_location(self, db):
        with pytest.raises(InvalidLocation):
            await employee_service.create_employee(
                db, EmployeePayload(name="Anna", location_ids=[404])
            )

    async def test_unknown_service(self, db, location):
        with pytest.raises(InvalidService):
            await employee_service.create_employee(
                db,
                EmployeePayload(
                    name="Anna",
                    location_ids=[location.id],
                    services=[ServiceAssignmentInput(service_id=404)],
                ),
            )
        assert await employee_service.list_employees(db) == []

    async def test_invalid_break_writes_nothing(self, db, location):
        with pytest.raises(InvalidScheduleBreak):
            await employee_service.create_employee(
                db,
                EmployeePayload(
                    name="Anna",
                    location_ids=[location.id],
                    schedule={1: _day("09:00", "17:00", ("08:00", "09:30"))},
                ),
            )
        assert await employee_service.list_employees(db) == []

    async def test_update_replaces_schedule(self, db, location):
        employee = await employee_service.create_employee(
            db,
            EmployeePayload(
                name="Anna",
                location_ids=[location.id],
                schedule={1: _day("09:00", "17:00", ("12:00", "13:00"))},
            ),
        )

        updated = await employee_service.update_employee(
            db,
            employee.id,
            EmployeePayload(name="Anna", schedule={2: _day("10:00", "14:00")}),
        )

        assert updated.schedule_days[0].is_off is True
        assert updated.schedule_days[0].breaks == []
        assert (updated.schedule_days[1].start_time, updated.schedule_days[1].end_time) == (
            "10:00",
            "14:00",
        )
        # location_ids not sent: assignments untouched
        assert updated.location_ids == [location.id]

    async def test_update_replaces_locations(self, db, location, location2):
        employee = await employee_service.create_employee(
            db, EmployeePayload(name="Anna", location_ids=[location.id])
        )

        updated = await employee_service.update_employee(
            db, employee.id, EmployeePayload(name="Anna", location_ids=[location2.id])
        )

        assert updated.location_ids == [location2.id]

    async def test_list_sorted_case_insensitively(self, db):
        for name in ("zoltan", "Bela", "anna"):
            await employee_service.create_employee(db, EmployeePayload(name=name))

        employees = await employee_service.list_employees(db)
        assert [e.name for e in employees] == ["anna", "Bela", "zoltan"]

    async def test_list_filtered_by_location(self, db, employee, employee2, location):
        employees = await employee_service.list_employees(db, location_id=location.id)
        assert [e.id for e in employees] == [employee.id]

    async def test_delete_and_restore(self, db, employee):
        await employee_service.delete_employee(db, employee.id)

        with pytest.raises(EmployeeNotFound):
            await employee_service.get_employee(db, employee.id)
        with pytest.raises(StateConflict):
            await employee_service.update_employee(db, employee.id, EmployeePayload(name="X"))

        restored = await employee_service.restore_employee(db, employee.id)
        assert restored.is_deleted is False

    async def test_delete_deleted_employee(self, db, employee):
        await employee_service.delete_employee(db, employee.id)

        with pytest.raises(StateConflict):
            await employee_service.delete_employee(db, employee.id)

    async def test_delete_unknown_employee(self, db):
        with pytest.raises(EmployeeNotFound):
            await employee_service.delete_employee(db, 999)

    async def test_restore_active_employee(self, db, employee):
        with pytest.raises(StateConflict):
            await employee_service.restore_employee(db, employee.id)


class TestCategories:
    async def test_parse_category_names(self):
        names = employee_service.parse_category_names("General; Orthodontist,\ngeneral ,, ")
        assert names == ["General", "Orthodontist"]
        assert employee_service.parse_category_names(None) == []
        assert employee_service.slugify("Fogszabályozó Szakorvos") == "fogszabalyozo-szakorvos"

    async def test_new_categories_are_created_once(self, db):
        first = await employee_service.create_employee(
            db, EmployeePayload(name="Anna", new_categories="General; Orthodontist")
        )
        second = await employee_service.create_employee(
            db, EmployeePayload(name="Bela", new_categories=["general"])
        )

        assert [c.name for c in first.categories] == ["General", "Orthodontist"]
        assert [c.id for c in second.categories] == [first.categories[0].id]
        categories = await employee_service.list_categories(db)
        assert [c.slug for c in categories] == ["general", "orthodontist"]

    async def test_update_replaces_categories(self, db):
        employee = await employee_service.create_employee(
            db, EmployeePayload(name="Anna", new_categories="General, Surgeon")
        )
        surgeon = next(c for c in employee.categories if c.slug == "surgeon")

        updated = await employee_service.update_employee(
            db, employee.id, EmployeePayload(name="Anna", category_ids=[surgeon.id])
        )
        assert [c.id for c in updated.categories] == [surgeon.id]

        kept = await employee_service.update_employee(
            db, employee.id, EmployeePayload(name="Anna Maria")
        )
        assert [c.id for c in kept.categories] == [surgeon.id]

    async def test_unknown_category(self, db):
        with pytest.raises(InvalidCategory):
            await employee_service.create_employee(
                db, EmployeePayload(name="Anna", category_ids=[404])
            )
        assert await employee_service.list_employees(db) == []

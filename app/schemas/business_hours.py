"""Pydantic schemas for business hours and holidays."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field, RootModel


class DayHoursInput(BaseModel):
    """One submitted weekday; blank times with no closed flag mean closed."""

    open: str | None = Field(None, description="Opening time (HH:MM)")
    close: str | None = Field(None, description="Closing time (HH:MM)")
    is_closed: bool = False


class BusinessHoursPayload(RootModel[dict[int, DayHoursInput]]):
    """Weekly template keyed by day of week (1=Monday, 7=Sunday)."""


class DayHours(BaseModel):
    """Stored hours for one weekday."""

    open: str | None
    close: str | None
    is_closed: bool


class DayOption(BaseModel):
    key: str
    label: str


# Holidays
class HolidayPayload(BaseModel):
    """Submitted holiday range."""

    start_date: str = Field("", description="First closed day (YYYY-MM-DD)")
    end_date: str = Field("", description="Last closed day (YYYY-MM-DD)")
    note: str | None = None
    is_recurring: bool = False


class HolidayResponse(BaseModel):
    """Schema for holiday responses."""

    id: int
    location_id: int
    holiday_date: date
    note: str
    is_recurring: bool

    model_config = ConfigDict(from_attributes=True)

"""Pydantic schemas for Location."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


# Payload schema (validated by the location service)
class LocationPayload(BaseModel):
    """Submitted location data; domain rules are checked by the service."""

    name: str = Field("", description="Location name")
    address: str | None = None
    phone: str | None = None
    base_email: str | None = Field(None, description="Base contact email")
    website: str | None = None
    timezone: str | None = Field(None, description="IANA zone (default Europe/Budapest)")
    industry_id: int = Field(0, ge=0, description="Industry option (0 = not specified)")
    is_event_location: bool = False
    company_name: str | None = None
    company_address: str | None = None
    company_phone: str | None = None


# Response schema
class LocationResponse(BaseModel):
    """Schema for location responses."""

    id: int
    name: str
    address: str | None
    phone: str | None
    base_email: str | None
    website: str | None
    timezone: str
    industry_id: int
    is_event_location: bool
    company_name: str | None
    company_address: str | None
    company_phone: str | None
    is_deleted: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class IndustryOption(BaseModel):
    value: int
    label: str


class IndustryGroup(BaseModel):
    label: str
    options: list[IndustryOption]

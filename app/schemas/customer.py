"""Pydantic schemas for Customer."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CustomerPayload(BaseModel):
    """Submitted customer data."""

    name: str = Field("", description="Account / display name")
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    email: str | None = None


class CustomerResponse(BaseModel):
    """Schema for customer responses."""

    id: int
    name: str
    first_name: str | None
    last_name: str | None
    phone: str | None
    email: str | None
    is_deleted: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

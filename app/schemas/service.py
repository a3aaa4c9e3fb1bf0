"""Pydantic schemas for Service."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ServicePayload(BaseModel):
    """Submitted service data."""

    name: str = Field("", description="Service name")
    description: str | None = None
    duration_minutes: int = Field(30, gt=0, description="Duration in minutes")
    price: float | None = Field(None, ge=0)
    background_color: str = "#2c89d9"
    text_color: str = "#ffffff"


class ServiceResponse(BaseModel):
    """Schema for service responses."""

    id: int
    name: str
    description: str | None
    duration_minutes: int
    price: float | None
    background_color: str
    text_color: str
    is_deleted: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


# Simple schema for embedding in other responses
class ServiceSummary(BaseModel):
    """Simplified service for embedding in employee responses."""

    id: int
    name: str
    duration_minutes: int

    model_config = ConfigDict(from_attributes=True)

"""Calendar API endpoints."""

from datetime import date

from fastapi import APIRouter

from app.api.deps import CacheDep, DbSession, SiteConfig
from app.schemas.calendar import DailyScheduleResponse
from app.services import calendar as calendar_service

router = APIRouter(prefix="/calendar", tags=["calendar"])


@router.get(
    "/{location_id}/{day}",
    response_model=DailyScheduleResponse,
    summary="Daily schedule of a location",
)
async def get_daily_schedule(
    location_id: int,
    day: date,
    db: DbSession,
    config: SiteConfig,
    cache: CacheDep,
) -> DailyScheduleResponse:
    """Slots, employees and appointments of a location for one day."""
    schedule = await calendar_service.get_daily_schedule(db, location_id, day, config, cache)
    return DailyScheduleResponse.model_validate(schedule)

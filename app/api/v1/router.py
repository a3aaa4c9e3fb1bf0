"""Main API router for v1 endpoints."""

from fastapi import APIRouter

from app.api.v1 import appointments, calendar, customers, employees, locations, services

router = APIRouter()

# Include all sub-routers
router.include_router(locations.router)
router.include_router(services.router)
router.include_router(customers.router)
router.include_router(employees.router)
router.include_router(appointments.router)
router.include_router(calendar.router)


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok", "message": "Smooth Booking API is running"}

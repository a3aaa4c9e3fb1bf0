"""Business logic services for Smooth Booking."""

# Service modules are imported individually where needed
# to avoid circular imports

__all__ = [
    "location",
    "business_hours",
    "holiday",
    "service",
    "customer",
    "employee",
    "appointment",
    "calendar",
]

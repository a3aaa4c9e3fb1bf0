"""Dependency injection for API endpoints."""

from typing import Annotated

from fastapi import Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import SchedulingConfig, get_settings
from app.database import get_db
from app.services.cache import Cache, get_cache

__all__ = [
    "get_db",
    "AsyncSession",
    "get_scheduling_config",
    "get_cache",
    "DeletedFilter",
    "DbSession",
    "SiteConfig",
    "CacheDep",
]


# Site-wide scheduling values
def get_scheduling_config() -> SchedulingConfig:
    """Scheduling config snapshot from settings."""
    return get_settings().scheduling_config()


DbSession = Annotated[AsyncSession, Depends(get_db)]
SiteConfig = Annotated[SchedulingConfig, Depends(get_scheduling_config)]
CacheDep = Annotated[Cache, Depends(get_cache)]


# Soft-delete filter parameters
class DeletedFilter:
    """include_deleted / only_deleted query parameters."""

    def __init__(
        self,
        include_deleted: Annotated[
            bool, Query(description="Include soft-deleted records")
        ] = False,
        only_deleted: Annotated[bool, Query(description="Only soft-deleted records")] = False,
    ):
        self.include_deleted = include_deleted
        self.only_deleted = only_deleted

"""Query and write helpers shared by the services."""

import logging

from sqlalchemy import Select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.services.errors import PersistenceError

logger = logging.getLogger(__name__)


def apply_deleted_filter(
    query: Select, model, include_deleted: bool = False, only_deleted: bool = False
) -> Select:
    """Restrict a query by the soft-delete flag.

    only_deleted wins over include_deleted; by default deleted rows are hidden.
    """
    if only_deleted:
        return query.where(model.is_deleted.is_(True))
    if include_deleted:
        return query
    return query.where(model.is_deleted.is_(False))


async def flush(db: AsyncSession, context: str) -> None:
    """Flush pending writes, turning database failures into PersistenceError."""
    try:
        await db.flush()
    except SQLAlchemyError as e:
        logger.error(f"{context}: {e}")
        await db.rollback()
        raise PersistenceError() from e

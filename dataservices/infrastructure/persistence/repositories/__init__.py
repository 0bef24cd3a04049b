"""Concrete SQLAlchemy data service and the get_data_service() factory
for wiring at the application boundary.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from dataservices.domain.repositories.base import T
from dataservices.infrastructure.database import Settings, get_settings

from .sql import SqlDataService


def get_data_service(
    session: AsyncSession,
    model: type[T],
    settings: Settings | None = None,
) -> SqlDataService[T]:
    """Construct a data service for model bound to the given session.

    settings.sql_dialect, when set, selects the dialect; otherwise the
    session's engine decides.  Intended for use inside a request handler:

        async def handler(session: AsyncSession = Depends(session_dependency)):
            people = get_data_service(session, Person)
            person = await people.get_by_id(person_id)
    """
    settings = settings or get_settings()
    return SqlDataService(session, model, dialect=settings.sql_dialect)


__all__ = [
    "SqlDataService",
    "get_data_service",
]

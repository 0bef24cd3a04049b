"""SQLAlchemy implementation of DataService."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, TypeVar

from sqlalchemy import Delete, Select, Update
from sqlalchemy.engine import Result
from sqlalchemy.exc import CompileError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.expression import ClauseElement

from dataservices.domain.exceptions import (
    EntityNotFoundError,
    QueryBuildError,
    QueryExecutionError,
)
from dataservices.domain.repositories.base import DataService, T
from dataservices.infrastructure.persistence.dialect import (
    SqlDialect,
    get_dialect,
    statement_kind,
)
from dataservices.infrastructure.persistence.tables import table_for

logger = logging.getLogger(__name__)

_Filtered = TypeVar("_Filtered", Select, Update, Delete)


class SqlDataService(DataService[T]):
    """CRUD over one entity table through an AsyncSession (or AsyncConnection).

    Statements are built with the configured SqlDialect; without an explicit
    dialect the handle's own one is used, falling back to the generic
    default dialect for unbound handles.  Whether create() reads the new key
    through RETURNING follows the handle's dialect, since that is the driver
    the statement actually runs on.
    """

    def __init__(
        self,
        session: AsyncSession,
        model: type[T],
        *,
        dialect: SqlDialect | str | None = None,
    ) -> None:
        bound = SqlDialect.for_bind(session)
        if isinstance(dialect, str):
            dialect = get_dialect(dialect)
        if dialect is None:
            dialect = bound or get_dialect()
        self._session = session
        self._model = model
        self._dialect = dialect
        self._driver_dialect = bound or dialect
        self._table = table_for(model)
        self._id_column = model.id_column_name()

    @property
    def model(self) -> type[T]:
        return self._model

    def get_dialect(self) -> SqlDialect:
        return self._dialect

    def _where_id(self, statement: _Filtered, id: Any) -> _Filtered:
        return statement.where(self._table.c[self._id_column] == id)

    async def _execute(self, statement: ClauseElement) -> Result:
        # Rendering is only needed for the log line or an error report.
        if logger.isEnabledFor(logging.DEBUG):
            sql, params = self._dialect.to_sql(statement)
            logger.debug("%s: %s %r", self._model.__name__, sql, params)
        try:
            return await self._session.execute(statement)
        except CompileError as exc:
            raise QueryBuildError(f"fail to build {statement_kind(statement)} statement") from exc
        except SQLAlchemyError as exc:
            kind = statement_kind(statement)
            logger.warning("%s statement on %s failed: %s", kind, self._table.name, exc)
            sql = getattr(exc, "statement", None) or self._dialect.to_sql(statement)[0]
            raise QueryExecutionError(f"fail to execute {kind} statement", statement=sql) from exc

    async def get_list(self) -> list[T]:
        result = await self._execute(self._dialect.select(self._table))
        return [self._model.from_row(row) for row in result.mappings()]

    async def get_by_id(self, id: Any) -> T | None:
        stmt = self._where_id(self._dialect.select(self._table), id)
        result = await self._execute(stmt)
        row = result.mappings().one_or_none()
        return self._model.from_row(row) if row is not None else None

    async def create(self, entity: T) -> T:
        values = entity.insert_values()
        stmt = self._dialect.insert(self._table).values(values)

        # A caller-supplied key wins; otherwise ask the database for it.
        inserted_id = values.get(self._id_column)
        returning = inserted_id is None and self._driver_dialect.supports_returning
        if returning:
            stmt = stmt.returning(self._table.c[self._id_column])

        result = await self._execute(stmt)
        if inserted_id is None:
            inserted_id = result.scalar_one() if returning else result.lastrowid

        created = await self.get_by_id(inserted_id)
        if created is None:
            raise EntityNotFoundError(self._table.name, inserted_id)
        return created

    async def update(self, id: Any, entity: T) -> T:
        values = entity.update_values()
        if not values:
            raise QueryBuildError("fail to build update statement: no columns to set")
        stmt = self._where_id(self._dialect.update(self._table), id).values(values)
        await self._execute(stmt)

        updated = await self.get_by_id(id)
        if updated is None:
            raise EntityNotFoundError(self._table.name, id)
        return updated

    async def update_columns(self, id: Any, values: Mapping[str, Any]) -> None:
        if not values:
            raise QueryBuildError("fail to build update statement: no columns to set")
        table = table_for(self._model, extra_columns=values.keys())
        stmt = (
            self._dialect.update(table)
            .where(table.c[self._id_column] == id)
            .values(dict(values))
        )
        await self._execute(stmt)

    async def delete(self, id: Any) -> None:
        stmt = self._where_id(self._dialect.delete(self._table), id)
        await self._execute(stmt)

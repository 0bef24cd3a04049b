"""SQL dialect wrapper around SQLAlchemy Core.

SqlDialect pairs the Core statement constructors with one SQLAlchemy
Dialect so a statement can be rendered to SQL text plus bound parameters
for a specific backend.  Execution still goes through the database handle,
which compiles the statement for its own driver.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import Delete, Insert, Select, Update, delete, insert, select, update
from sqlalchemy.dialects import registry
from sqlalchemy.engine import Dialect
from sqlalchemy.engine.default import DefaultDialect
from sqlalchemy.exc import NoSuchModuleError, SQLAlchemyError
from sqlalchemy.sql.expression import ClauseElement, TableClause

from dataservices.domain.exceptions import QueryBuildError, UnknownDialectError

DEFAULT_DIALECT = "default"


def statement_kind(statement: ClauseElement) -> str:
    """Short verb naming a statement, used in error messages and logs."""
    if statement.is_select:
        return "select"
    if statement.is_insert:
        return "insert"
    if statement.is_update:
        return "update"
    if statement.is_delete:
        return "delete"
    return "sql"


class SqlDialect:
    def __init__(self, dialect: Dialect) -> None:
        self._dialect = dialect

    @classmethod
    def for_bind(cls, handle: Any) -> SqlDialect | None:
        """Return the dialect of an engine, connection or session, if it has one.

        Sessions expose their engine through .bind; engines and connections
        (sync or async) carry .dialect directly.
        """
        dialect = getattr(handle, "dialect", None)
        if not isinstance(dialect, Dialect):
            dialect = getattr(getattr(handle, "bind", None), "dialect", None)
        if not isinstance(dialect, Dialect):
            return None
        return cls(dialect)

    @property
    def dialect(self) -> Dialect:
        return self._dialect

    @property
    def name(self) -> str:
        return self._dialect.name

    @property
    def supports_returning(self) -> bool:
        return bool(self._dialect.insert_returning)

    def select(self, table: TableClause) -> Select:
        return select(table)

    def insert(self, table: TableClause) -> Insert:
        return insert(table)

    def update(self, table: TableClause) -> Update:
        return update(table)

    def delete(self, table: TableClause) -> Delete:
        return delete(table)

    def to_sql(self, statement: ClauseElement) -> tuple[str, tuple[Any, ...] | dict[str, Any]]:
        """Render statement as (sql_text, params) for this dialect.

        params is a tuple in bind order for positional paramstyles (qmark,
        format, numeric) and a dict for named ones (named, pyformat).
        """
        try:
            compiled = statement.compile(dialect=self._dialect)
        except SQLAlchemyError as exc:
            raise QueryBuildError(f"fail to build {statement_kind(statement)} statement") from exc

        params = compiled.params
        if compiled.positional:
            return compiled.string, tuple(params[name] for name in compiled.positiontup)
        return compiled.string, dict(params)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SqlDialect):
            return NotImplemented
        return (
            type(self._dialect) is type(other._dialect)
            and self._dialect.paramstyle == other._dialect.paramstyle
        )

    def __hash__(self) -> int:
        return hash((type(self._dialect), self._dialect.paramstyle))

    def __repr__(self) -> str:
        return f"SqlDialect({self.name!r}, paramstyle={self._dialect.paramstyle!r})"


def get_dialect(name: str = DEFAULT_DIALECT) -> SqlDialect:
    """Look a dialect up by name ("mysql", "postgresql+asyncpg", ...).

    "default" is SQLAlchemy's generic DefaultDialect, which renders
    portable SQL with named parameters.
    """
    if name == DEFAULT_DIALECT:
        return SqlDialect(DefaultDialect())
    try:
        dialect_cls = registry.load(name.replace("+", "."))
    except NoSuchModuleError as exc:
        raise UnknownDialectError(name) from exc
    return SqlDialect(dialect_cls())

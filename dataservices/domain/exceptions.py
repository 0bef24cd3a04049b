"""Exception hierarchy for the data-access layer.

Driver and builder failures are wrapped with ``raise ... from exc`` so the
original SQLAlchemy error stays reachable through ``__cause__``.
"""

from __future__ import annotations


class DataServiceError(Exception):
    """Base class for every error raised by this package."""


class EntityDefinitionError(DataServiceError):
    """An entity class does not declare valid table metadata."""


class UnknownDialectError(DataServiceError, ValueError):
    """No SQL dialect is registered under the requested name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"unknown SQL dialect: {name!r}")
        self.name = name


class QueryBuildError(DataServiceError):
    """A statement could not be built or compiled to SQL text."""


class QueryExecutionError(DataServiceError):
    """The database driver rejected a statement."""

    def __init__(self, message: str, *, statement: str | None = None) -> None:
        super().__init__(message)
        self.statement = statement


class EntityNotFoundError(DataServiceError, LookupError):
    """A row that was expected to exist could not be read back."""

    def __init__(self, table: str, id: object) -> None:
        super().__init__(f"{table} {id!r} not found")
        self.table = table
        self.id = id

"""Generic data service interface.

DataService[T] is the single data-access abstraction of this package: one
service per entity type, exposing list / get / create / update /
update-columns / delete.  The SQL implementation lives in
dataservices/infrastructure/persistence/ and is wired by the caller.

Design notes:
  - All methods are async to accommodate async database drivers.
  - T is an Entity subclass; reads map rows straight back into it.
  - Identifiers are passed as plain values (int, UUID, str), whatever the
    entity's identifier column holds.
  - The service never commits; the caller owns the transaction.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, Generic, TypeVar

from dataservices.domain.models.entity import Entity

T = TypeVar("T", bound=Entity)


class DataService(ABC, Generic[T]):
    """Abstract CRUD interface for one entity type."""

    @abstractmethod
    async def get_list(self) -> list[T]:
        """Return every row of the entity's table."""

    @abstractmethod
    async def get_by_id(self, id: Any) -> T | None:
        """Return the entity with the given identifier, or None if not found."""

    @abstractmethod
    async def create(self, entity: T) -> T:
        """Persist a new entity and return it as stored (generated fields populated)."""

    @abstractmethod
    async def update(self, id: Any, entity: T) -> T:
        """Overwrite the row identified by id with entity's values and return it."""

    @abstractmethod
    async def update_columns(self, id: Any, values: Mapping[str, Any]) -> None:
        """Set only the given columns on the row identified by id."""

    @abstractmethod
    async def delete(self, id: Any) -> None:
        """Remove the row with the given identifier."""

    @abstractmethod
    def get_dialect(self) -> Any:
        """Return the SQL dialect statements are built for."""

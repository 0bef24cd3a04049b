"""Entity contract shared by every data service.

An entity is a typed record that knows which table it lives in and which
column identifies a row.  Nothing else about the schema is introspected.

Column names come from the Pydantic field alias when one is set, else from
the field name:

    class Person(Entity):
        __tablename__ = "person"
        __id_column__ = "person_id"

        id: int | None = Field(default=None, alias="person_id")
        name: str
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, ClassVar, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict

from dataservices.domain.exceptions import EntityDefinitionError


@runtime_checkable
class Model(Protocol):
    """Anything that can report its table name and identifier column."""

    @classmethod
    def table_name(cls) -> str: ...

    @classmethod
    def id_column_name(cls) -> str: ...


class Entity(BaseModel):
    """Pydantic base class implementing the Model contract.

    __skip_insert__ / __skip_update__ name columns that create() / update()
    never write (server-managed timestamps, generated keys).  The identifier
    column is never written by update(), and is left out of create() while
    its value is None so the database can generate it.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    __tablename__: ClassVar[str]
    __id_column__: ClassVar[str] = "id"
    __skip_insert__: ClassVar[frozenset[str]] = frozenset()
    __skip_update__: ClassVar[frozenset[str]] = frozenset()

    @classmethod
    def table_name(cls) -> str:
        name = getattr(cls, "__tablename__", None)
        if not name:
            raise EntityDefinitionError(f"{cls.__name__} does not declare __tablename__")
        return name

    @classmethod
    def id_column_name(cls) -> str:
        column = cls.__id_column__
        if column not in cls.column_names():
            raise EntityDefinitionError(
                f"{cls.__name__}.__id_column__ {column!r} is not one of its columns"
            )
        return column

    @classmethod
    def column_names(cls) -> list[str]:
        """Every column of the entity, in field declaration order."""
        return [field.alias or name for name, field in cls.model_fields.items()]

    @classmethod
    def field_for_column(cls, column: str) -> str | None:
        for name, field in cls.model_fields.items():
            if (field.alias or name) == column:
                return name
        return None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> Entity:
        """Build an entity from a result row keyed by column name."""
        return cls.model_validate(dict(row))

    def id_value(self) -> Any:
        return getattr(self, self.field_for_column(self.id_column_name()))

    def insert_values(self) -> dict[str, Any]:
        id_column = self.id_column_name()
        values = self.model_dump(by_alias=True)
        skip = set(self.__skip_insert__)
        if values.get(id_column) is None:
            skip.add(id_column)
        return {column: value for column, value in values.items() if column not in skip}

    def update_values(self) -> dict[str, Any]:
        skip = set(self.__skip_update__) | {self.id_column_name()}
        values = self.model_dump(by_alias=True)
        return {column: value for column, value in values.items() if column not in skip}

"""Lightweight table clauses built from entity metadata.

No MetaData, no reflection: a TableClause carries just the table name and
the entity's columns, typed from the Pydantic annotations so values are
bound and read back the way the backend expects.
"""

from __future__ import annotations

import types
import uuid
from collections.abc import Iterable
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from enum import Enum
from typing import Any, Union, get_args, get_origin

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    Float,
    Integer,
    Interval,
    LargeBinary,
    Numeric,
    String,
    Time,
    Uuid,
    column,
    table,
)
from sqlalchemy.sql.expression import TableClause
from sqlalchemy.types import NullType, TypeEngine

from dataservices.domain.models.entity import Entity

# Order matters: bool before int, datetime before date.
_TYPE_MAP: list[tuple[type, type[TypeEngine]]] = [
    (bool, Boolean),
    (int, Integer),
    (float, Float),
    (Decimal, Numeric),
    (str, String),
    (bytes, LargeBinary),
    (datetime, DateTime),
    (date, Date),
    (time, Time),
    (timedelta, Interval),
    (uuid.UUID, Uuid),
]


def _unwrap_optional(annotation: Any) -> Any:
    if get_origin(annotation) in (Union, types.UnionType):
        args = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def sql_type_for(annotation: Any) -> TypeEngine:
    """Map a Python annotation to a SQLAlchemy column type (NullType if unknown)."""
    annotation = _unwrap_optional(annotation)
    if get_origin(annotation) is not None or not isinstance(annotation, type):
        return NullType()
    if issubclass(annotation, Enum):
        # str / int valued enums bind as their value
        for base in (str, int):
            if issubclass(annotation, base):
                return sql_type_for(base)
        return NullType()
    for python_type, sql_type in _TYPE_MAP:
        if issubclass(annotation, python_type):
            return sql_type()
    return NullType()


def table_for(model: type[Entity], extra_columns: Iterable[str] = ()) -> TableClause:
    """Build a TableClause for model; extra_columns are added untyped."""
    columns = []
    for name, field in model.model_fields.items():
        columns.append(column(field.alias or name, sql_type_for(field.annotation)))
    known = {c.name for c in columns}
    for name in extra_columns:
        if name not in known:
            columns.append(column(name))
            known.add(name)
    return table(model.table_name(), *columns)

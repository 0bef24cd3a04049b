"""Generic typed CRUD data services over SQLAlchemy Core."""

from dataservices.domain.exceptions import (
    DataServiceError,
    EntityDefinitionError,
    EntityNotFoundError,
    QueryBuildError,
    QueryExecutionError,
    UnknownDialectError,
)
from dataservices.domain.models import Entity, Model
from dataservices.domain.repositories import DataService
from dataservices.infrastructure.persistence import (
    SqlDataService,
    SqlDialect,
    get_data_service,
    get_dialect,
)

__all__ = [
    "Entity",
    "Model",
    "DataService",
    "SqlDataService",
    "SqlDialect",
    "get_dialect",
    "get_data_service",
    "DataServiceError",
    "EntityDefinitionError",
    "EntityNotFoundError",
    "QueryBuildError",
    "QueryExecutionError",
    "UnknownDialectError",
]

"""Persistence package.

Exports the SQL dialect helpers, table-clause builder, the data service
implementation and its factory.
"""

from dataservices.infrastructure.persistence.dialect import SqlDialect, get_dialect
from dataservices.infrastructure.persistence.repositories import (
    SqlDataService,
    get_data_service,
)
from dataservices.infrastructure.persistence.tables import table_for

__all__ = [
    "SqlDialect",
    "get_dialect",
    "table_for",
    "SqlDataService",
    "get_data_service",
]

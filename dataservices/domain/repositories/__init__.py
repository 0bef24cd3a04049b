"""Domain repository interfaces.

Abstractions are defined here with abc.ABC and @abstractmethod.  The
concrete implementation lives in dataservices/infrastructure/persistence/
and is wired at the application boundary.
"""

from .base import DataService

__all__ = [
    "DataService",
]

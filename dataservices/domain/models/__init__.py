"""Domain model package.

Entities are plain Pydantic models carrying their own table metadata; they
have no ORM or infrastructure dependencies.
"""

from .entity import Entity, Model

__all__ = [
    "Entity",
    "Model",
]

"""Column types and SQL helpers shared by the ORM models."""

from __future__ import annotations

__all__ = [
    "Created_at",
    "ElementId",
    "Guid",
    "Pk",
    "State",
    "UniqueName",
    "Updated_at",
    "fk",
    "new_guid",
    "utcnow",
]

from .mapped_types import (
    Created_at,
    ElementId,
    Guid,
    Pk,
    State,
    UniqueName,
    Updated_at,
    fk,
    new_guid,
)
from .time import utcnow

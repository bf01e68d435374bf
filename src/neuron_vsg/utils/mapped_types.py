"""Annotated column types shared by the ORM models.

Every stored object (flow, VSG, resource, pool, ...) is addressed by a unique
element-prefixed name and carries a stable guid; upserts match on the name
and never touch the guid.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Annotated

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import mapped_column

from neuron_vsg.utils.time import utcnow

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
]


def new_guid() -> str:
    return str(uuid.uuid4())


Pk = Annotated[int, mapped_column(Integer, primary_key=True, autoincrement=True)]

UniqueName = Annotated[
    str,
    mapped_column(String(256), unique=True, index=True, comment="Unique object name"),
]

# "{dma_id}/{element_id}" of the element the object was generated from
ElementId = Annotated[
    str,
    mapped_column(String(32), index=True, comment="Source element (dma/element id)"),
]

Guid = Annotated[
    str,
    mapped_column(String(36), unique=True, default=new_guid, comment="Stable identifier"),
]

# Operational or administrative state (Up/Down)
State = Annotated[str, mapped_column(String(8), default="Up")]

Created_at = Annotated[
    datetime,
    mapped_column(DateTime(timezone=True), server_default=utcnow()),
]

Updated_at = Annotated[
    datetime,
    mapped_column(
        DateTime(timezone=True),
        server_default=utcnow(),
        onupdate=utcnow(),
    ),
]


def fk(target_table: str, *, ondelete: str | None = None, **kwargs):
    """
    Integer column referencing ``{target_table}.pk``.

    Examples
    --------
    >>> pool_fk: Mapped[int] = fk("resource_pool", nullable=False)
    >>> blue_flow_fk: Mapped[int | None] = fk("flow", nullable=True, ondelete="SET NULL")
    """
    kwargs.setdefault("comment", f"References {target_table}")
    return mapped_column(ForeignKey(f"{target_table}.pk", ondelete=ondelete), **kwargs)

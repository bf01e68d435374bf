"""SQLAlchemy 2.0 ORM models for neuron_vsg.

- base.py - Base class
- level.py - Signal level registry (Level)
- flow.py - Flows (Flow)
- vsg.py - Virtual signal groups (VirtualSignalGroup, VsgLinkedFlow)
- resource.py - Resource manager (ResourcePool, ProfileParameter, Resource,
  ResourceCapability)

Every named object is upserted by its unique ``name`` and carries a ``guid``
that is kept across regenerations.
"""

from __future__ import annotations

from neuron_vsg.models.orm.base import Base
from neuron_vsg.models.orm.flow import Flow
from neuron_vsg.models.orm.level import Level
from neuron_vsg.models.orm.resource import (
    ProfileParameter,
    Resource,
    ResourceCapability,
    ResourcePool,
)
from neuron_vsg.models.orm.vsg import VirtualSignalGroup, VsgLinkedFlow

__all__ = [
    "Base",
    "Flow",
    "Level",
    "ProfileParameter",
    "Resource",
    "ResourceCapability",
    "ResourcePool",
    "VirtualSignalGroup",
    "VsgLinkedFlow",
]

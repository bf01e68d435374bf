"""Resource manager models: ResourcePool, ProfileParameter, Resource, ResourceCapability."""

from __future__ import annotations

from sqlalchemy import Boolean, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from neuron_vsg.models.metadata import ResourceProperties, adaptix_json_type
from neuron_vsg.models.orm.base import Base
from neuron_vsg.utils import Created_at, ElementId, Guid, Pk, UniqueName, Updated_at, fk


class ResourcePool(Base):
    """
    Named group of schedulable resources.

    Attributes
    ----------
    pk : int
        Integer primary key
    guid : str
        Stable public identifier
    name : str
        Unique pool name (e.g. Processors)
    """

    __tablename__ = "resource_pool"

    pk: Mapped[Pk]

    guid: Mapped[Guid]

    name: Mapped[UniqueName]

    created_at: Mapped[Created_at]

    # Relationships
    resources: Mapped[list[Resource]] = relationship(back_populates="pool")


class ProfileParameter(Base):
    """Profile parameter definition a capability refers to."""

    __tablename__ = "profile_parameter"

    pk: Mapped[Pk]

    guid: Mapped[Guid]

    name: Mapped[UniqueName]

    category: Mapped[str] = mapped_column(String(32), comment="Capability, Capacity, ...")

    parameter_type: Mapped[str] = mapped_column(String(32), comment="Text, Number, ...")

    created_at: Mapped[Created_at]


class Resource(Base):
    """
    Schedulable unit published for one video path.

    Attributes
    ----------
    pk : int
        Integer primary key
    guid : str
        Stable public identifier
    name : str
        Unique name, ``"{element} {path index}"``
    element_id : str
        Element the resource belongs to
    mode : str
        Available or Unavailable
    max_concurrency : int
        Maximum concurrent bookings
    properties : list[ResourceProperty]
        Name/value properties (Path, input VSGs, output VSGs)
    """

    __tablename__ = "resource"

    pk: Mapped[Pk]

    guid: Mapped[Guid]

    name: Mapped[UniqueName]

    element_id: Mapped[ElementId]

    mode: Mapped[str] = mapped_column(String(16), default="Available")

    max_concurrency: Mapped[int] = mapped_column(Integer, default=1)

    pool_fk: Mapped[int] = fk("resource_pool", nullable=False, index=True)

    properties: Mapped[ResourceProperties] = mapped_column(
        adaptix_json_type(ResourceProperties),
        nullable=False,
    )

    created_at: Mapped[Created_at]

    updated_at: Mapped[Updated_at]

    # Relationships
    pool: Mapped[ResourcePool] = relationship(back_populates="resources")

    capabilities: Mapped[list[ResourceCapability]] = relationship(
        back_populates="resource",
        cascade="all, delete-orphan",
    )


class ResourceCapability(Base):
    """
    Capability of a resource on a profile parameter.

    Attributes
    ----------
    resource_fk : int
        Foreign key to resource
    profile_parameter_fk : int
        Foreign key to profile_parameter
    is_time_dynamic : bool
        Whether the value is set per booking
    value : str | None
        Fixed value, None for time-dynamic capabilities
    """

    __tablename__ = "resource_capability"

    pk: Mapped[Pk]

    resource_fk: Mapped[int] = fk("resource", nullable=False, index=True)

    profile_parameter_fk: Mapped[int] = fk("profile_parameter", nullable=False)

    is_time_dynamic: Mapped[bool] = mapped_column(Boolean, default=False)

    value: Mapped[str | None] = mapped_column(String(256), nullable=True)

    # Relationships
    resource: Mapped[Resource] = relationship(back_populates="capabilities")
    profile_parameter: Mapped[ProfileParameter] = relationship()

    __table_args__ = (
        UniqueConstraint(
            "resource_fk",
            "profile_parameter_fk",
            name="uq_resource_capability_parameter",
        ),
    )

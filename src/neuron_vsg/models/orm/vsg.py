"""Virtual signal group models: VirtualSignalGroup, VsgLinkedFlow."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from neuron_vsg.models.orm.base import Base
from neuron_vsg.utils import Created_at, ElementId, Guid, Pk, State, UniqueName, Updated_at, fk

if TYPE_CHECKING:
    from neuron_vsg.models.orm.flow import Flow
    from neuron_vsg.models.orm.level import Level


class VirtualSignalGroup(Base):
    """
    Logical bundle of redundant flows, one section per signal level.

    Attributes
    ----------
    pk : int
        Integer primary key
    guid : str
        Stable public identifier, referenced by resource properties
    name : str
        Unique name (also the button label)
    role : str
        Source or Destination
    element_id : str
        Owning element, ``"{dma_id}/{element_id}"``
    """

    __tablename__ = "virtual_signal_group"

    pk: Mapped[Pk]

    guid: Mapped[Guid]

    name: Mapped[UniqueName]

    role: Mapped[str] = mapped_column(String(16), index=True)

    element_id: Mapped[ElementId]

    button_label: Mapped[str] = mapped_column(String(256))

    operational_state: Mapped[State]

    administrative_state: Mapped[State]

    created_at: Mapped[Created_at]

    updated_at: Mapped[Updated_at]

    # Relationships
    linked_flows: Mapped[list[VsgLinkedFlow]] = relationship(
        back_populates="vsg",
        cascade="all, delete-orphan",
    )

    flows: Mapped[list[Flow]] = relationship(
        back_populates="linked_signal_group",
    )


class VsgLinkedFlow(Base):
    """
    Level section of a VSG: the Blue and Red flow at one level.

    Attributes
    ----------
    vsg_fk : int
        Foreign key to virtual_signal_group
    level_fk : int
        Foreign key to level
    blue_flow_fk : int | None
        Primary flow
    red_flow_fk : int | None
        Secondary flow
    """

    __tablename__ = "vsg_linked_flow"

    pk: Mapped[Pk]

    vsg_fk: Mapped[int] = fk("virtual_signal_group", nullable=False, index=True)

    level_fk: Mapped[int] = fk("level", nullable=False)

    blue_flow_fk: Mapped[int | None] = fk("flow", nullable=True)

    red_flow_fk: Mapped[int | None] = fk("flow", nullable=True)

    # Relationships
    vsg: Mapped[VirtualSignalGroup] = relationship(back_populates="linked_flows")
    level: Mapped[Level] = relationship()
    blue_flow: Mapped[Flow | None] = relationship(foreign_keys=[blue_flow_fk])
    red_flow: Mapped[Flow | None] = relationship(foreign_keys=[red_flow_fk])

    __table_args__ = (
        UniqueConstraint("vsg_fk", "level_fk", name="uq_vsg_linked_flow_vsg_level"),
    )

"""Flow model."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from neuron_vsg.models.orm.base import Base
from neuron_vsg.utils import Created_at, ElementId, Guid, Pk, State, UniqueName, Updated_at, fk

if TYPE_CHECKING:
    from neuron_vsg.models.orm.vsg import VirtualSignalGroup


class Flow(Base):
    """
    Single SDI or IP signal carrier on an element.

    Flows are upserted by ``name``; ``guid`` is assigned once and kept across
    regenerations.

    Attributes
    ----------
    pk : int
        Integer primary key
    guid : str
        Stable public identifier
    name : str
        Unique name, ``"{element} {label}"``
    direction : str
        Rx (SDI input) or Tx (IP output)
    transport_type : str
        SDI, ST2110-20 or ST2110-30
    element_id : str
        Owning element, ``"{dma_id}/{element_id}"``
    interface : str
        DCF interface id, empty if unresolved
    sub_interface : str
        Logical sub-interface (stream index for IP flows)
    linked_signal_group_fk : int | None
        VSG the flow was last assigned to
    """

    __tablename__ = "flow"

    pk: Mapped[Pk]

    guid: Mapped[Guid]

    name: Mapped[UniqueName]

    direction: Mapped[str] = mapped_column(String(8), comment="Rx or Tx")

    transport_type: Mapped[str] = mapped_column(String(16), comment="Transport type")

    element_id: Mapped[ElementId]

    interface: Mapped[str] = mapped_column(String(64), default="")

    sub_interface: Mapped[str] = mapped_column(String(64), default="")

    path_order: Mapped[int] = mapped_column(Integer, default=0)

    source_ip: Mapped[str | None] = mapped_column(String(64), nullable=True)

    destination_ip: Mapped[str | None] = mapped_column(String(64), nullable=True)

    destination_port: Mapped[int | None] = mapped_column(Integer, nullable=True)

    operational_state: Mapped[State]

    administrative_state: Mapped[State]

    linked_signal_group_fk: Mapped[int | None] = fk(
        "virtual_signal_group",
        nullable=True,
        index=True,
    )

    created_at: Mapped[Created_at]

    updated_at: Mapped[Updated_at]

    # Relationships
    linked_signal_group: Mapped[VirtualSignalGroup | None] = relationship(
        back_populates="flows",
    )

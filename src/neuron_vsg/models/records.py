"""Domain records built from element tables before they are persisted.

These are plain dataclasses: the builders produce them without a database,
and the pipeline upserts them into the ORM tables by name.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from neuron_vsg.constants import (
    AdministrativeState,
    FlowColor,
    FlowDirection,
    Level,
    OperationalState,
    Role,
    TransportType,
)

__all__ = [
    "FlowRecord",
    "LevelFlows",
    "VideoPathData",
    "VirtualSignalGroupRecord",
]


@dataclass
class FlowRecord:
    """
    A signal carrier (SDI input or IP output stream) on an element.

    Attributes
    ----------
    name : str
        Stable identity, ``"{element} {label}"``
    direction : FlowDirection
        Rx for SDI inputs, Tx for IP output streams
    transport_type : TransportType
        SDI, ST2110-20 (video) or ST2110-30 (audio)
    element_id : str
        Owning element, ``"{dma_id}/{element_id}"``
    interface : str
        DCF interface id, empty if unresolved
    sub_interface : str
        Logical interface (stream index for IP flows)
    source_ip, destination_ip, destination_port
        Transport addressing, IP flows only
    linked_signal_group : str | None
        Name of the VSG this flow was last assigned to
    """

    name: str
    direction: FlowDirection
    transport_type: TransportType
    element_id: str
    interface: str = ""
    sub_interface: str = ""
    path_order: int = 0
    source_ip: str | None = None
    destination_ip: str | None = None
    destination_port: int | None = None
    operational_state: OperationalState = OperationalState.UP
    administrative_state: AdministrativeState = AdministrativeState.UP
    linked_signal_group: str | None = None


@dataclass
class LevelFlows:
    """Blue (primary) and Red (secondary) flow of one VSG level section."""

    blue: FlowRecord | None = None
    red: FlowRecord | None = None

    def get(self, color: FlowColor) -> FlowRecord | None:
        return self.blue if color is FlowColor.BLUE else self.red

    def set(self, color: FlowColor, flow: FlowRecord) -> None:
        if color is FlowColor.BLUE:
            self.blue = flow
        else:
            self.red = flow


@dataclass
class VirtualSignalGroupRecord:
    """
    Logical bundle of redundant flows, keyed by signal level.

    Each level section holds at most one Blue and one Red flow; assigning a
    color again replaces the previous flow.
    """

    name: str
    role: Role
    element_id: str
    operational_state: OperationalState = OperationalState.UP
    administrative_state: AdministrativeState = AdministrativeState.UP
    linked_flows: dict[Level, LevelFlows] = field(default_factory=dict)

    @property
    def button_label(self) -> str:
        return self.name

    def assign(self, flow: FlowRecord, level: Level, color: FlowColor) -> None:
        """Put a flow in the Blue or Red slot of a level section."""
        self.linked_flows.setdefault(level, LevelFlows()).set(color, flow)

    def flow_at(self, level: Level, color: FlowColor) -> FlowRecord | None:
        section = self.linked_flows.get(level)
        return section.get(color) if section else None

    def flows(self) -> list[FlowRecord]:
        """All assigned flows, in level order, Blue before Red."""
        out = []
        for level in sorted(self.linked_flows):
            section = self.linked_flows[level]
            out.extend(f for f in (section.blue, section.red) if f is not None)
        return out


@dataclass
class VideoPathData:
    """Join of one video path to its generated input and output VSGs."""

    index: str
    input_vsg: VirtualSignalGroupRecord | None = None
    output_vsg: VirtualSignalGroupRecord | None = None

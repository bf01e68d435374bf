"""VSG builder: destination (SDI) and source (IP) virtual signal groups."""

from __future__ import annotations

from typing import Container

from loguru import logger

from neuron_vsg.constants import (
    SDI_FLOWS_OFFSET,
    FlowColor,
    Level,
    Role,
    is_sdi_discreet_value,
)
from neuron_vsg.element.neuron import NeuronElement
from neuron_vsg.element.rows import VideoPathRow
from neuron_vsg.mapping.flows import IpFlows, SdiFlows
from neuron_vsg.models.records import FlowRecord, VideoPathData, VirtualSignalGroupRecord

__all__ = ["VsgBuilder", "sdi_flow_key"]


def sdi_flow_key(value: int, sdi_flow_count: int) -> str | None:
    """
    Return the SDI flow key a video path input selects.

    Parameters
    ----------
    value : int
        Main or backup input discreet value of a video path
    sdi_flow_count : int
        Number of SDI flows generated for the element

    Returns
    -------
    str | None
        ``str(value - 528)``, or None if the value does not select an SDI
        input or points past the generated flows

    Examples
    --------
    >>> sdi_flow_key(531, 28)
    '3'
    >>> sdi_flow_key(0, 28) is None
    True
    """
    if not is_sdi_discreet_value(value):
        return None
    index = value - SDI_FLOWS_OFFSET
    if index > sdi_flow_count:
        return None
    return str(index)


class VsgBuilder:
    """
    Build the virtual signal groups of one Neuron element.

    Parameters
    ----------
    element : NeuronElement
        Table reader of the element
    known_levels : Container[int]
        Level numbers present in the levels registry. Assignments at other
        levels only link the flow to the VSG.
    """

    def __init__(self, element: NeuronElement, known_levels: Container[int]) -> None:
        self.element = element
        self.known_levels = known_levels

    def assign(
        self,
        vsg: VirtualSignalGroupRecord,
        flow: FlowRecord,
        level: Level,
        color: FlowColor,
    ) -> None:
        """
        Link a flow to a VSG and put it in the level section.

        The flow always records the VSG as its linked signal group. The level
        section is only written when the level is known.
        """
        flow.linked_signal_group = vsg.name
        if int(level) not in self.known_levels:
            logger.debug(f"{vsg.name}: level {level.label} not registered, skipping {flow.name}")
            return
        vsg.assign(flow, level, color)

    def _new_vsg(self, name: str, role: Role) -> VirtualSignalGroupRecord:
        return VirtualSignalGroupRecord(
            name=name,
            role=role,
            element_id=self.element.handle.dms_element_id,
        )

    def build_destination_vsg(
        self,
        row: VideoPathRow,
        sdi_flows: SdiFlows,
    ) -> VirtualSignalGroupRecord | None:
        """
        Build the destination VSG of a video path from its SDI inputs.

        Returns
        -------
        VirtualSignalGroupRecord | None
            The VSG, or None when neither input selects a generated SDI flow

        Raises
        ------
        MissingTableRowError
            If an input selects an SDI channel that has no flow
        """
        vsg = self._new_vsg(f"{self.element.name} {row.key}", Role.DESTINATION)
        assigned = False
        for value, color in ((row.main_input, FlowColor.BLUE), (row.backup_input, FlowColor.RED)):
            key = sdi_flow_key(value, len(sdi_flows))
            if key is None:
                continue
            self.assign(vsg, sdi_flows.get(key), Level.VIDEO, color)
            assigned = True
        return vsg if assigned else None

    def build_source_vsg(self, row: VideoPathRow, ip_flows: IpFlows) -> VirtualSignalGroupRecord:
        """
        Build the source VSG of a video path from its IP output streams.

        Raises
        ------
        MissingTableRowError
            If one of the four streams of the path was not generated
        """
        vsg = self._new_vsg(f"{self.element.name} IP {row.key}", Role.SOURCE)
        self.assign(vsg, ip_flows.get_primary_video(row.key), Level.VIDEO, FlowColor.BLUE)
        self.assign(vsg, ip_flows.get_primary_audio(row.key), Level.AUDIO1, FlowColor.BLUE)
        self.assign(vsg, ip_flows.get_secondary_video(row.key), Level.VIDEO, FlowColor.RED)
        self.assign(vsg, ip_flows.get_secondary_audio(row.key), Level.AUDIO1, FlowColor.RED)
        return vsg

    def build(self, sdi_flows: SdiFlows, ip_flows: IpFlows) -> list[VideoPathData]:
        """
        Build both VSGs of every video path.

        Returns
        -------
        list[VideoPathData]
            One entry per video path row, in table order
        """
        paths = []
        for row in self.element.video_path_rows():
            paths.append(
                VideoPathData(
                    index=row.key,
                    input_vsg=self.build_destination_vsg(row, sdi_flows),
                    output_vsg=self.build_source_vsg(row, ip_flows),
                )
            )
        return paths

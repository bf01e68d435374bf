"""Flow builder: SDI input flows and IP output stream flows of one element."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from loguru import logger

from neuron_vsg.constants import (
    MAC_SETTINGS_DCF_GROUP_ID,
    SDI_BIDIRECTIONAL_IO_DCF_GROUP_ID,
    SDI_STATIC_IO_DCF_GROUP_ID,
    FlowDirection,
    TransportType,
)
from neuron_vsg.element.neuron import NeuronElement
from neuron_vsg.element.rows import IpOutputStreamRow, MacSettingsRow, SdiIoRow
from neuron_vsg.exceptions import MissingTableRowError
from neuron_vsg.models.records import FlowRecord

__all__ = ["FlowBuilder", "IpFlows", "SdiFlows"]


def _lookup(flows: dict[str, FlowRecord], key: str, kind: str) -> FlowRecord:
    try:
        return flows[key]
    except KeyError:
        msg = f"No {kind} flow for key {key!r}"
        raise MissingTableRowError(msg) from None


@dataclass
class SdiFlows:
    """SDI input flows keyed by channel id, static I/O first."""

    flows: dict[str, FlowRecord] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.flows)

    def __iter__(self) -> Iterator[FlowRecord]:
        return iter(self.flows.values())

    def __contains__(self, key: object) -> bool:
        return key in self.flows

    def get(self, key: str) -> FlowRecord:
        """
        Return the flow of an SDI channel.

        Raises
        ------
        MissingTableRowError
            If no flow was generated for the channel
        """
        return _lookup(self.flows, key, "SDI")


@dataclass
class IpFlows:
    """IP output flows keyed by path label (A1..D4)."""

    primary_video: dict[str, FlowRecord] = field(default_factory=dict)
    secondary_video: dict[str, FlowRecord] = field(default_factory=dict)
    primary_audio: dict[str, FlowRecord] = field(default_factory=dict)
    secondary_audio: dict[str, FlowRecord] = field(default_factory=dict)

    def __len__(self) -> int:
        return sum(
            len(d)
            for d in (
                self.primary_video,
                self.secondary_video,
                self.primary_audio,
                self.secondary_audio,
            )
        )

    def __iter__(self) -> Iterator[FlowRecord]:
        yield from self.primary_video.values()
        yield from self.secondary_video.values()
        yield from self.primary_audio.values()
        yield from self.secondary_audio.values()

    def get_primary_video(self, path: str) -> FlowRecord:
        return _lookup(self.primary_video, path, "primary video")

    def get_secondary_video(self, path: str) -> FlowRecord:
        return _lookup(self.secondary_video, path, "secondary video")

    def get_primary_audio(self, path: str) -> FlowRecord:
        return _lookup(self.primary_audio, path, "primary audio")

    def get_secondary_audio(self, path: str) -> FlowRecord:
        return _lookup(self.secondary_audio, path, "secondary audio")


class FlowBuilder:
    """
    Build the flows of one Neuron element.

    Parameters
    ----------
    element : NeuronElement
        Table reader of the element

    Examples
    --------
    >>> builder = FlowBuilder(NeuronElement(handle))
    >>> sdi = builder.build_sdi_flows()
    >>> ip = builder.build_ip_flows()
    """

    def __init__(self, element: NeuronElement) -> None:
        self.element = element

    @property
    def element_name(self) -> str:
        return self.element.name

    @property
    def element_id(self) -> str:
        return self.element.handle.dms_element_id

    def build_sdi_flows(self) -> SdiFlows:
        """
        Build one Rx flow per usable SDI input.

        Static I/O rows with status OK come first, then bidirectional I/O rows
        configured as input. When both tables hold the same channel id, the
        static flow is kept.
        """
        result = SdiFlows()
        sources = (
            (self.element.sdi_static_io_rows(), SDI_STATIC_IO_DCF_GROUP_ID),
            (self.element.sdi_bidirectional_io_rows(), SDI_BIDIRECTIONAL_IO_DCF_GROUP_ID),
        )
        for rows, dcf_group_id in sources:
            for row in rows:
                if row.key in result.flows:
                    logger.debug(f"{self.element_name}: duplicate SDI channel {row.key}, keeping first")
                    continue
                result.flows[row.key] = self._sdi_flow(row, dcf_group_id)
        logger.debug(f"{self.element_name}: {len(result)} SDI flow(s)")
        return result

    def _sdi_flow(self, row: SdiIoRow, dcf_group_id: int) -> FlowRecord:
        interface = self.element.dcf_interface_id(dcf_group_id, row.key)
        return FlowRecord(
            name=f"{self.element_name} SDI {row.key}",
            direction=FlowDirection.RX,
            transport_type=TransportType.SDI,
            element_id=self.element_id,
            interface=interface or "",
            sub_interface="",
        )

    def build_ip_flows(self) -> IpFlows:
        """
        Build a main and a secondary Tx flow per IP output stream.

        Main streams take their source IP and interface from the first MAC
        settings row, secondary streams from the second.

        Raises
        ------
        MissingTableRowError
            If the MAC settings table has fewer than two rows
        UnknownPathSelectionError
            If a stream selects an unmapped path
        """
        primary_mac = self.element.primary_mac()
        secondary_mac = self.element.secondary_mac()
        primary_interface = self._mac_interface(primary_mac)
        secondary_interface = self._mac_interface(secondary_mac)

        result = IpFlows()
        for row in self.element.ip_video_output_stream_rows():
            result.primary_video[row.path] = self._ip_flow(
                row,
                f"Main Video Stream {row.path}",
                TransportType.ST2110_20,
                primary_mac,
                primary_interface,
                primary=True,
            )
            result.secondary_video[row.path] = self._ip_flow(
                row,
                f"Secondary Video Stream {row.path}",
                TransportType.ST2110_20,
                secondary_mac,
                secondary_interface,
                primary=False,
            )

        for row in self.element.ip_audio_output_stream_rows():
            result.primary_audio[row.path] = self._ip_flow(
                row,
                f"Main Audio Stream {row.key}",
                TransportType.ST2110_30,
                primary_mac,
                primary_interface,
                primary=True,
            )
            result.secondary_audio[row.path] = self._ip_flow(
                row,
                f"Secondary Audio Stream {row.key}",
                TransportType.ST2110_30,
                secondary_mac,
                secondary_interface,
                primary=False,
            )

        logger.debug(f"{self.element_name}: {len(result)} IP flow(s)")
        return result

    def _mac_interface(self, mac: MacSettingsRow) -> str:
        return self.element.dcf_interface_id(MAC_SETTINGS_DCF_GROUP_ID, mac.key) or ""

    def _ip_flow(
        self,
        row: IpOutputStreamRow,
        label: str,
        transport_type: TransportType,
        mac: MacSettingsRow,
        interface: str,
        *,
        primary: bool,
    ) -> FlowRecord:
        if primary:
            ip, port = row.primary_destination_ip, row.primary_destination_port
        else:
            ip, port = row.secondary_destination_ip, row.secondary_destination_port
        return FlowRecord(
            name=f"{self.element_name} {label}",
            direction=FlowDirection.TX,
            transport_type=transport_type,
            element_id=self.element_id,
            interface=interface,
            sub_interface=row.key,
            source_ip=mac.ip_address,
            destination_ip=ip,
            destination_port=port,
        )

"""Typed readers over the tables of an EVS Neuron NAP - CONVERT element."""

from __future__ import annotations

from loguru import logger

from neuron_vsg.constants import (
    DCF_INTERFACES_TABLE_ID,
    IP_AUDIO_OUTPUT_STREAMS_TABLE_ID,
    IP_VIDEO_OUTPUT_STREAMS_TABLE_ID,
    MAC_SETTINGS_TABLE_ID,
    SDI_BIDIRECTIONAL_IO_DIRECTION_INPUT,
    SDI_BIDIRECTIONAL_IO_DIRECTION_PID,
    SDI_BIDIRECTIONAL_IO_TABLE_ID,
    SDI_STATIC_IO_STATUS_OK,
    SDI_STATIC_IO_STATUS_PID,
    SDI_STATIC_IO_TABLE_ID,
    VIDEO_PATHS_MAIN_INPUT_PID,
    VIDEO_PATHS_TABLE_ID,
)
from neuron_vsg.element.handle import ElementHandle
from neuron_vsg.element.rows import (
    DcfInterfaceRow,
    IpAudioOutputStreamRow,
    IpVideoOutputStreamRow,
    MacSettingsRow,
    SdiIoRow,
    VideoPathRow,
)
from neuron_vsg.element.tables import ColumnFilter
from neuron_vsg.exceptions import MissingTableRowError

__all__ = ["NeuronElement"]


class NeuronElement:
    """
    Table reader for one Neuron element.

    The video paths and DCF interfaces tables are read once at construction,
    since several builders consult them. The other tables are read on demand.

    Parameters
    ----------
    handle : ElementHandle
        The element to read from

    Raises
    ------
    MissingTableError
        If the element lacks the video paths or DCF interfaces table
    """

    def __init__(self, handle: ElementHandle) -> None:
        self.handle = handle
        self.video_path_table_rows = [
            VideoPathRow.from_row(row)
            for row in handle.get_table(VIDEO_PATHS_TABLE_ID).get_rows()
        ]
        self.dcf_interface_table_rows = [
            DcfInterfaceRow.from_row(row)
            for row in handle.get_table(DCF_INTERFACES_TABLE_ID).get_rows()
        ]

    @property
    def name(self) -> str:
        return self.handle.name

    def sdi_static_io_rows(self) -> list[SdiIoRow]:
        """SDI static I/O rows whose status is OK."""
        table = self.handle.get_table(SDI_STATIC_IO_TABLE_ID)
        rows = table.query_data(
            [ColumnFilter(SDI_STATIC_IO_STATUS_PID, SDI_STATIC_IO_STATUS_OK)]
        )
        return [SdiIoRow.from_row(row) for row in rows]

    def sdi_bidirectional_io_rows(self) -> list[SdiIoRow]:
        """SDI bidirectional I/O rows configured as input."""
        table = self.handle.get_table(SDI_BIDIRECTIONAL_IO_TABLE_ID)
        rows = table.query_data(
            [
                ColumnFilter(
                    SDI_BIDIRECTIONAL_IO_DIRECTION_PID,
                    SDI_BIDIRECTIONAL_IO_DIRECTION_INPUT,
                )
            ]
        )
        return [SdiIoRow.from_row(row) for row in rows]

    def video_path_rows(self) -> list[VideoPathRow]:
        return list(self.video_path_table_rows)

    def mac_settings_rows(self) -> list[MacSettingsRow]:
        table = self.handle.get_table(MAC_SETTINGS_TABLE_ID)
        return [MacSettingsRow.from_row(row) for row in table.get_rows()]

    def primary_mac(self) -> MacSettingsRow:
        """First MAC settings row, source of the main streams."""
        return self._mac_row(0)

    def secondary_mac(self) -> MacSettingsRow:
        """Second MAC settings row, source of the secondary streams."""
        return self._mac_row(1)

    def _mac_row(self, position: int) -> MacSettingsRow:
        rows = self.mac_settings_rows()
        if len(rows) <= position:
            raise MissingTableRowError(
                f"Element {self.name!r}: MAC settings table has {len(rows)} row(s), "
                f"row {position + 1} is required"
            )
        return rows[position]

    def ip_video_output_stream_rows(self) -> list[IpVideoOutputStreamRow]:
        table = self.handle.get_table(IP_VIDEO_OUTPUT_STREAMS_TABLE_ID)
        return [IpVideoOutputStreamRow.from_row(row) for row in table.get_rows()]

    def ip_audio_output_stream_rows(self) -> list[IpAudioOutputStreamRow]:
        table = self.handle.get_table(IP_AUDIO_OUTPUT_STREAMS_TABLE_ID)
        return [IpAudioOutputStreamRow.from_row(row) for row in table.get_rows()]

    def dcf_interface_id(self, parameter_group_id: int, key: str) -> str | None:
        """
        Resolve the DCF interface of a table row.

        Parameters
        ----------
        parameter_group_id : int
            DCF parameter group of the table the row belongs to
        key : str
            Row primary key

        Returns
        -------
        str | None
            DCF interface key, or None if no interface links to the row
        """
        link = f"{parameter_group_id};{key}"
        for row in self.dcf_interface_table_rows:
            if row.interface_dynamic_link == link:
                return row.key
        logger.debug(f"{self.name}: no DCF interface linked to {link!r}")
        return None

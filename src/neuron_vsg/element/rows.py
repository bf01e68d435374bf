"""Named-field row structs for the Neuron element tables.

Each struct knows the fixed column offsets of its table and converts one raw
row tuple with :meth:`from_row`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from neuron_vsg.constants import (
    AUDIO_INDEX_PATH_SELECTION,
    VIDEO_PATH_SELECTION,
    lookup_path_label,
)
from neuron_vsg.exceptions import MalformedValueError

__all__ = [
    "DcfInterfaceRow",
    "IpAudioOutputStreamRow",
    "IpOutputStreamRow",
    "IpVideoOutputStreamRow",
    "MacSettingsRow",
    "SdiIoRow",
    "VideoPathRow",
    "to_int",
    "to_str",
]


def to_str(value: Any) -> str:
    """Convert a cell to text; empty cells become ``""``."""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def to_int(value: Any) -> int:
    """
    Convert a cell to an integer.

    Raises
    ------
    MalformedValueError
        If the cell is empty, not numeric, or has a fractional part
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    try:
        number = float(str(value).strip())
    except (TypeError, ValueError):
        raise MalformedValueError(f"Cannot convert {value!r} to an integer") from None
    if not number.is_integer():
        raise MalformedValueError(f"{value!r} is not an integral value")
    return int(number)


def _cell(row: Sequence[Any], index: int) -> Any:
    try:
        return row[index]
    except IndexError:
        raise MalformedValueError(
            f"Row {tuple(row)!r} has no column {index}"
        ) from None


@dataclass(frozen=True)
class SdiIoRow:
    """Row of the SDI static or bidirectional I/O table (channel id only)."""

    key: str

    @classmethod
    def from_row(cls, row: Sequence[Any]) -> SdiIoRow:
        return cls(key=to_str(_cell(row, 0)))


@dataclass(frozen=True)
class VideoPathRow:
    """Row of the video paths (routing) table."""

    key: str
    main_input: int
    backup_input: int

    @classmethod
    def from_row(cls, row: Sequence[Any]) -> VideoPathRow:
        return cls(
            key=to_str(_cell(row, 0)),
            main_input=to_int(_cell(row, 3)),
            backup_input=to_int(_cell(row, 4)),
        )


@dataclass(frozen=True)
class MacSettingsRow:
    """Row of the MAC settings table."""

    key: str
    ip_address: str

    @classmethod
    def from_row(cls, row: Sequence[Any]) -> MacSettingsRow:
        return cls(key=to_str(_cell(row, 0)), ip_address=to_str(_cell(row, 2)))


@dataclass(frozen=True)
class DcfInterfaceRow:
    """Row of the DCF interfaces table."""

    key: str
    interface_dynamic_link: str

    @classmethod
    def from_row(cls, row: Sequence[Any]) -> DcfInterfaceRow:
        return cls(
            key=to_str(_cell(row, 0)),
            interface_dynamic_link=to_str(_cell(row, 5)),
        )


@dataclass(frozen=True)
class IpOutputStreamRow:
    """
    Common shape of the IP video and audio output stream rows.

    Attributes
    ----------
    key : str
        Stream index (row primary key)
    path : str
        Path label (A1..D4) the stream belongs to
    primary_destination_ip, primary_destination_port
        Main stream destination
    secondary_destination_ip, secondary_destination_port
        Secondary (redundant) stream destination
    """

    key: str
    path: str
    primary_destination_ip: str
    primary_destination_port: int
    secondary_destination_ip: str
    secondary_destination_port: int


@dataclass(frozen=True)
class IpVideoOutputStreamRow(IpOutputStreamRow):
    """Row of the IP video output streams table."""

    @classmethod
    def from_row(cls, row: Sequence[Any]) -> IpVideoOutputStreamRow:
        return cls(
            key=to_str(_cell(row, 0)),
            primary_destination_port=to_int(_cell(row, 5)),
            primary_destination_ip=to_str(_cell(row, 6)),
            path=lookup_path_label(VIDEO_PATH_SELECTION, _cell(row, 9)),
            secondary_destination_port=to_int(_cell(row, 13)),
            secondary_destination_ip=to_str(_cell(row, 14)),
        )


@dataclass(frozen=True)
class IpAudioOutputStreamRow(IpOutputStreamRow):
    """Row of the IP audio output streams table.

    The path label comes from the stream index, not from a column.
    """

    @classmethod
    def from_row(cls, row: Sequence[Any]) -> IpAudioOutputStreamRow:
        key = to_str(_cell(row, 0))
        return cls(
            key=key,
            primary_destination_port=to_int(_cell(row, 3)),
            primary_destination_ip=to_str(_cell(row, 4)),
            path=lookup_path_label(AUDIO_INDEX_PATH_SELECTION, key),
            secondary_destination_port=to_int(_cell(row, 11)),
            secondary_destination_ip=to_str(_cell(row, 12)),
        )

"""Constants, enumerations and static lookup tables for neuron_vsg."""

from __future__ import annotations

from enum import Enum, IntEnum
from types import MappingProxyType
from typing import Mapping

from neuron_vsg.exceptions import UnknownPathSelectionError

__all__ = [
    "AdministrativeState",
    "FlowColor",
    "FlowDirection",
    "Level",
    "OperationalState",
    "ParameterType",
    "ProfileParameterCategory",
    "ResourceMode",
    "Role",
    "TransportType",
    "AUDIO_INDEX_PATH_SELECTION",
    "VIDEO_PATH_SELECTION",
    "lookup_path_label",
    "is_sdi_discreet_value",
]


class FlowDirection(str, Enum):
    """Direction of a flow relative to the owning element."""

    RX = "Rx"
    TX = "Tx"


class TransportType(str, Enum):
    """Flow transport type."""

    SDI = "SDI"
    ST2110_20 = "ST2110-20"  # IP video
    ST2110_30 = "ST2110-30"  # IP audio


class Role(str, Enum):
    """Virtual signal group role."""

    SOURCE = "Source"
    DESTINATION = "Destination"


class OperationalState(str, Enum):
    """Operational state of flows and VSGs."""

    UP = "Up"
    DOWN = "Down"


class AdministrativeState(str, Enum):
    """Administrative state of flows and VSGs."""

    UP = "Up"
    DOWN = "Down"


class Level(IntEnum):
    """Signal level numbers, as stored in the Levels table."""

    VIDEO = 0
    AUDIO1 = 1
    AUDIO2 = 2
    AUDIO3 = 3
    AUDIO4 = 4

    @property
    def label(self) -> str:
        """Display name (Video, Audio1, ...)."""
        return self.name.capitalize()


class FlowColor(str, Enum):
    """Redundancy slot inside a VSG level section.

    Blue is the primary/main flow, Red the secondary/backup flow.
    """

    BLUE = "Blue"
    RED = "Red"


class ResourceMode(str, Enum):
    """Resource availability mode."""

    AVAILABLE = "Available"
    UNAVAILABLE = "Unavailable"


class ProfileParameterCategory(str, Enum):
    """Profile parameter category."""

    CAPABILITY = "Capability"
    CAPACITY = "Capacity"
    CONFIGURATION = "Configuration"


class ParameterType(str, Enum):
    """Profile parameter value type."""

    TEXT = "Text"
    NUMBER = "Number"
    DISCREET = "Discreet"


# Element protocol
PROTOCOL_NAME = "EVS Neuron NAP - CONVERT"
PROTOCOL_VERSION = "Production"

# MAC settings table
MAC_SETTINGS_TABLE_ID = 1000
MAC_SETTINGS_DCF_GROUP_ID = 5

# SDI static I/O table
SDI_STATIC_IO_TABLE_ID = 1700
SDI_STATIC_IO_DCF_GROUP_ID = 1
SDI_STATIC_IO_STATUS_PID = 1702
SDI_STATIC_IO_STATUS_OK = 131

# SDI bidirectional I/O table
SDI_BIDIRECTIONAL_IO_TABLE_ID = 3100
SDI_BIDIRECTIONAL_IO_DCF_GROUP_ID = 2
SDI_BIDIRECTIONAL_IO_DIRECTION_PID = 3102
SDI_BIDIRECTIONAL_IO_DIRECTION_INPUT = 131

# Video paths table
VIDEO_PATHS_TABLE_ID = 2300
VIDEO_PATHS_MAIN_INPUT_PID = 2304
VIDEO_PATHS_BACKUP_INPUT_PID = 2305

# IP output stream tables
IP_VIDEO_OUTPUT_STREAMS_TABLE_ID = 3200
IP_AUDIO_OUTPUT_STREAMS_TABLE_ID = 3400

# DCF interfaces table
DCF_INTERFACES_TABLE_ID = 65049

# Discreet values 529..560 select SDI inputs 1..32
SDI_FLOWS_OFFSET = 528
MIN_SDI_DISCREET_VALUE = 528  # exclusive
MAX_SDI_DISCREET_VALUE = 561  # exclusive

# Resource publishing
RESOURCE_POOL_NAME = "Processors"
CAPABILITY_PARAMETER_NAME = "Linked Source"
RESOURCE_MAX_CONCURRENCY = 1000

# Path selection discreet value (IP video output streams, column 9) -> path label
VIDEO_PATH_SELECTION: Mapping[str, str] = MappingProxyType(
    {
        "675": "A1",
        "676": "A2",
        "677": "A3",
        "678": "A4",
        "679": "B1",
        "680": "B2",
        "681": "B3",
        "682": "B4",
        "683": "C1",
        "684": "C2",
        "685": "C3",
        "686": "C4",
        "687": "D1",
        "688": "D2",
        "689": "D3",
        "690": "D4",
    }
)

# IP audio output stream index -> path label
AUDIO_INDEX_PATH_SELECTION: Mapping[str, str] = MappingProxyType(
    {
        "1": "A1",
        "2": "A2",
        "3": "A3",
        "4": "A4",
        "5": "B1",
        "6": "B2",
        "7": "B3",
        "8": "B4",
        "9": "C1",
        "10": "C2",
        "11": "C3",
        "12": "C4",
        "13": "D1",
        "14": "D2",
        "15": "D3",
        "16": "D4",
    }
)


def lookup_path_label(mapping: Mapping[str, str], value: object) -> str:
    """
    Resolve a path label from one of the path selection tables.

    Parameters
    ----------
    mapping : Mapping[str, str]
        ``VIDEO_PATH_SELECTION`` or ``AUDIO_INDEX_PATH_SELECTION``
    value : object
        Raw cell value; converted with ``str()`` (``675.0`` is read as ``675``)

    Returns
    -------
    str
        Path label (A1..D4)

    Raises
    ------
    UnknownPathSelectionError
        If the value is not one of the 16 mapped values

    Examples
    --------
    >>> lookup_path_label(VIDEO_PATH_SELECTION, 679)
    'B1'
    """
    key = str(value)
    if isinstance(value, float) and value.is_integer():
        key = str(int(value))
    try:
        return mapping[key]
    except KeyError:
        raise UnknownPathSelectionError(
            f"No path selection mapped for value {value!r}"
        ) from None


def is_sdi_discreet_value(value: int) -> bool:
    """Return True if a video path input value selects an SDI input."""
    return MIN_SDI_DISCREET_VALUE < value < MAX_SDI_DISCREET_VALUE

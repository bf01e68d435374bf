"""Element table access for EVS Neuron NAP - CONVERT elements.

Provides element handles, table filtering, named row structs and the
snapshot loader that builds handles from JSON files.
"""

from __future__ import annotations

from .handle import ElementHandle
from .neuron import NeuronElement
from .rows import (
    DcfInterfaceRow,
    IpAudioOutputStreamRow,
    IpOutputStreamRow,
    IpVideoOutputStreamRow,
    MacSettingsRow,
    SdiIoRow,
    VideoPathRow,
)
from .snapshot import (
    element_from_snapshot,
    load_element_snapshot,
    load_element_snapshots,
    select_elements,
)
from .tables import ColumnFilter, ComparisonOperator, ElementTable

__all__ = [
    "ColumnFilter",
    "ComparisonOperator",
    "DcfInterfaceRow",
    "ElementHandle",
    "ElementTable",
    "IpAudioOutputStreamRow",
    "IpOutputStreamRow",
    "IpVideoOutputStreamRow",
    "MacSettingsRow",
    "NeuronElement",
    "SdiIoRow",
    "VideoPathRow",
    "element_from_snapshot",
    "load_element_snapshot",
    "load_element_snapshots",
    "select_elements",
]

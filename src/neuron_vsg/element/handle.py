"""Managed element handle."""

from __future__ import annotations

from dataclasses import dataclass, field

from neuron_vsg.element.tables import ElementTable
from neuron_vsg.exceptions import MissingTableError

__all__ = ["ElementHandle"]


@dataclass
class ElementHandle:
    """
    A managed element and its parameter tables.

    Attributes
    ----------
    name : str
        Element name, used as prefix of every generated object name
    dma_id : int
        Agent id of the element
    element_id : int
        Element id within the agent
    protocol_name : str
        Name of the protocol the element runs
    protocol_version : str
        Protocol version (e.g. ``"Production"``)
    tables : dict[int, ElementTable]
        Tables by table parameter id
    """

    name: str
    dma_id: int
    element_id: int
    protocol_name: str
    protocol_version: str = "Production"
    tables: dict[int, ElementTable] = field(default_factory=dict)

    @property
    def dms_element_id(self) -> str:
        """Element identity in ``"{dma_id}/{element_id}"`` form."""
        return f"{self.dma_id}/{self.element_id}"

    def get_table(self, table_id: int) -> ElementTable:
        try:
            return self.tables[table_id]
        except KeyError:
            raise MissingTableError(self.name, table_id) from None

    def runs(self, protocol_name: str, protocol_version: str | None = None) -> bool:
        """Return True if the element runs the given protocol (and version)."""
        if self.protocol_name != protocol_name:
            return False
        return protocol_version is None or self.protocol_version == protocol_version

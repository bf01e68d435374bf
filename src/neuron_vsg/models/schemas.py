"""Pydantic schemas for CLI boundaries.

These schemas are used ONLY at external boundaries: validating element
snapshots read from disk, and exporting stored objects for display or JSON.
Internal operations use the domain records and ORM objects directly.

Examples
--------
Snapshot validation:
    >>> snapshot = ElementSnapshot.model_validate(json.loads(text))

Export to JSON:
    >>> flow_orm = FlowRepository(session).get_by_name("Neuron 01 SDI 3")
    >>> print(FlowResponse.model_validate(flow_orm).model_dump_json(indent=2))
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

__all__ = [
    # Input schemas (snapshot validation)
    "ElementSnapshot",
    "ProtocolInfo",
    "TableSnapshot",
    # Response schemas (export)
    "FlowResponse",
    "ResourcePropertyResponse",
    "ResourceResponse",
    "VsgLinkedFlowResponse",
    "VsgResponse",
]


# ============================================================================
# Input Schemas (Snapshot Validation)
# ============================================================================


class ProtocolInfo(BaseModel):
    """Protocol an element runs."""

    name: str = Field(..., min_length=1, description="Protocol name")
    version: str = Field("Production", description="Protocol version")


class TableSnapshot(BaseModel):
    """
    Rows of one element table.

    ``columns`` optionally lists the parameter id of each column; when given
    every row must have the same number of cells.
    """

    rows: list[list[Any]] = Field(default_factory=list)
    columns: list[int] | None = Field(
        None,
        description="Column parameter ids, primary key column first",
    )

    @model_validator(mode="after")
    def _check_row_width(self) -> TableSnapshot:
        if self.columns is not None:
            width = len(self.columns)
            for i, row in enumerate(self.rows):
                if len(row) != width:
                    msg = f"row {i} has {len(row)} cells, expected {width}"
                    raise ValueError(msg)
        return self


class ElementSnapshot(BaseModel):
    """
    One managed element and its tables.

    Examples
    --------
    >>> snapshot = ElementSnapshot(
    ...     name="Neuron 01",
    ...     dma_id=346,
    ...     element_id=12,
    ...     protocol={"name": "EVS Neuron NAP - CONVERT"},
    ...     tables={1700: {"rows": [["1", 131]]}},
    ... )
    """

    name: str = Field(..., min_length=1, description="Element name")
    dma_id: int = Field(..., ge=0, description="Agent id")
    element_id: int = Field(..., ge=0, description="Element id within the agent")
    protocol: ProtocolInfo
    tables: dict[int, TableSnapshot] = Field(
        default_factory=dict,
        description="Tables by table parameter id",
    )


# ============================================================================
# Response Schemas (Export)
# ============================================================================


class FlowResponse(BaseModel):
    """Schema for exporting Flow."""

    model_config = ConfigDict(from_attributes=True)

    guid: str
    name: str
    direction: str
    transport_type: str
    element_id: str
    interface: str
    sub_interface: str
    source_ip: str | None
    destination_ip: str | None
    destination_port: int | None
    operational_state: str
    administrative_state: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class VsgLinkedFlowResponse(BaseModel):
    """Level section of a VSG, flattened to flow names."""

    level: str
    blue: str | None = None
    red: str | None = None


class VsgResponse(BaseModel):
    """
    Schema for exporting VirtualSignalGroup.

    Use :meth:`from_orm_vsg` so level sections are flattened.
    """

    model_config = ConfigDict(from_attributes=True)

    guid: str
    name: str
    role: str
    element_id: str
    button_label: str
    operational_state: str
    administrative_state: str
    linked_flows: list[VsgLinkedFlowResponse] = Field(default_factory=list)

    @classmethod
    def from_orm_vsg(cls, vsg) -> VsgResponse:
        sections = sorted(vsg.linked_flows, key=lambda s: s.level.number)
        return cls(
            guid=vsg.guid,
            name=vsg.name,
            role=vsg.role,
            element_id=vsg.element_id,
            button_label=vsg.button_label,
            operational_state=vsg.operational_state,
            administrative_state=vsg.administrative_state,
            linked_flows=[
                VsgLinkedFlowResponse(
                    level=s.level.name,
                    blue=s.blue_flow.name if s.blue_flow else None,
                    red=s.red_flow.name if s.red_flow else None,
                )
                for s in sections
            ],
        )


class ResourcePropertyResponse(BaseModel):
    """Schema for exporting ResourceProperty."""

    model_config = ConfigDict(from_attributes=True)

    name: str
    value: str


class ResourceResponse(BaseModel):
    """Schema for exporting Resource."""

    model_config = ConfigDict(from_attributes=True)

    guid: str
    name: str
    element_id: str
    mode: str
    max_concurrency: int
    properties: list[ResourcePropertyResponse]
    created_at: datetime | None = None
    updated_at: datetime | None = None

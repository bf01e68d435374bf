"""Data models for neuron_vsg."""

from __future__ import annotations

__all__ = [
    # Domain records
    "FlowRecord",
    "LevelFlows",
    "VideoPathData",
    "VirtualSignalGroupRecord",
    # ORM models
    "Flow",
    "Level",
    "ProfileParameter",
    "Resource",
    "ResourceCapability",
    "ResourcePool",
    "VirtualSignalGroup",
    "VsgLinkedFlow",
    # Metadata models
    "ResourceProperty",
]

from .metadata import ResourceProperty
from .orm import (
    Flow,
    Level,
    ProfileParameter,
    Resource,
    ResourceCapability,
    ResourcePool,
    VirtualSignalGroup,
    VsgLinkedFlow,
)
from .records import FlowRecord, LevelFlows, VideoPathData, VirtualSignalGroupRecord

"""Builders turning element tables into flows, VSGs and resources."""

from __future__ import annotations

from .flows import FlowBuilder, IpFlows, SdiFlows
from .pipeline import ElementModel, NeuronVsgGenerator, RunStats, build_element_model
from .resources import ResourcePublisher, resource_mode, resource_name, resource_properties
from .vsgs import VsgBuilder, sdi_flow_key

__all__ = [
    "ElementModel",
    "FlowBuilder",
    "IpFlows",
    "NeuronVsgGenerator",
    "ResourcePublisher",
    "RunStats",
    "SdiFlows",
    "VsgBuilder",
    "build_element_model",
    "resource_mode",
    "resource_name",
    "resource_properties",
    "sdi_flow_key",
]

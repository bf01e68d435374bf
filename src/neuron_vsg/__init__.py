"""Flow, virtual signal group and resource generator for EVS Neuron NAP - CONVERT elements."""

from __future__ import annotations

__version__ = "0.1.0"

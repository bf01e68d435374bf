"""Database package for neuron_vsg."""

from __future__ import annotations

__all__ = [
    "create_db_and_tables",
    "get_engine",
    "get_session",
    # Repositories
    "BaseRepository",
    "FlowRepository",
    "LevelRepository",
    "NamedRepository",
    "ProfileParameterRepository",
    "ResourcePoolRepository",
    "ResourceRepository",
    "VirtualSignalGroupRepository",
]

from .config import create_db_and_tables, get_engine, get_session
from .repository import (
    BaseRepository,
    FlowRepository,
    LevelRepository,
    NamedRepository,
    ProfileParameterRepository,
    ResourcePoolRepository,
    ResourceRepository,
    VirtualSignalGroupRepository,
)

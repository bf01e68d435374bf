"""Typed JSON payloads stored in ORM columns through adaptix."""

from __future__ import annotations

from dataclasses import dataclass

from adaptix import Retort
from adaptix.integrations.sqlalchemy import AdaptixJSON
from sqlalchemy.types import JSON

__all__ = [
    "ResourceProperty",
    "ResourceProperties",
    "adaptix_json_type",
    "find_property",
]

# Shared retort so every typed JSON column serializes the same way
_retort = Retort()

_json_type = JSON()


def adaptix_json_type(payload_type) -> AdaptixJSON:
    """
    Create an AdaptixJSON column type for a dataclass payload.

    Parameters
    ----------
    payload_type : type
        Payload type, e.g. ``list[ResourceProperty]``

    Returns
    -------
    AdaptixJSON
        Column type for ``mapped_column()``

    Examples
    --------
    >>> properties: Mapped[ResourceProperties] = mapped_column(
    ...     adaptix_json_type(ResourceProperties),
    ... )
    """
    return AdaptixJSON(_retort, payload_type, impl=_json_type)


@dataclass
class ResourceProperty:
    """Name/value property attached to a resource."""

    name: str
    value: str


ResourceProperties = list[ResourceProperty]


def find_property(properties: ResourceProperties, name: str) -> str | None:
    """Return the value of the named property, or None."""
    for prop in properties:
        if prop.name == name:
            return prop.value
    return None

"""Exceptions raised by neuron_vsg."""

from __future__ import annotations

__all__ = [
    "MalformedValueError",
    "MissingTableError",
    "MissingTableRowError",
    "NeuronVsgError",
    "SnapshotError",
    "UnknownColumnError",
    "UnknownPathSelectionError",
]


class NeuronVsgError(Exception):
    """Base class for all neuron_vsg errors."""


class SnapshotError(NeuronVsgError):
    """Raised when an element snapshot cannot be read or validated."""

    def __init__(self, message, path=None):
        super().__init__(message)
        self.path = path


class MissingTableError(NeuronVsgError):
    """Raised when an element does not expose a requested table."""

    def __init__(self, element_name, table_id):
        super().__init__(f"Element {element_name!r} has no table {table_id}")
        self.element_name = element_name
        self.table_id = table_id


class MissingTableRowError(NeuronVsgError, KeyError):
    """
    Raised when a keyed lookup against table rows (or rows derived from them)
    finds nothing.
    """

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class UnknownColumnError(NeuronVsgError, KeyError):
    """Raised when a column filter names a parameter id the table does not have."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class UnknownPathSelectionError(NeuronVsgError, KeyError):
    """Raised when a discreet value or stream index has no path label."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class MalformedValueError(NeuronVsgError, ValueError):
    """Raised when a table cell cannot be converted to the expected type."""

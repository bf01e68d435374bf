"""Load element snapshots from JSON files.

A snapshot captures one element: its identity, protocol and the tables this
package reads. Example::

    {
      "name": "Neuron 01",
      "dma_id": 346,
      "element_id": 12,
      "protocol": {"name": "EVS Neuron NAP - CONVERT", "version": "Production"},
      "tables": {
        "1700": {"rows": [["1", 131], ["2", 130]]},
        "65049": {"rows": [["7", "", "", "", "", "1;1"]]}
      }
    }

``columns`` may be given per table to list the column parameter ids
explicitly.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable, Iterator

from loguru import logger
from pydantic import ValidationError

from neuron_vsg.element.handle import ElementHandle
from neuron_vsg.element.tables import ElementTable
from neuron_vsg.exceptions import SnapshotError
from neuron_vsg.models.schemas import ElementSnapshot

__all__ = [
    "element_from_snapshot",
    "load_element_snapshot",
    "load_element_snapshots",
    "select_elements",
]


def element_from_snapshot(snapshot: ElementSnapshot) -> ElementHandle:
    """Build an element handle from a validated snapshot."""
    tables = {
        table_id: ElementTable(
            table_id=table_id,
            rows=table.rows,
            column_pids=table.columns,
        )
        for table_id, table in snapshot.tables.items()
    }
    return ElementHandle(
        name=snapshot.name,
        dma_id=snapshot.dma_id,
        element_id=snapshot.element_id,
        protocol_name=snapshot.protocol.name,
        protocol_version=snapshot.protocol.version,
        tables=tables,
    )


def load_element_snapshot(path: str | Path) -> ElementHandle:
    """
    Load one element snapshot.

    Parameters
    ----------
    path : str | Path
        JSON snapshot file

    Returns
    -------
    ElementHandle
        The element described by the file

    Raises
    ------
    SnapshotError
        If the file cannot be read, is not JSON, or fails validation
    """
    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise SnapshotError(f"Cannot read snapshot {path}: {e}", path) from e
    except json.JSONDecodeError as e:
        raise SnapshotError(f"Invalid JSON in snapshot {path}: {e}", path) from e

    try:
        snapshot = ElementSnapshot.model_validate(raw)
    except ValidationError as e:
        raise SnapshotError(f"Invalid snapshot {path}:\n{e}", path) from e

    logger.debug(f"Loaded snapshot {path.name}: {snapshot.name} ({len(snapshot.tables)} tables)")
    return element_from_snapshot(snapshot)


def load_element_snapshots(
    source: str | Path,
    *,
    pattern: str = "*.json",
) -> list[ElementHandle]:
    """
    Load every snapshot in a directory (sorted by file name), or a single file.

    Raises
    ------
    SnapshotError
        If the path does not exist or any snapshot is invalid
    """
    source = Path(source)
    if source.is_file():
        return [load_element_snapshot(source)]
    if not source.is_dir():
        raise SnapshotError(f"Snapshot path not found: {source}", source)
    return [load_element_snapshot(p) for p in sorted(source.glob(pattern))]


def select_elements(
    handles: Iterable[ElementHandle],
    protocol_name: str,
    protocol_version: str | None = None,
) -> Iterator[ElementHandle]:
    """Yield the elements running the given protocol name and version."""
    for handle in handles:
        if handle.runs(protocol_name, protocol_version):
            yield handle
        else:
            logger.debug(
                f"Skipping {handle.name}: runs {handle.protocol_name!r} "
                f"{handle.protocol_version!r}"
            )

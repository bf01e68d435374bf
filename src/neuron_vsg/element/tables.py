"""Element tables and column filtering.

An element exposes its parameter tables as ordered rows. Column 0 holds the
primary key. Columns are addressed by parameter id (pid). When a snapshot does
not list its column pids they follow the usual protocol convention of
``table_id + 1 + column_index``.
"""

from __future__ import annotations

import operator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterable, Sequence

from neuron_vsg.exceptions import UnknownColumnError

__all__ = ["ColumnFilter", "ComparisonOperator", "ElementTable", "Row"]

Row = tuple[Any, ...]


class ComparisonOperator(str, Enum):
    """Comparison used by a column filter."""

    EQUAL = "=="
    NOT_EQUAL = "!="
    GREATER = ">"
    GREATER_OR_EQUAL = ">="
    LESS = "<"
    LESS_OR_EQUAL = "<="


_OPERATORS: dict[ComparisonOperator, Callable[[Any, Any], bool]] = {
    ComparisonOperator.EQUAL: operator.eq,
    ComparisonOperator.NOT_EQUAL: operator.ne,
    ComparisonOperator.GREATER: operator.gt,
    ComparisonOperator.GREATER_OR_EQUAL: operator.ge,
    ComparisonOperator.LESS: operator.lt,
    ComparisonOperator.LESS_OR_EQUAL: operator.le,
}


def _as_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(str(value).strip())
    except ValueError:
        return None


@dataclass(frozen=True)
class ColumnFilter:
    """
    Filter on a single column.

    Values compare numerically when both sides parse as numbers, and as
    strings otherwise.

    Examples
    --------
    >>> ColumnFilter(pid=1702, value=131).matches(131.0)
    True
    >>> ColumnFilter(pid=2304, value=529, op=ComparisonOperator.GREATER_OR_EQUAL).matches("531")
    True
    """

    pid: int
    value: Any
    op: ComparisonOperator = ComparisonOperator.EQUAL

    def matches(self, cell: Any) -> bool:
        compare = _OPERATORS[self.op]
        left, right = _as_number(cell), _as_number(self.value)
        if left is not None and right is not None:
            return compare(left, right)
        return compare(str(cell), str(self.value))


@dataclass
class ElementTable:
    """
    In-memory rows of one element table.

    Parameters
    ----------
    table_id : int
        Table parameter id
    rows : Sequence[Sequence[Any]]
        Row tuples, primary key in column 0
    column_pids : Sequence[int] | None
        Parameter id of each column; defaults to ``table_id + 1 + i``
    """

    table_id: int
    rows: Sequence[Sequence[Any]] = field(default_factory=list)
    column_pids: Sequence[int] | None = None

    def __post_init__(self) -> None:
        self.rows = [tuple(row) for row in self.rows]
        if self.column_pids is not None:
            self.column_pids = list(self.column_pids)

    def column_index(self, pid: int) -> int:
        """Return the column index of a parameter id."""
        if self.column_pids:
            try:
                return self.column_pids.index(pid)
            except ValueError:
                pass
        else:
            index = pid - self.table_id - 1
            if index >= 0 and (not self.rows or index < len(self.rows[0])):
                return index
        raise UnknownColumnError(f"Table {self.table_id} has no column {pid}")

    def get_data(self) -> dict[str, Row]:
        """Return rows keyed by primary key, in table order."""
        return {str(row[0]): row for row in self.rows}

    def get_primary_keys(self) -> list[str]:
        return [str(row[0]) for row in self.rows]

    def get_rows(self) -> list[Row]:
        return list(self.rows)

    def query_data(self, filters: Iterable[ColumnFilter]) -> list[Row]:
        """
        Return the rows matching all filters, in table order.

        Raises
        ------
        UnknownColumnError
            If a filter names a column the table does not have
        """
        resolved = [(self.column_index(f.pid), f) for f in filters]
        return [
            row
            for row in self.rows
            if all(f.matches(row[idx]) for idx, f in resolved)
        ]

    def __len__(self) -> int:
        return len(self.rows)

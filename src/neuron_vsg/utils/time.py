"""Database-side UTC timestamps for the ``created_at``/``updated_at`` columns."""

from __future__ import annotations

import sqlalchemy as sa
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.sql import expression

__all__ = ["utcnow"]


class utcnow(expression.FunctionElement):  # noqa: N801
    """
    Current UTC time, evaluated by the database.

    Used as ``server_default`` and ``onupdate`` of the timestamp columns.
    """

    type = sa.DateTime()
    inherit_cache = True


@compiles(utcnow, "postgresql")
def _utcnow_postgresql(_element, _compiler, **_kw):
    return "TIMEZONE('utc', CURRENT_TIMESTAMP)"


@compiles(utcnow, "mssql")
def _utcnow_mssql(_element, _compiler, **_kw):
    return "SYSUTCDATETIME()"


@compiles(utcnow)
def _utcnow_default(_element, _compiler, **_kw):
    # CURRENT_TIMESTAMP is UTC on SQLite
    return "CURRENT_TIMESTAMP"

"""Engine and session helpers for the flow/VSG/resource store."""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING

from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy.engine import Engine

__all__ = ["create_db_and_tables", "get_engine", "get_session"]

_MEMORY_URLS = ("sqlite://", "sqlite:///:memory:")


def get_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Create an engine for a store URL.

    Parameters
    ----------
    database_url : str
        Any SQLAlchemy URL, e.g. ``sqlite:///neuron_vsg.sqlite``,
        ``sqlite:///:memory:`` or ``postgresql+psycopg://host/neuron_vsg``
    echo : bool, optional
        Log emitted SQL

    Returns
    -------
    Engine

    Notes
    -----
    SQLite engines enforce foreign keys on every connection. An in-memory
    SQLite store keeps a single shared connection, otherwise each session
    would see its own empty database.
    """
    is_sqlite = database_url.startswith("sqlite")
    kwargs = {}
    if is_sqlite:
        kwargs["connect_args"] = {"check_same_thread": False}
        if database_url in _MEMORY_URLS:
            kwargs["poolclass"] = StaticPool

    engine = create_engine(database_url, echo=echo, **kwargs)

    if is_sqlite:

        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_conn, _record):
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


def create_db_and_tables(engine: Engine) -> None:
    """
    Create the store tables that do not exist yet.

    Examples
    --------
    >>> engine = get_engine("sqlite:///:memory:")
    >>> create_db_and_tables(engine)
    """
    # the model modules must be imported so their tables are registered
    from neuron_vsg.models import orm

    orm.Base.metadata.create_all(engine)


@contextmanager
def get_session(engine: Engine) -> Iterator[Session]:
    """
    Session committed when the block exits normally, rolled back otherwise.

    Examples
    --------
    >>> with get_session(engine) as session:
    ...     LevelRepository(session).ensure_defaults()
    """
    session = Session(engine)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()

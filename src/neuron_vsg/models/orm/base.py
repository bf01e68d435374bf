"""Declarative base shared by the flow, VSG and resource tables."""

from __future__ import annotations

from inspect import cleandoc

from sqlalchemy import MetaData, event
from sqlalchemy.orm import DeclarativeBase

# Stable constraint names, so the schema can be diffed across databases
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)


@event.listens_for(Base.metadata, "before_create")
def _comment_tables(target, connection, **kw):
    """Use the summary line of each model docstring as its table comment."""
    for mapper in Base.registry.mappers:
        table = mapper.local_table
        doc = mapper.class_.__doc__
        if doc and table.comment is None and table.name in target.tables:
            table.comment = cleandoc(doc).splitlines()[0]

"""Signal level registry."""

from __future__ import annotations

from sqlalchemy import Integer
from sqlalchemy.orm import Mapped, mapped_column

from neuron_vsg.models.orm.base import Base
from neuron_vsg.utils import Created_at, Pk, UniqueName


class Level(Base):
    """
    Registry of signal levels a VSG section can be keyed by.

    Attributes
    ----------
    pk : int
        Integer primary key
    number : int
        Level number (Video = 0, Audio1 = 1, ...)
    name : str
        Display name (Video, Audio1, ...)
    """

    __tablename__ = "level"

    pk: Mapped[Pk]

    number: Mapped[int] = mapped_column(
        Integer,
        unique=True,
        index=True,
        comment="Level number",
    )

    name: Mapped[UniqueName]

    created_at: Mapped[Created_at]

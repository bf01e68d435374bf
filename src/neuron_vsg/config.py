"""Runtime settings.

Settings come from ``NEURON_VSG_*`` environment variables, optionally loaded
from a ``.env`` file first (``${VAR}`` interpolation is supported)::

    NEURON_VSG_DATABASE_URL=sqlite:///${HOME}/neuron_vsg.sqlite
    NEURON_VSG_PROTOCOL_VERSION=Production
    NEURON_VSG_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from neuron_vsg.constants import (
    CAPABILITY_PARAMETER_NAME,
    PROTOCOL_NAME,
    PROTOCOL_VERSION,
    RESOURCE_MAX_CONCURRENCY,
    RESOURCE_POOL_NAME,
)

__all__ = ["ENV_PREFIX", "Settings"]

ENV_PREFIX = "NEURON_VSG_"


class Settings(BaseModel):
    """
    Generator settings.

    Examples
    --------
    >>> settings = Settings.from_env(".env")
    >>> settings.database_url
    'sqlite:///neuron_vsg.sqlite'
    """

    database_url: str = Field(
        "sqlite:///neuron_vsg.sqlite",
        description="SQLAlchemy URL of the flow/VSG/resource store",
    )
    protocol_name: str = Field(PROTOCOL_NAME, description="Protocol of the elements to process")
    protocol_version: str = Field(PROTOCOL_VERSION, description="Protocol version to process")
    resource_pool_name: str = Field(RESOURCE_POOL_NAME, min_length=1)
    capability_name: str = Field(CAPABILITY_PARAMETER_NAME, min_length=1)
    max_concurrency: int = Field(RESOURCE_MAX_CONCURRENCY, ge=1)
    log_level: str = Field("INFO", description="loguru level name")

    @classmethod
    def from_env(cls, env_file: str | Path | None = None, **overrides) -> Settings:
        """
        Build settings from the environment.

        Parameters
        ----------
        env_file : str | Path | None
            Optional ``.env`` file loaded (overriding the process environment)
            before the variables are read
        **overrides
            Values that take precedence over the environment; None values are
            ignored

        Raises
        ------
        FileNotFoundError
            If ``env_file`` is given and does not exist
        pydantic.ValidationError
            If a variable has an invalid value
        """
        if env_file is not None:
            env_file = Path(env_file)
            if not env_file.exists():
                msg = f"Environment file not found: {env_file}"
                raise FileNotFoundError(msg)
            load_dotenv(env_file, override=True, interpolate=True)

        values = {}
        for name in cls.model_fields:
            env_value = os.getenv(f"{ENV_PREFIX}{name.upper()}")
            if env_value is not None:
                values[name] = env_value
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls.model_validate(values)

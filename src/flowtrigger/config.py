"""Configuration for flowtrigger.

FlowTriggerConfig holds the settings the store, the HTTP execution gateway
and the CLI share. Values come from constructor arguments or, through
``from_env()``, from ``FLOWTRIGGER_*`` environment variables.
"""

from __future__ import annotations

import os
from typing import Optional

from pydantic import BaseModel, Field, ValidationError

from flowtrigger.exceptions import FlowTriggerError

_ENV_PREFIX = "FLOWTRIGGER_"

# field name -> environment variable suffix
_ENV_FIELDS: dict[str, str] = {
    "db_path": "DB",
    "db_url": "DB_URL",
    "executor_url": "EXECUTOR_URL",
    "executor_timeout": "EXECUTOR_TIMEOUT",
    "connect_retries": "CONNECT_RETRIES",
}


class FlowTriggerConfig(BaseModel):
    """Process-level settings."""

    db_path: str = ".flowtrigger.db"
    db_url: Optional[str] = None
    executor_url: Optional[str] = None
    executor_timeout: float = Field(default=30.0, gt=0)
    connect_retries: int = Field(default=3, ge=1)

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None, **overrides: object) -> FlowTriggerConfig:
        """Build a config from environment variables.

        Explicit keyword overrides win over the environment; keys whose
        override value is None fall through to the environment.

        Raises:
            FlowTriggerError: If a value does not validate (e.g. a
                non-numeric timeout).
        """
        env = os.environ if environ is None else environ
        values: dict[str, object] = {}
        for name, suffix in _ENV_FIELDS.items():
            raw = env.get(_ENV_PREFIX + suffix)
            if raw is not None and raw != "":
                values[name] = raw
        for name, value in overrides.items():
            if value is not None:
                values[name] = value
        try:
            return cls.model_validate(values)
        except ValidationError as e:
            raise FlowTriggerError(f"Invalid configuration: {e}") from e

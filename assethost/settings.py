"""
assethost/settings.py

Server configuration: compiled-in defaults plus optional environment overrides.

Defaults:
    port        8000             — the demo server's port
    host        0.0.0.0          — all interfaces
    asset_root  assethost/app/   — resolved from this file's location, not the CWD

Environment overrides (read once, at startup):
    ASSETHOST_PORT        e.g. 8080 for the second demo instance; 0 = any free port
    ASSETHOST_HOST        bind address
    ASSETHOST_ROOT        directory to serve
    ASSETHOST_ACCESS_LOG  "all" to log every request (default hides 200/304 lines)
"""

import os
from pathlib import Path
from typing import Mapping, Optional

from pydantic import BaseModel, Field, ValidationError

from assethost.errors import ConfigError

VERSION = "0.1.0"

DEFAULT_HOST       = "0.0.0.0"
DEFAULT_PORT       = 8000
DEFAULT_ASSET_ROOT = Path(__file__).resolve().parent / "app"

PORT_ENV       = "ASSETHOST_PORT"
HOST_ENV       = "ASSETHOST_HOST"
ROOT_ENV       = "ASSETHOST_ROOT"
ACCESS_LOG_ENV = "ASSETHOST_ACCESS_LOG"


class ServerSettings(BaseModel):
    host: str = DEFAULT_HOST
    port: int = Field(default=DEFAULT_PORT, ge=0, le=65535)
    asset_root: Path = DEFAULT_ASSET_ROOT
    quiet_access_log: bool = True    # hide 200/304 access lines, keep errors

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ServerSettings":
        """
        Build settings from the environment, falling back to defaults for unset keys.

        Raises ConfigError when a value does not validate.
        """
        env = os.environ if environ is None else environ
        values: dict = {}
        if env.get(HOST_ENV):
            values["host"] = env[HOST_ENV]
        if env.get(PORT_ENV):
            values["port"] = env[PORT_ENV].strip()
        if env.get(ROOT_ENV):
            values["asset_root"] = Path(env[ROOT_ENV]).expanduser()
        if env.get(ACCESS_LOG_ENV):
            values["quiet_access_log"] = env[ACCESS_LOG_ENV].strip().lower() != "all"

        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigError(f"invalid server configuration: {e}") from e

"""
assethost/errors.py

Startup failures. Every one of these is fatal: server.main() logs it and exits
non-zero. There is no retry and no degraded mode.

Per-request errors (missing file, wrong method) never reach this module; Starlette's
StaticFiles answers those with 404 / 405 on its own.
"""


class StartupError(RuntimeError):
    """Base class for anything that stops the server from reaching SERVING."""


class BindFailure(StartupError):
    """The listen address is already in use or cannot be bound."""


class AssetRootMissing(StartupError):
    """The asset root does not exist, is not a directory, or cannot be read."""


class ConfigError(StartupError):
    """An environment override failed validation (e.g. ASSETHOST_PORT=http)."""

"""
assethost/server.py

Static asset server startup: one parameterized routine for every instance.

Lifecycle:
    UNBOUND  --bind()-->  SERVING
    There is no way back short of process exit. No shutdown endpoint, no hot reload.

bind() does all the work that can fail: validate the asset root, bind + listen on the
socket, build the ASGI app, print the startup line. serve() then hands the already
listening socket to uvicorn and blocks. Failures surface immediately as StartupError
subclasses; nothing is retried.

Usage:
    python server.py                      # port 8000, bundled app/ directory
    ASSETHOST_PORT=8080 python server.py  # second demo instance
"""

import logging
import socket
import sys
from enum import Enum
from pathlib import Path
from typing import Optional, Union

import uvicorn

from assethost.assets import create_app, resolve_asset_root
from assethost.errors import BindFailure, StartupError
from assethost.settings import DEFAULT_HOST, ServerSettings

logger = logging.getLogger(__name__)

STARTUP_MESSAGE = "Server started at http://localhost:{port}"
LISTEN_BACKLOG  = 128


class ServerState(str, Enum):
    """UNBOUND until bind() succeeds, then SERVING for the life of the process."""

    UNBOUND = "unbound"
    SERVING = "serving"


class QuietAccessFilter(logging.Filter):
    """Drop uvicorn access lines for 200 / 304 responses; keep everything else."""

    QUIET_STATUSES = (200, 304)

    def filter(self, record: logging.LogRecord) -> bool:
        # uvicorn.access args: (client_addr, method, path, http_version, status_code)
        args = record.args
        if isinstance(args, tuple) and len(args) >= 5:
            return args[4] not in self.QUIET_STATUSES
        return True


def bind_listener(host: str, port: int) -> socket.socket:
    """
    Bind and listen on (host, port). Port 0 lets the OS pick.

    SO_REUSEADDR only skips TIME_WAIT leftovers; a second live listener on the same
    port still fails here with BindFailure.
    """
    family = socket.AF_INET6 if ":" in host else socket.AF_INET
    sock = socket.socket(family, socket.SOCK_STREAM)
    sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    try:
        sock.bind((host, port))
        sock.listen(LISTEN_BACKLOG)
    except OSError as e:
        sock.close()
        raise BindFailure(f"cannot bind {host}:{port}: {e.strerror or e}") from e
    return sock


def startup_message(port: int) -> str:
    return STARTUP_MESSAGE.format(port=port)


def announce(port: int) -> None:
    print(startup_message(port), flush=True)


class AssetServer:
    """One listener serving one asset root."""

    def __init__(
        self,
        port: int,
        root: Union[str, Path],
        host: str = DEFAULT_HOST,
        quiet_access_log: bool = True,
    ):
        self.host  = host
        self.port  = port
        self.root  = Path(root)
        self.quiet_access_log = quiet_access_log
        self.state = ServerState.UNBOUND

        self.socket:  Optional[socket.socket] = None
        self.uvicorn: Optional[uvicorn.Server] = None

    def bind(self) -> None:
        """
        Unbound -> Serving. Validates the root before touching the network so a bad
        root never leaves a half-open listener behind.

        Raises:
            AssetRootMissing: root absent, not a directory, or unreadable
            BindFailure:      port in use or address not bindable
            StartupError:     already bound
        """
        if self.state is ServerState.SERVING:
            raise StartupError(f"already serving on port {self.port}")

        root = resolve_asset_root(self.root)
        app  = create_app(root)

        sock = bind_listener(self.host, self.port)
        self.port = sock.getsockname()[1]
        self.root = root
        self.socket = sock

        config = uvicorn.Config(app, host=self.host, port=self.port, log_level="info")
        # uvicorn.Config has already applied its logging config at this point;
        # the access logger is process-wide, so the last bind decides its filtering
        access_logger = logging.getLogger("uvicorn.access")
        for f in [f for f in access_logger.filters if isinstance(f, QuietAccessFilter)]:
            access_logger.removeFilter(f)
        if self.quiet_access_log:
            access_logger.addFilter(QuietAccessFilter())
        self.uvicorn = uvicorn.Server(config)

        self.state = ServerState.SERVING
        announce(self.port)

    def serve(self) -> None:
        """Block, serving requests on the bound socket until the process exits."""
        if self.state is not ServerState.SERVING:
            raise StartupError("serve() called before bind()")
        self.uvicorn.run(sockets=[self.socket])

    def start(self) -> None:
        self.bind()
        self.serve()


def start(
    port: int,
    root: Union[str, Path],
    host: str = DEFAULT_HOST,
    quiet_access_log: bool = True,
) -> None:
    """Bind `port`, announce it, then serve `root` for the life of the process."""
    AssetServer(port, root, host=host, quiet_access_log=quiet_access_log).start()


def main() -> None:
    """CLI entry point. No flags: configuration comes from defaults + ASSETHOST_* env."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        settings = ServerSettings.from_env()
        start(
            settings.port,
            settings.asset_root,
            host=settings.host,
            quiet_access_log=settings.quiet_access_log,
        )
    except StartupError as e:
        logger.error("Startup failed: %s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()

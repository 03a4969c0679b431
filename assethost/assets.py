"""
assethost/assets.py

ASGI application factory for the static asset server.

Everything under the asset root is served verbatim at "/":
  GET /                  — index.html
  GET /scripts/app.js    — any file, Content-Type inferred from its extension
  GET /missing           — 404
  POST /anything         — 405

Directory index resolution, ETag / Last-Modified and 304 handling all come from
Starlette's StaticFiles. Docs and OpenAPI routes are switched off so no path is
shadowed.
"""

import logging
import os
from pathlib import Path
from typing import Union

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from assethost.errors import AssetRootMissing
from assethost.settings import VERSION

logger = logging.getLogger(__name__)


def resolve_asset_root(root: Union[str, Path]) -> Path:
    """Absolute path of the asset root; raises AssetRootMissing if it can't be served."""
    path = Path(root).expanduser().resolve()
    if not path.exists():
        raise AssetRootMissing(f"asset root {path} does not exist")
    if not path.is_dir():
        raise AssetRootMissing(f"asset root {path} is not a directory")
    if not os.access(path, os.R_OK | os.X_OK):
        raise AssetRootMissing(f"asset root {path} is not readable")
    return path


def create_app(asset_root: Union[str, Path]) -> FastAPI:
    root = resolve_asset_root(asset_root)

    app = FastAPI(
        title="assethost",
        description="Serves a directory tree over HTTP, unmodified.",
        version=VERSION,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],    # intentional for localhost dev
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    # html=True: "/" and "/dir/" resolve to index.html, "/dir" redirects to "/dir/"
    app.mount("/", StaticFiles(directory=root, html=True), name="assets")
    logger.info("Asset root: %s", root)
    return app

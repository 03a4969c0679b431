"""
assethost/main.py

Module-level ASGI app for running under uvicorn directly:
    uvicorn assethost.main:app --port 8000

The asset root comes from ASSETHOST_ROOT, else the bundled app/ directory.
Host and port belong to uvicorn's own flags here; `python server.py` is the
entry point that reads ASSETHOST_PORT / ASSETHOST_HOST.
"""

from assethost.assets import create_app
from assethost.settings import ServerSettings

app = create_app(ServerSettings.from_env().asset_root)

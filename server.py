#!/usr/bin/env python3
"""
Serve the demo front end (assethost/app/) as a static site on http://localhost:8000

Usage:
    python server.py
    ASSETHOST_PORT=8080 python server.py

Same as the `assethost` console script once the package is installed.
"""
from assethost.server import main

if __name__ == "__main__":
    main()

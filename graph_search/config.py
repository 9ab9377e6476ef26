"""
Configuration constants for the graph search playground.

Values can be overridden through environment variables when running the
server locally.
"""

import os

# -----------------------------
# Server
# -----------------------------

HOST = os.environ.get("GRAPH_SEARCH_HOST", "0.0.0.0")
PORT = int(os.environ.get("GRAPH_SEARCH_PORT", "8000"))
RELOAD = os.environ.get("GRAPH_SEARCH_RELOAD", "1") not in {"0", "false", "False"}

# Local dev frontends (Vite/Next/CRA)
CORS_ORIGINS = [
    "http://localhost:5173",
    "http://localhost:3000",
    "*",
]

# -----------------------------
# Logging
# -----------------------------

# Log level (DEBUG, INFO, WARNING, ERROR)
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

# Oldest events are dropped once the in-memory log grows past this
EVENT_LOG_LIMIT = 500

# -----------------------------
# Canvas geometry
# -----------------------------

CANVAS_WIDTH = 800
CANVAS_HEIGHT = 600
# nodes are never placed closer than this to the canvas border
CANVAS_MARGIN = 50
NODE_RADIUS = 20

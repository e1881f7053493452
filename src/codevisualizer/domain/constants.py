from __future__ import annotations

"""
Domain Constants and Static Data Structures.

Provides centralized access to layout geometry, emphasis levels, colour
palettes and remote API defaults.
"""

from typing import Dict, List, Tuple

APP_NAME = "codevisualizer"
APP_VERSION = "1.0.0"

# -----------------------------------------------------------------------------
# LAYOUT GEOMETRY
# -----------------------------------------------------------------------------
DEFAULT_MAX_DEPTH = 4

# Child paths never start with "/", so the root id cannot collide with them
ROOT_NODE_ID = "/"

TREE_HORIZONTAL_SPACING = 180.0
TREE_VERTICAL_SPACING = 150.0
RADIAL_RING_SPACING = 250.0
FULL_CIRCLE = (0.0, 360.0)

FULL_EMPHASIS = 1.0
DIMMED_EMPHASIS = 0.2

# -----------------------------------------------------------------------------
# COLOUR PALETTES
# -----------------------------------------------------------------------------
STANDARD_COLORS: Dict[str, str] = {
    "folder": "#3b82f6",
    "file": "#64748b",
    "edge": "#475569",
}

FILE_TYPE_FOLDER_COLOR = "#3b82f6"
FILE_TYPE_DEFAULT_COLOR = "#64748b"

# Evaluated in order; first suffix group that matches wins
FILE_TYPE_COLORS: List[Tuple[Tuple[str, ...], str]] = [
    ((".ts", ".tsx"), "#2563eb"),
    ((".js", ".jsx"), "#facc15"),
    ((".css", ".scss"), "#ec4899"),
    ((".json",), "#f97316"),
]

# Root first, lightest entry reused for every deeper level
DEPTH_PALETTE: List[str] = [
    "#3b82f6",
    "#60a5fa",
    "#93c5fd",
    "#bfdbfe",
    "#dbeafe",
]

# -----------------------------------------------------------------------------
# REMOTE API
# -----------------------------------------------------------------------------
GITHUB_API_URL = "https://api.github.com"
GITHUB_TOKEN_ENV = "GITHUB_TOKEN"
DEFAULT_BRANCH = "main"

from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides cross-platform path resolution for the read-only user configuration
and safe writing of exported artifacts.
"""

import json
import os
from typing import Any, Optional, Tuple

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "CodeVisualizer"
UNIX_APP_DIR_NAME = ".codevisualizer"
CONFIG_FILE_NAME = "config.json"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for application data.

    The directory is not created: nothing is persisted there by the
    application, users may place a config file in it.

    Standards:
    - Windows: %LOCALAPPDATA%/CodeVisualizer
    - Linux/Mac: ~/.codevisualizer

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = ""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        path = os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME)

    return os.path.abspath(path)


def get_user_config_path() -> str:
    """Absolute path of the optional per-user JSON configuration."""
    return os.path.join(get_user_data_dir(), CONFIG_FILE_NAME)


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)

# -----------------------------------------------------------------------------
# ARTIFACT WRITING
# -----------------------------------------------------------------------------

def write_json_file(path: str, payload: Any) -> Tuple[bool, Optional[str]]:
    """
    Write a JSON document, creating parent directories as needed.

    Args:
        path: Destination file.
        payload: JSON-serializable object.

    Returns:
        Tuple[bool, Optional[str]]: (Success flag, Error message if applicable).
    """
    target = normalize_path(path, path)
    try:
        parent = os.path.dirname(target)
        if parent:
            os.makedirs(parent, exist_ok=True)
        with open(target, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=2)
        return True, None
    except OSError as e:
        return False, str(e)

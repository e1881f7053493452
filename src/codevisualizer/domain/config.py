from __future__ import annotations

"""
Configuration Domain Management.

Provides the default runtime configuration and loads optional overrides
from a JSON file and the environment. Configuration is read-only: the
application never writes it back.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

from codevisualizer.domain.constants import (
    DEFAULT_MAX_DEPTH,
    GITHUB_API_URL,
    GITHUB_TOKEN_ENV,
)
from codevisualizer.infra.fs import get_user_config_path

logger = logging.getLogger(__name__)

DEFAULT_REQUEST_TIMEOUT = 10
DEFAULT_MAX_WORKERS = 8

# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Layout
        "max_depth": DEFAULT_MAX_DEPTH,
        "layout": "tree",
        "theme": "file-type",
        "search_query": "",

        # Remote repository
        "branch": "",
        "github_token": "",
        "api_base_url": GITHUB_API_URL,
        "request_timeout": DEFAULT_REQUEST_TIMEOUT,

        # Classification
        "max_workers": DEFAULT_MAX_WORKERS,
    }


# -----------------------------------------------------------------------------
# Loading Logic
# -----------------------------------------------------------------------------
def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Resolve the active configuration.

    Layers, lowest priority first: defaults, the JSON file at `path` (or the
    per-user config file when `path` is None), then the token environment
    variable when the file did not set one.

    Args:
        path: Optional explicit JSON configuration file.

    Returns:
        Dict[str, Any]: The merged, unvalidated configuration.
    """
    config = get_default_config()
    config_path = path or get_user_config_path()

    if os.path.exists(config_path):
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = json.load(f)

            if isinstance(data, dict):
                config.update(data)
                logger.debug(f"Configuration loaded from {config_path}")
            else:
                logger.warning(f"Ignoring config file {config_path}: root is not an object.")

        except (OSError, ValueError) as e:
            logger.error(f"Failed to load config '{config_path}': {e}. Using defaults.")
    elif path:
        logger.warning(f"Config file not found: {path}")

    if not config.get("github_token"):
        config["github_token"] = os.environ.get(GITHUB_TOKEN_ENV, "")

    return config

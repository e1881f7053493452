from __future__ import annotations

from typing import Dict, Optional

from codevisualizer.domain.constants import APP_VERSION

USER_AGENT = f"CodeVisualizer-Client/{APP_VERSION}"
DEFAULT_TIMEOUT = 10
GITHUB_ACCEPT = "application/vnd.github+json"


def build_headers(token: Optional[str] = None) -> Dict[str, str]:
    """Standard request headers, with bearer auth when a token is set."""
    headers = {"User-Agent": USER_AGENT, "Accept": GITHUB_ACCEPT}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers

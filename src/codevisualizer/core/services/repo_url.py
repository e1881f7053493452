from __future__ import annotations

"""Repository reference parsing."""

import re
from typing import Tuple

from codevisualizer.domain.errors import InvalidRepoUrlError

_URL_RX = re.compile(r"github\.com[/:]([^/\s]+)/([^/\s?#]+)", re.IGNORECASE)
_SHORT_RX = re.compile(r"^([A-Za-z0-9_.-]+)/([A-Za-z0-9_.-]+)$")


def parse_repo_url(text: str) -> Tuple[str, str]:
    """
    Extract (owner, name) from a GitHub URL or an 'owner/repo' shorthand.

    Accepts https and ssh URLs, trailing path segments and a '.git' suffix.

    Raises:
        InvalidRepoUrlError: When no repository can be identified.
    """
    value = (text or "").strip()
    match = _URL_RX.search(value) or _SHORT_RX.match(value)
    if not match:
        raise InvalidRepoUrlError(
            f"Invalid GitHub repository '{text}'. Use https://github.com/owner/repo or owner/repo."
        )

    owner, name = match.group(1), match.group(2)
    if name.endswith(".git"):
        name = name[:-4]
    if not name:
        raise InvalidRepoUrlError(f"Invalid GitHub repository '{text}'.")
    return owner, name

from __future__ import annotations

"""
Network Communication Infrastructure.

Exposes the GitHub REST client used to fetch repository metadata, trees and
file contents.
"""

from codevisualizer.infra.network.common import USER_AGENT, build_headers
from codevisualizer.infra.network.github_client import (
    GitHubClient,
    fetch_file_content,
    fetch_repo_details,
    fetch_repo_tree,
)

__all__ = [
    "GitHubClient",
    "fetch_repo_details",
    "fetch_repo_tree",
    "fetch_file_content",
    "build_headers",
    "USER_AGENT",
]

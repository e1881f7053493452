from __future__ import annotations

"""
GitHub REST Client.

Fetches repository metadata, the recursive file listing and individual file
contents. Metadata and tree failures surface as a single RepositoryFetchError;
content reads never raise and report failures as absent content.
"""

import base64
import binascii
import logging
from typing import Any, Dict, List, Optional

import requests

from codevisualizer.domain.analysis_models import RepoDetails
from codevisualizer.domain.constants import GITHUB_API_URL
from codevisualizer.domain.errors import RepositoryFetchError
from codevisualizer.domain.tree_models import FlatEntry, NodeKind
from codevisualizer.infra.network.common import DEFAULT_TIMEOUT, build_headers

logger = logging.getLogger(__name__)

_ENTRY_KINDS = {
    "blob": NodeKind.FILE,
    "tree": NodeKind.DIRECTORY,
    "commit": NodeKind.FILE,
}

# GitHub answers 409 Conflict on commit lookups of a repository without commits
EMPTY_REPOSITORY_STATUS = 409

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def fetch_repo_details(
        owner: str,
        repo: str,
        *,
        token: Optional[str] = None,
        base_url: str = GITHUB_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
) -> RepoDetails:
    """
    Retrieve repository metadata.

    Raises:
        RepositoryFetchError: On any transport, HTTP or payload failure.
    """
    data = _get_json(f"{base_url}/repos/{owner}/{repo}", token=token, timeout=timeout)

    try:
        return RepoDetails(
            owner=data["owner"]["login"],
            name=data["name"],
            description=data.get("description") or "",
            stars=int(data.get("stargazers_count") or 0),
            forks=int(data.get("forks_count") or 0),
            language=data.get("language") or "Unknown",
            default_branch=data.get("default_branch") or "main",
        )
    except (KeyError, TypeError, ValueError) as e:
        raise RepositoryFetchError(f"Unexpected repository payload: {e}") from e


def fetch_repo_tree(
        owner: str,
        repo: str,
        branch: str,
        *,
        token: Optional[str] = None,
        base_url: str = GITHUB_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
) -> List[FlatEntry]:
    """
    Retrieve the recursive listing of a branch.

    Resolves the branch head commit to its tree sha, then lists that tree
    recursively. An empty repository yields an empty list.

    Raises:
        RepositoryFetchError: On any transport, HTTP or payload failure.
    """
    repo_url = f"{base_url}/repos/{owner}/{repo}"
    try:
        commit = _get_json(f"{repo_url}/commits/{branch}", token=token, timeout=timeout)
    except RepositoryFetchError as e:
        if e.status_code == EMPTY_REPOSITORY_STATUS:
            logger.info(f"Network: {owner}/{repo} has no commits, listing is empty.")
            return []
        raise

    try:
        tree_sha = commit["commit"]["tree"]["sha"]
    except (KeyError, TypeError) as e:
        raise RepositoryFetchError(f"Unexpected commit payload: {e}") from e

    listing = _get_json(
        f"{repo_url}/git/trees/{tree_sha}",
        token=token,
        timeout=timeout,
        params={"recursive": "1"},
    )

    if listing.get("truncated"):
        logger.warning(f"Network: tree listing for {owner}/{repo} was truncated by the API.")

    entries: List[FlatEntry] = []
    for item in listing.get("tree") or []:
        path = item.get("path") if isinstance(item, dict) else None
        if not path:
            continue
        entries.append(FlatEntry(
            path=path,
            kind=_ENTRY_KINDS.get(item.get("type"), NodeKind.FILE),
            size=item.get("size"),
        ))

    logger.info(f"Network: listed {len(entries)} entries for {owner}/{repo}@{branch}.")
    return entries


def fetch_file_content(
        owner: str,
        repo: str,
        path: str,
        *,
        ref: Optional[str] = None,
        token: Optional[str] = None,
        base_url: str = GITHUB_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
) -> Optional[str]:
    """
    Retrieve a file's text.

    Returns None for directories, binary or oversized files, missing paths
    and any network failure. Never raises.
    """
    url = f"{base_url}/repos/{owner}/{repo}/contents/{requests.utils.quote(path, safe='/')}"
    params = {"ref": ref} if ref else None

    try:
        response = requests.get(url, headers=build_headers(token), params=params, timeout=timeout)
        response.raise_for_status()
        data = response.json()
    except requests.exceptions.RequestException as e:
        logger.warning(f"Network: failed to fetch content for '{path}': {e}")
        return None
    except ValueError as e:
        logger.warning(f"Network: invalid JSON for content of '{path}': {e}")
        return None

    if not isinstance(data, dict) or not data.get("content"):
        return None

    try:
        return base64.b64decode(data["content"]).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError, TypeError):
        logger.debug(f"Network: '{path}' is not UTF-8 text, treating as absent.")
        return None

# -----------------------------------------------------------------------------
# CLIENT FACADE
# -----------------------------------------------------------------------------

class GitHubClient:
    """
    Binds credentials and transport settings for one repository host.

    `reader(owner, repo)` returns the content fetcher handed to the stack
    classifier.
    """

    def __init__(
            self,
            token: Optional[str] = None,
            base_url: str = GITHUB_API_URL,
            timeout: float = DEFAULT_TIMEOUT,
    ):
        self.token = token or None
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def fetch_details(self, owner: str, repo: str) -> RepoDetails:
        return fetch_repo_details(
            owner, repo, token=self.token, base_url=self.base_url, timeout=self.timeout
        )

    def fetch_tree(self, owner: str, repo: str, branch: str) -> List[FlatEntry]:
        return fetch_repo_tree(
            owner, repo, branch, token=self.token, base_url=self.base_url, timeout=self.timeout
        )

    def fetch_content(self, owner: str, repo: str, path: str, ref: Optional[str] = None) -> Optional[str]:
        return fetch_file_content(
            owner, repo, path, ref=ref, token=self.token, base_url=self.base_url, timeout=self.timeout
        )

    def reader(self, owner: str, repo: str, ref: Optional[str] = None):
        def read_file(path: str) -> Optional[str]:
            return self.fetch_content(owner, repo, path, ref=ref)
        return read_file

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _get_json(
        url: str,
        *,
        token: Optional[str],
        timeout: float,
        params: Optional[Dict[str, str]] = None,
) -> Dict[str, Any]:
    """GET a JSON object, converting every failure into RepositoryFetchError."""
    logger.debug(f"Network: GET {url}")
    response = None
    try:
        response = requests.get(url, headers=build_headers(token), params=params, timeout=timeout)
        response.raise_for_status()
        data = response.json()
    except requests.exceptions.Timeout as e:
        logger.warning(f"Network: request timed out after {timeout}s: {url}")
        raise RepositoryFetchError(f"Request timed out: {url}") from e
    except requests.exceptions.HTTPError as e:
        failed = e.response if e.response is not None else response
        status = getattr(failed, "status_code", None)
        logger.error(f"Network: HTTP {status} for {url}: {e}")
        raise RepositoryFetchError(str(e), status_code=status) from e
    except requests.exceptions.RequestException as e:
        logger.error(f"Network: communication error for {url}: {e}")
        raise RepositoryFetchError(str(e)) from e
    except ValueError as e:
        raise RepositoryFetchError(f"Invalid JSON from {url}") from e

    if not isinstance(data, dict):
        raise RepositoryFetchError(f"Malformed payload from {url}: root is not an object.")
    return data

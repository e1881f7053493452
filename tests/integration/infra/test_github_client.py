from __future__ import annotations

"""
Integration tests for the GitHub REST Client.

Utilizes mocking to verify metadata, tree listing and content retrieval
without making real network calls.
"""

import base64
from typing import Any, Dict
from unittest.mock import MagicMock, patch

import pytest
import requests

from codevisualizer.domain.errors import RepositoryFetchError
from codevisualizer.domain.tree_models import NodeKind
from codevisualizer.infra.network import (
    GitHubClient,
    build_headers,
    fetch_file_content,
    fetch_repo_details,
    fetch_repo_tree,
)

API = "https://api.github.com"


def _response(payload: Any, status: int = 200) -> MagicMock:
    mock_response = MagicMock()
    mock_response.status_code = status
    mock_response.json.return_value = payload
    if status >= 400:
        mock_response.raise_for_status.side_effect = requests.exceptions.HTTPError(f"{status} Error")
    return mock_response


def _router(routes: Dict[str, MagicMock]):
    """side_effect for requests.get that dispatches on the URL."""
    def get(url, **kwargs):
        if url not in routes:
            return _response({"message": "Not Found"}, 404)
        return routes[url]
    return get

# -----------------------------------------------------------------------------
# METADATA
# -----------------------------------------------------------------------------

def test_fetch_repo_details_maps_payload() -> None:
    """TC-01: Verify metadata mapping and defaults for missing fields."""
    payload = {
        "owner": {"login": "octo"},
        "name": "demo",
        "description": None,
        "stargazers_count": 12,
        "forks_count": 3,
        "language": None,
        "default_branch": "develop",
    }

    with patch("requests.get", return_value=_response(payload)) as mock_get:
        details = fetch_repo_details("octo", "demo", token="secret")

    assert details.owner == "octo"
    assert details.description == ""
    assert details.language == "Unknown"
    assert details.stars == 12
    assert details.default_branch == "develop"

    args, kwargs = mock_get.call_args
    assert args[0] == f"{API}/repos/octo/demo"
    assert kwargs["headers"]["Authorization"] == "Bearer secret"
    assert kwargs["timeout"] == 10


@pytest.mark.parametrize("side_effect", [
    requests.exceptions.Timeout("slow"),
    requests.exceptions.ConnectionError("down"),
])
def test_fetch_repo_details_transport_errors(side_effect) -> None:
    """TC-02: Verify transport failures surface as RepositoryFetchError."""
    with patch("requests.get", side_effect=side_effect):
        with pytest.raises(RepositoryFetchError):
            fetch_repo_details("octo", "demo")


def test_fetch_repo_details_http_error() -> None:
    """TC-03: Verify 404 / rate-limit responses surface as RepositoryFetchError."""
    with patch("requests.get", return_value=_response({"message": "API rate limit exceeded"}, 403)):
        with pytest.raises(RepositoryFetchError):
            fetch_repo_details("octo", "demo")


def test_fetch_repo_details_bad_shape() -> None:
    with patch("requests.get", return_value=_response(["not", "an", "object"])):
        with pytest.raises(RepositoryFetchError):
            fetch_repo_details("octo", "demo")

    with patch("requests.get", return_value=_response({"name": "demo"})):
        with pytest.raises(RepositoryFetchError):
            fetch_repo_details("octo", "demo")

# -----------------------------------------------------------------------------
# TREE LISTING
# -----------------------------------------------------------------------------

def test_fetch_repo_tree_resolves_commit_then_lists() -> None:
    """TC-04: Verify the commit -> tree sha -> recursive listing chain."""
    routes = {
        f"{API}/repos/octo/demo/commits/main": _response({"commit": {"tree": {"sha": "abc123"}}}),
        f"{API}/repos/octo/demo/git/trees/abc123": _response({
            "truncated": False,
            "tree": [
                {"path": "src", "type": "tree"},
                {"path": "src/app.py", "type": "blob", "size": 99},
                {"path": "vendor/lib", "type": "commit"},
                {"type": "blob"},
            ],
        }),
    }

    with patch("requests.get", side_effect=_router(routes)) as mock_get:
        entries = fetch_repo_tree("octo", "demo", "main")

    assert [e.path for e in entries] == ["src", "src/app.py", "vendor/lib"]
    assert entries[0].kind is NodeKind.DIRECTORY
    assert entries[1].kind is NodeKind.FILE
    assert entries[1].size == 99
    assert entries[2].kind is NodeKind.FILE

    tree_call = mock_get.call_args_list[-1]
    assert tree_call.kwargs["params"] == {"recursive": "1"}


def test_fetch_repo_tree_empty_listing() -> None:
    routes = {
        f"{API}/repos/octo/empty/commits/main": _response({"commit": {"tree": {"sha": "e0"}}}),
        f"{API}/repos/octo/empty/git/trees/e0": _response({"tree": []}),
    }
    with patch("requests.get", side_effect=_router(routes)):
        assert fetch_repo_tree("octo", "empty", "main") == []


def test_fetch_repo_tree_repository_without_commits() -> None:
    """TC-05: Verify the 409 GitHub returns for an empty repository yields no entries."""
    conflict = _response({"message": "Git Repository is empty."}, 409)

    with patch("requests.get", return_value=conflict) as mock_get:
        assert fetch_repo_tree("octo", "empty", "main") == []

    assert mock_get.call_count == 1


def test_fetch_repo_tree_conflict_status_read_from_error_response() -> None:
    conflict = _response({"message": "Git Repository is empty."}, 409)
    conflict.raise_for_status.side_effect = requests.exceptions.HTTPError("409 Error", response=conflict)

    with patch("requests.get", return_value=conflict):
        assert fetch_repo_tree("octo", "empty", "main") == []


def test_fetch_repo_tree_unknown_branch() -> None:
    """TC-06: Verify a missing branch raises RepositoryFetchError carrying the status."""
    with patch("requests.get", side_effect=_router({})):
        with pytest.raises(RepositoryFetchError) as exc_info:
            fetch_repo_tree("octo", "demo", "nope")

    assert exc_info.value.status_code == 404


def test_fetch_repo_tree_malformed_commit() -> None:
    with patch("requests.get", return_value=_response({"commit": {}})):
        with pytest.raises(RepositoryFetchError):
            fetch_repo_tree("octo", "demo", "main")

# -----------------------------------------------------------------------------
# FILE CONTENT
# -----------------------------------------------------------------------------

def test_fetch_file_content_decodes_base64() -> None:
    """TC-07: Verify base64 content is decoded as UTF-8 text."""
    encoded = base64.b64encode('{"dependencies": {"react": "18"}}'.encode("utf-8")).decode("ascii")

    with patch("requests.get", return_value=_response({"content": encoded})) as mock_get:
        text = fetch_file_content("octo", "demo", "package.json", ref="dev")

    assert text == '{"dependencies": {"react": "18"}}'
    args, kwargs = mock_get.call_args
    assert args[0] == f"{API}/repos/octo/demo/contents/package.json"
    assert kwargs["params"] == {"ref": "dev"}


@pytest.mark.parametrize("response", [
    _response({"message": "Not Found"}, 404),
    _response([{"name": "dir-entry"}]),
    _response({"content": ""}),
    _response({"content": base64.b64encode(b"\xff\xfe\x00binary").decode("ascii")}),
])
def test_fetch_file_content_absent_cases(response) -> None:
    """TC-08: Verify missing, directory, empty and binary content yield None."""
    with patch("requests.get", return_value=response):
        assert fetch_file_content("octo", "demo", "thing") is None


def test_fetch_file_content_never_raises_on_transport_error() -> None:
    with patch("requests.get", side_effect=requests.exceptions.ConnectionError("down")):
        assert fetch_file_content("octo", "demo", "package.json") is None

# -----------------------------------------------------------------------------
# CLIENT FACADE
# -----------------------------------------------------------------------------

def test_client_reader_binds_repository_and_ref() -> None:
    """TC-09: Verify the reader closure targets the right repo, ref and host."""
    client = GitHubClient(token="", base_url="https://ghe.example.com/api/v3/", timeout=3)
    encoded = base64.b64encode(b"flask").decode("ascii")

    with patch("requests.get", return_value=_response({"content": encoded})) as mock_get:
        read_file = client.reader("octo", "demo", ref="main")
        assert read_file("requirements.txt") == "flask"

    args, kwargs = mock_get.call_args
    assert args[0] == "https://ghe.example.com/api/v3/repos/octo/demo/contents/requirements.txt"
    assert kwargs["timeout"] == 3
    assert "Authorization" not in kwargs["headers"]


def test_build_headers() -> None:
    headers = build_headers()
    assert headers["Accept"] == "application/vnd.github+json"
    assert headers["User-Agent"].startswith("CodeVisualizer-Client/")
    assert "Authorization" not in headers
    assert build_headers("t")["Authorization"] == "Bearer t"

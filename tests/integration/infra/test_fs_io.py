from __future__ import annotations

"""
Integration tests for FileSystem Infrastructure.

Validates data directory resolution, path normalization and JSON artifact
writing.
"""

import json
import os
from pathlib import Path
from unittest.mock import patch

from codevisualizer.core.layout.export import export_layout_json
from codevisualizer.core.layout.engine import compute_layout
from codevisualizer.infra.fs import (
    get_user_config_path,
    get_user_data_dir,
    normalize_path,
    write_json_file,
)

# -----------------------------------------------------------------------------
# PATH RESOLUTION TESTS
# -----------------------------------------------------------------------------

def test_get_user_data_dir_windows() -> None:
    """TC-01: Verify resolution of %LOCALAPPDATA% on Windows systems."""
    mock_appdata = "C:/Users/Test/AppData/Local"
    with patch("os.name", "nt"):
        with patch.dict(os.environ, {"LOCALAPPDATA": mock_appdata}):
            path = get_user_data_dir()
            assert "CodeVisualizer" in path


def test_get_user_data_dir_unix() -> None:
    """TC-01: Verify resolution of ~/.codevisualizer on Unix-like systems."""
    mock_home = "/home/testuser"
    with patch("os.name", "posix"):
        with patch("os.path.expanduser", return_value=mock_home):
            path = get_user_data_dir()
            assert path.replace("\\", "/").endswith("/home/testuser/.codevisualizer")


def test_user_data_dir_is_not_created(tmp_path: Path) -> None:
    """TC-02: Resolving paths must not touch the filesystem."""
    with patch("os.name", "posix"):
        with patch("os.path.expanduser", return_value=str(tmp_path)):
            config_path = get_user_config_path()

    assert config_path.endswith(os.path.join(".codevisualizer", "config.json"))
    assert not (tmp_path / ".codevisualizer").exists()


def test_normalize_path_expansion() -> None:
    """TC-03: Verify expansion of environment variables and fallback."""
    with patch.dict(os.environ, {"TEST_VAR": "my_folder"}):
        path = normalize_path("$TEST_VAR/sub", fallback=".")
        assert path.lower().endswith(os.path.join("my_folder", "sub").lower())

    assert normalize_path("   ", fallback="fallback_dir") == os.path.abspath("fallback_dir")

# -----------------------------------------------------------------------------
# ARTIFACT WRITING TESTS
# -----------------------------------------------------------------------------

def test_write_json_file_creates_parents(tmp_path: Path) -> None:
    """TC-04: Verify nested destination directories are created."""
    target = tmp_path / "nested" / "deeper" / "out.json"

    ok, error = write_json_file(str(target), {"name": "café"})

    assert ok is True
    assert error is None
    assert json.loads(target.read_text(encoding="utf-8")) == {"name": "café"}


def test_write_json_file_reports_failure(tmp_path: Path) -> None:
    """TC-05: Verify a directory in place of the file reports an error."""
    blocker = tmp_path / "taken"
    blocker.mkdir()

    ok, error = write_json_file(str(blocker), {})

    assert ok is False
    assert error


def test_export_layout_json(tmp_path: Path, tree_factory) -> None:
    """TC-06: Verify the exported graph contains every node and edge."""
    graph = compute_layout(tree_factory("src/", "src/main.ts", "package.json"))
    target = tmp_path / "graph.json"

    assert export_layout_json(graph, str(target)) is True

    data = json.loads(target.read_text(encoding="utf-8"))
    assert [n["id"] for n in data["nodes"]] == ["/", "src", "src/main.ts", "package.json"]
    assert len(data["edges"]) == 3
    assert data["nodes"][2]["color_key"] == "#2563eb"

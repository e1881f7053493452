from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared tree fixtures and an in-memory content fetcher.
"""

import os
import sys
from typing import Callable, Dict, List, Optional

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from codevisualizer.core.tree.builder import build_tree  # noqa: E402
from codevisualizer.domain.tree_models import FlatEntry, NodeKind, TreeNode  # noqa: E402


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------
def make_entries(*paths: str) -> List[FlatEntry]:
    """
    Build flat entries from compact paths: a trailing '/' marks a directory.

    Example: make_entries("src/", "src/app.py", "README.md")
    """
    entries = []
    for path in paths:
        if path.endswith("/"):
            entries.append(FlatEntry(path.rstrip("/"), NodeKind.DIRECTORY))
        else:
            entries.append(FlatEntry(path, NodeKind.FILE, 10))
    return entries


def make_tree(*paths: str, root_name: str = "repo") -> TreeNode:
    return build_tree(make_entries(*paths), root_name=root_name)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def deep_tree() -> TreeNode:
    """Depth-5 chain a/b/c/d/target.txt with a sibling at every level."""
    return make_tree(
        "a/", "a/b/", "a/b/c/", "a/b/c/d/",
        "a/b/c/d/target.txt",
        "a/b/c/sibling.txt",
        "a/b/other.txt",
        "a/readme.md",
        "top.txt",
    )


@pytest.fixture
def content_reader() -> Callable[[Dict[str, Optional[str]]], Callable[[str], Optional[str]]]:
    """Factory producing a read_file function backed by a dict."""
    def factory(files: Dict[str, Optional[str]]) -> Callable[[str], Optional[str]]:
        def read_file(path: str) -> Optional[str]:
            return files.get(path)
        return read_file
    return factory


@pytest.fixture
def tree_factory() -> Callable[..., TreeNode]:
    """Expose make_tree to tests."""
    return make_tree


@pytest.fixture
def entries_factory() -> Callable[..., List[FlatEntry]]:
    """Expose make_entries to tests."""
    return make_entries

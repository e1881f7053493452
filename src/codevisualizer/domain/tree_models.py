from __future__ import annotations

"""
Repository Tree Data Models.

Provides the recursive node type used to represent a remote repository's
file hierarchy, together with the flat listing entries it is built from.
"""

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Optional, Tuple

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

class NodeKind(str, Enum):
    """Filesystem entry type."""
    DIRECTORY = "directory"
    FILE = "file"


class FlatEntry(NamedTuple):
    """One row of a recursive repository listing."""
    path: str
    kind: NodeKind
    size: Optional[int] = None


@dataclass(frozen=True)
class TreeNode:
    """
    Represents one entry (file or directory) in the repository tree.

    Attributes:
        name: Display label, the segment after the last '/'.
        path: Slash-separated path from the repository root ('' for the root).
        kind: Directory or file.
        size: Byte count for files, None for directories.
        children: Ordered child nodes for directories, None for files.
    """
    name: str
    path: str
    kind: NodeKind
    size: Optional[int] = None
    children: Optional[Tuple["TreeNode", ...]] = None

    @property
    def is_dir(self) -> bool:
        return self.kind is NodeKind.DIRECTORY

    @property
    def is_root(self) -> bool:
        return self.path == ""


@dataclass(frozen=True)
class TreeStats:
    """
    Aggregate counters for a repository tree.

    Attributes:
        files: Number of file nodes.
        folders: Number of directory nodes, root excluded.
        max_depth: Deepest level reached (root is 0).
        total_size: Sum of known file sizes in bytes.
    """
    files: int = 0
    folders: int = 0
    max_depth: int = 0
    total_size: int = 0

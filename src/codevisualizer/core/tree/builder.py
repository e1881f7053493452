from __future__ import annotations

"""
Repository Tree Builder.

Reconstructs the file hierarchy from the flat, recursive listing returned by
the repository API. Partial or inconsistent listings degrade gracefully:
entries whose parent never appears are dropped instead of failing the
analysis.
"""

import logging
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from codevisualizer.domain.tree_models import FlatEntry, NodeKind, TreeNode, TreeStats

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def build_tree(entries: Iterable[FlatEntry], root_name: str = "") -> TreeNode:
    """
    Convert a flat listing into an immutable TreeNode hierarchy.

    Children keep the order in which their entries were listed. Orphans
    (parent path missing, or parent registered as a file) are excluded.

    Args:
        entries: (path, kind, size) rows of a recursive listing.
        root_name: Label for the root node, usually the repository name.

    Returns:
        TreeNode: The root, with path ''.
    """
    registry: Dict[str, _Draft] = {"": _Draft(root_name, "", NodeKind.DIRECTORY, None)}
    ordered: List[_Draft] = []

    # 1. Register every entry by its full path
    for entry in entries:
        path = entry.path.strip("/")
        if not path or path in registry:
            continue
        kind = NodeKind(entry.kind)
        draft = _Draft(
            name=path.rsplit("/", 1)[-1],
            path=path,
            kind=kind,
            size=entry.size if kind is NodeKind.FILE else None,
        )
        registry[path] = draft
        ordered.append(draft)

    # 2. Link each entry under its parent
    orphans = 0
    for draft in ordered:
        parent = registry.get(_parent_path(draft.path))
        if parent is None or parent.children is None:
            orphans += 1
            continue
        parent.children.append(draft)

    if orphans:
        logger.debug(f"Tree builder dropped {orphans} orphaned entries.")

    return registry[""].freeze()


def walk_tree(root: TreeNode) -> Iterator[Tuple[TreeNode, int]]:
    """Yield (node, depth) pairs in depth-first pre-order, root at depth 0."""
    stack = [(root, 0)]
    while stack:
        node, depth = stack.pop()
        yield node, depth
        stack.extend((child, depth + 1) for child in reversed(node.children or ()))


def compute_tree_stats(root: TreeNode) -> TreeStats:
    """Count files and folders (root excluded), depth and total size."""
    files = folders = max_depth = total_size = 0

    for node, depth in walk_tree(root):
        max_depth = max(max_depth, depth)
        if not node.is_dir:
            files += 1
            total_size += node.size or 0
        elif not node.is_root:
            folders += 1

    return TreeStats(files=files, folders=folders, max_depth=max_depth, total_size=total_size)

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

class _Draft:
    """Mutable node used only while linking the listing."""

    __slots__ = ("name", "path", "kind", "size", "children")

    def __init__(self, name: str, path: str, kind: NodeKind, size: Optional[int]):
        self.name = name
        self.path = path
        self.kind = kind
        self.size = size
        self.children: Optional[List[_Draft]] = [] if kind is NodeKind.DIRECTORY else None

    def freeze(self) -> TreeNode:
        children = None
        if self.children is not None:
            children = tuple(child.freeze() for child in self.children)
        return TreeNode(
            name=self.name,
            path=self.path,
            kind=self.kind,
            size=self.size,
            children=children,
        )


def _parent_path(path: str) -> str:
    """Strip the last segment; top-level entries belong to the root ('')."""
    if "/" not in path:
        return ""
    return path.rsplit("/", 1)[0]

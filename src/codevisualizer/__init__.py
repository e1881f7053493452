from __future__ import annotations

"""
CodeVisualizer.

Fetches a GitHub repository's file tree, infers its technology stack from
manifest files and lays the hierarchy out as a node/edge graph.
"""

from codevisualizer.core.layout.engine import compute_layout
from codevisualizer.core.stack.classifier import classify
from codevisualizer.core.tree.builder import build_tree
from codevisualizer.domain.constants import APP_VERSION
from codevisualizer.domain.layout_models import ColorTheme, LayoutMode, LayoutOptions, LayoutResult
from codevisualizer.domain.stack_models import StackDescriptor
from codevisualizer.domain.tree_models import FlatEntry, NodeKind, TreeNode

__version__ = APP_VERSION

__all__ = [
    "build_tree",
    "classify",
    "compute_layout",
    "FlatEntry",
    "NodeKind",
    "TreeNode",
    "StackDescriptor",
    "LayoutOptions",
    "LayoutMode",
    "ColorTheme",
    "LayoutResult",
]

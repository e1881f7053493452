from __future__ import annotations

"""
Graph Layout Domain Models.

Defines the options accepted by the layout engine and the positioned
node/edge structures it hands over to the rendering surface.
"""

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Tuple

from codevisualizer.domain.constants import DEFAULT_MAX_DEPTH
from codevisualizer.domain.tree_models import NodeKind

# -----------------------------------------------------------------------------
# LAYOUT OPTIONS
# -----------------------------------------------------------------------------

class LayoutMode(str, Enum):
    """Placement strategy for the graph."""
    TREE = "tree"
    RADIAL = "radial"


class ColorTheme(str, Enum):
    """Colour assignment strategy for nodes."""
    STANDARD = "standard"
    FILE_TYPE = "file-type"
    DEPTH = "depth"


@dataclass(frozen=True)
class LayoutOptions:
    """
    Parameters of a single layout computation.

    Attributes:
        max_depth: Deepest level rendered when no search is active.
        mode: Tree (top-down) or radial placement.
        theme: Colour strategy.
        search_query: Case-insensitive name filter; non-empty disables pruning.
    """
    max_depth: int = DEFAULT_MAX_DEPTH
    mode: LayoutMode = LayoutMode.TREE
    theme: ColorTheme = ColorTheme.FILE_TYPE
    search_query: str = ""

    @property
    def normalized_query(self) -> str:
        return self.search_query.strip().lower()

# -----------------------------------------------------------------------------
# LAYOUT OUTPUT
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class LayoutNode:
    """
    One positioned visual element.

    Attributes:
        id: Node path, or "/" for the root.
        label: Text shown on the node.
        x: Horizontal coordinate.
        y: Vertical coordinate.
        depth: Distance from the root.
        visual_kind: Directory or file.
        emphasis: 1.0 for full weight, reduced for search misses.
        color_key: Hex colour chosen by the active theme.
    """
    id: str
    label: str
    x: float
    y: float
    depth: int
    visual_kind: NodeKind
    emphasis: float
    color_key: str


@dataclass(frozen=True)
class LayoutEdge:
    """Parent-to-child connector carrying the child's emphasis."""
    id: str
    source: str
    target: str
    emphasis: float


@dataclass(frozen=True)
class LayoutResult:
    """Complete renderable graph."""
    nodes: Tuple[LayoutNode, ...] = ()
    edges: Tuple[LayoutEdge, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        nodes = []
        for node in self.nodes:
            item = asdict(node)
            item["visual_kind"] = node.visual_kind.value
            nodes.append(item)
        return {
            "nodes": nodes,
            "edges": [asdict(edge) for edge in self.edges],
        }

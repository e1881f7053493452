from __future__ import annotations

"""
Tree-to-Graph Layout Engine.

Turns a repository tree into positioned nodes and parent-child edges for a
rendering surface. Traversal is depth-first pre-order; all position state
(coordinates, angular interval) travels explicitly with each pending node,
so any subtree can be placed from its context alone and identical inputs
always produce identical output.

Tree mode spaces siblings evenly beneath their parent without accounting
for subtree width: wide, unbalanced trees can overlap.
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from codevisualizer.core.layout.themes import ThemeFunction, get_theme
from codevisualizer.domain.constants import (
    DIMMED_EMPHASIS,
    FULL_CIRCLE,
    FULL_EMPHASIS,
    RADIAL_RING_SPACING,
    ROOT_NODE_ID,
    TREE_HORIZONTAL_SPACING,
    TREE_VERTICAL_SPACING,
)
from codevisualizer.domain.layout_models import (
    LayoutEdge,
    LayoutMode,
    LayoutNode,
    LayoutOptions,
    LayoutResult,
)
from codevisualizer.domain.tree_models import TreeNode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PositionContext:
    """
    Placement state handed from a parent to one child.

    Attributes:
        x: Assigned horizontal coordinate (tree mode).
        y: Assigned vertical coordinate (tree mode).
        interval: Angular span in degrees (radial mode).
    """
    x: float = 0.0
    y: float = 0.0
    interval: Tuple[float, float] = FULL_CIRCLE


# (node, depth, parent id, context) awaiting placement
_Pending = Tuple[TreeNode, int, Optional[str], PositionContext]

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def compute_layout(root: TreeNode, options: Optional[LayoutOptions] = None) -> LayoutResult:
    """
    Compute the renderable graph of a repository tree.

    Nodes deeper than `options.max_depth` are pruned unless a search query is
    active, in which case the whole tree is laid out and non-matching nodes
    are dimmed instead.

    Args:
        root: Root of the repository tree.
        options: Depth bound, layout mode, colour theme and search query.

    Returns:
        LayoutResult: Nodes in pre-order and edges pointing only at emitted
                      nodes.
    """
    options = options or LayoutOptions()
    query = options.normalized_query
    theme = get_theme(options.theme)
    mode = LayoutMode(options.mode)

    nodes: List[LayoutNode] = []
    edges: List[LayoutEdge] = []

    stack: List[_Pending] = [(root, 0, None, PositionContext())]
    while stack:
        node, depth, parent_id, context = stack.pop()
        layout_node, edge, child_contexts = place_node(
            node, depth, parent_id, context, mode=mode, theme=theme, query=query
        )
        nodes.append(layout_node)
        if edge is not None:
            edges.append(edge)

        if not query and depth + 1 > options.max_depth:
            continue

        # Reverse so the first child is popped first (pre-order)
        for child, child_context in reversed(child_contexts):
            stack.append((child, depth + 1, layout_node.id, child_context))

    logger.debug(f"Layout: {len(nodes)} nodes, {len(edges)} edges ({mode.value}).")
    return LayoutResult(nodes=tuple(nodes), edges=tuple(edges))


def place_node(
        node: TreeNode,
        depth: int,
        parent_id: Optional[str],
        context: PositionContext,
        *,
        mode: LayoutMode,
        theme: ThemeFunction,
        query: str = "",
) -> Tuple[LayoutNode, Optional[LayoutEdge], List[Tuple[TreeNode, PositionContext]]]:
    """
    Place a single node and derive the contexts of its children.

    Pure: the result depends only on the arguments.

    Returns:
        Tuple of the positioned node, the edge from its parent (None for the
        root) and one (child, context) pair per child in listing order.
    """
    node_id = ROOT_NODE_ID if node.is_root else node.path
    emphasis = node_emphasis(node, query)

    if mode is LayoutMode.RADIAL:
        x, y = radial_position(depth, context.interval)
        child_contexts = radial_child_contexts(node, context.interval)
    else:
        x, y = context.x, context.y
        child_contexts = tree_child_contexts(node, x, y)

    layout_node = LayoutNode(
        id=node_id,
        label=node.name,
        x=x,
        y=y,
        depth=depth,
        visual_kind=node.kind,
        emphasis=emphasis,
        color_key=theme(node, depth),
    )

    edge = None
    if parent_id is not None:
        edge = LayoutEdge(
            id=f"{parent_id}-{node_id}",
            source=parent_id,
            target=node_id,
            emphasis=emphasis,
        )

    return layout_node, edge, child_contexts


def node_emphasis(node: TreeNode, query: str) -> float:
    """Full weight without a query or on a name match, dimmed otherwise."""
    if not query or query in node.name.lower():
        return FULL_EMPHASIS
    return DIMMED_EMPHASIS

# -----------------------------------------------------------------------------
# TREE MODE
# -----------------------------------------------------------------------------

def tree_child_contexts(node: TreeNode, x: float, y: float) -> List[Tuple[TreeNode, PositionContext]]:
    """Centre the children as a group one level below the parent."""
    children = node.children or ()
    count = len(children)
    start_x = x - (count - 1) * TREE_HORIZONTAL_SPACING / 2
    child_y = y + TREE_VERTICAL_SPACING

    return [
        (child, PositionContext(x=start_x + index * TREE_HORIZONTAL_SPACING, y=child_y))
        for index, child in enumerate(children)
    ]

# -----------------------------------------------------------------------------
# RADIAL MODE
# -----------------------------------------------------------------------------

def radial_position(depth: int, interval: Tuple[float, float]) -> Tuple[float, float]:
    """Interval midpoint on the ring of the given depth; the root sits at the centre."""
    if depth == 0:
        return 0.0, 0.0
    radius = depth * RADIAL_RING_SPACING
    angle = math.radians((interval[0] + interval[1]) / 2)
    return math.cos(angle) * radius, math.sin(angle) * radius


def radial_child_contexts(
        node: TreeNode,
        interval: Tuple[float, float],
) -> List[Tuple[TreeNode, PositionContext]]:
    """Split the parent's interval evenly among its children, in order."""
    children = node.children or ()
    if not children:
        return []

    start, end = interval
    width = (end - start) / len(children)

    return [
        (child, PositionContext(interval=(start + index * width, start + (index + 1) * width)))
        for index, child in enumerate(children)
    ]

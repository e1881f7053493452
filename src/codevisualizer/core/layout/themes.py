from __future__ import annotations

"""
Node Colour Themes.

Each theme maps (node, depth) to a hex colour. Themes are plain functions
registered by ColorTheme so the layout engine can swap them freely.
"""

from typing import Callable, Dict

from codevisualizer.domain.constants import (
    DEPTH_PALETTE,
    FILE_TYPE_COLORS,
    FILE_TYPE_DEFAULT_COLOR,
    FILE_TYPE_FOLDER_COLOR,
    STANDARD_COLORS,
)
from codevisualizer.domain.layout_models import ColorTheme
from codevisualizer.domain.tree_models import TreeNode

ThemeFunction = Callable[[TreeNode, int], str]


def standard_color(node: TreeNode, depth: int) -> str:
    return STANDARD_COLORS["folder"] if node.is_dir else STANDARD_COLORS["file"]


def file_type_color(node: TreeNode, depth: int) -> str:
    if node.is_dir:
        return FILE_TYPE_FOLDER_COLOR
    for suffixes, color in FILE_TYPE_COLORS:
        if node.name.endswith(suffixes):
            return color
    return FILE_TYPE_DEFAULT_COLOR


def depth_color(node: TreeNode, depth: int) -> str:
    # Everything past the palette clamps to its lightest entry
    return DEPTH_PALETTE[min(depth, len(DEPTH_PALETTE) - 1)]


THEMES: Dict[ColorTheme, ThemeFunction] = {
    ColorTheme.STANDARD: standard_color,
    ColorTheme.FILE_TYPE: file_type_color,
    ColorTheme.DEPTH: depth_color,
}


def get_theme(theme: ColorTheme) -> ThemeFunction:
    return THEMES[ColorTheme(theme)]

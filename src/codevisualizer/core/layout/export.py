from __future__ import annotations

"""Graph export for external renderers."""

import logging

from codevisualizer.domain.layout_models import LayoutResult
from codevisualizer.infra.fs import write_json_file

logger = logging.getLogger(__name__)


def export_layout_json(result: LayoutResult, path: str) -> bool:
    """Write the node/edge graph as JSON. Returns False when the write fails."""
    ok, error = write_json_file(path, result.to_dict())
    if ok:
        logger.info(f"Graph exported to {path} ({len(result.nodes)} nodes).")
    else:
        logger.error(f"Failed to export graph to '{path}': {error}")
    return ok

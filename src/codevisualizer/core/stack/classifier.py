from __future__ import annotations

"""
Manifest Classification Engine.

Infers a repository's technology stack from the marker files at its root.
Presence rules run synchronously over the root listing; every manifest with
content rules is read and evaluated in its own worker. Workers return their
contribution instead of writing into a shared accumulator, and the final
descriptor is folded on the calling thread once every read has settled.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, List, Optional

from codevisualizer.core.stack.rules import (
    CONTENT_SOURCES,
    PRESENCE_RULES,
    ContentSource,
    RootProbe,
)
from codevisualizer.domain.stack_models import StackContribution, StackDescriptor
from codevisualizer.domain.tree_models import TreeNode

logger = logging.getLogger(__name__)

# Returns the file's text, or None when it is binary, too large or missing
ContentFetcher = Callable[[str], Optional[str]]

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def classify(
        root: TreeNode,
        read_file: ContentFetcher,
        *,
        max_workers: Optional[int] = None,
) -> StackDescriptor:
    """
    Produce the deduplicated technology stack of a repository tree.

    Only direct children of the root are inspected. A failing or empty read
    skips that manifest's content rules and nothing else.

    Args:
        root: Root of the repository tree.
        read_file: Content fetcher for repository-relative paths.
        max_workers: Upper bound for concurrent manifest reads.

    Returns:
        StackDescriptor: Finalized stack; all categories empty when no
                         marker is present.
    """
    probe = RootProbe(root)
    contributions: List[StackContribution] = [detect_presence(probe)]

    pending = []
    for source in CONTENT_SOURCES:
        node = source.locate(probe)
        if node is not None:
            pending.append((source, node))

    if pending:
        logger.debug(f"Classifier: dispatching {len(pending)} manifest reads.")
        with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="ManifestReader") as executor:
            futures = [
                executor.submit(evaluate_manifest, source, node.path, read_file)
                for source, node in pending
            ]
            for future in as_completed(futures):
                contributions.append(future.result())

    stack = StackDescriptor.from_contributions(contributions)
    logger.info(
        "Classifier: detected "
        + ", ".join(f"{k}={len(v)}" for k, v in stack.to_dict().items())
    )
    return stack


def detect_presence(probe: RootProbe) -> StackContribution:
    """Evaluate the presence table against the root listing."""
    labels = (rule.evaluate(probe) for rule in PRESENCE_RULES)
    return frozenset(label for label in labels if label is not None)


def evaluate_manifest(source: ContentSource, path: str, read_file: ContentFetcher) -> StackContribution:
    """
    Read one manifest and evaluate its content rules.

    Never raises: read failures and malformed documents yield an empty
    contribution.
    """
    try:
        content = read_file(path)
    except Exception as e:
        logger.warning(f"Classifier: could not read '{path}': {e}")
        return frozenset()

    if not content:
        logger.debug(f"Classifier: no content for '{path}', skipping content rules.")
        return frozenset()

    try:
        return frozenset(source.evaluate(content))
    except (ValueError, RecursionError) as e:
        logger.warning(f"Classifier: malformed manifest '{path}': {e}")
        return frozenset()

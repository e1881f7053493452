from __future__ import annotations

"""
Repository Analysis Orchestrator.

Runs one analysis request as a single logical unit: metadata and tree fetch,
tree construction, stack classification and statistics. A failed fetch ends
the request with an error result before any classification happens.

Requests are numbered. A caller that fires a new request while an older one
is still running must only apply the newest result: `apply` discards any
result whose request id has been superseded (last-requested-wins).
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional, Tuple

from codevisualizer.core.stack.classifier import classify
from codevisualizer.core.tree.builder import build_tree, compute_tree_stats
from codevisualizer.domain.analysis_models import (
    AnalysisResult,
    RepoDetails,
    create_error_result,
    create_success_result,
)
from codevisualizer.domain.errors import RepositoryFetchError
from codevisualizer.domain.tree_models import FlatEntry
from codevisualizer.infra.network.github_client import GitHubClient

logger = logging.getLogger(__name__)

ANALYSIS_FAILED_MESSAGE = "Failed to fetch repository data. Check the URL or API rate limits."

ResultSink = Callable[[AnalysisResult], None]


class RepositoryAnalyzer:
    """
    Stateful front door for repository analyses.

    Attributes:
        latest_result: The most recently applied result, if any.
    """

    def __init__(self, client: GitHubClient, *, max_workers: Optional[int] = None):
        self._client = client
        self._max_workers = max_workers
        self._lock = threading.Lock()
        self._epoch = 0
        self.latest_result: Optional[AnalysisResult] = None

    # -------------------------------------------------------------------------
    # REQUEST LIFECYCLE
    # -------------------------------------------------------------------------

    def begin_request(self) -> int:
        """Open a new request; every earlier request becomes stale."""
        with self._lock:
            self._epoch += 1
            return self._epoch

    def is_current(self, request_id: int) -> bool:
        with self._lock:
            return request_id == self._epoch

    def apply(self, result: AnalysisResult, sink: Optional[ResultSink] = None) -> bool:
        """
        Publish a result unless a newer request has superseded it.

        Returns:
            bool: True when the result was applied.
        """
        with self._lock:
            if result.request_id != self._epoch:
                logger.info(
                    f"Discarding stale analysis result #{result.request_id} "
                    f"(current is #{self._epoch})."
                )
                return False
            self.latest_result = result

        if sink is not None:
            sink(result)
        return True

    # -------------------------------------------------------------------------
    # ANALYSIS
    # -------------------------------------------------------------------------

    def analyze(self, owner: str, name: str, branch: Optional[str] = None) -> AnalysisResult:
        """Open a request and run it to completion."""
        return self.run(self.begin_request(), owner, name, branch)

    def analyze_and_apply(
            self,
            owner: str,
            name: str,
            branch: Optional[str] = None,
            sink: Optional[ResultSink] = None,
    ) -> AnalysisResult:
        result = self.analyze(owner, name, branch)
        self.apply(result, sink)
        return result

    def run(self, request_id: int, owner: str, name: str, branch: Optional[str] = None) -> AnalysisResult:
        """
        Execute an already opened request.

        Args:
            request_id: Id returned by `begin_request`.
            owner: Repository owner.
            name: Repository name.
            branch: Branch to list; the default branch when omitted.

        Returns:
            AnalysisResult: Success, or an error result without partial state.
        """
        logger.info(f"Analysis #{request_id}: {owner}/{name}")

        try:
            details, entries, ref = self._fetch(owner, name, branch)
        except RepositoryFetchError as e:
            logger.error(f"Analysis #{request_id} failed: {e}")
            return create_error_result(ANALYSIS_FAILED_MESSAGE, request_id)

        root = build_tree(entries, root_name=details.name)
        stack = classify(root, self._client.reader(owner, name, ref=ref), max_workers=self._max_workers)
        stats = compute_tree_stats(root)

        logger.info(
            f"Analysis #{request_id} complete: {stats.files} files, {stats.folders} folders."
        )
        return create_success_result(details, root, stack, stats, request_id=request_id)

    def _fetch(
            self,
            owner: str,
            name: str,
            branch: Optional[str],
    ) -> Tuple[RepoDetails, List[FlatEntry], str]:
        """Fetch metadata and listing; concurrently when the branch is known."""
        if branch:
            with ThreadPoolExecutor(max_workers=2, thread_name_prefix="RepoFetch") as executor:
                details_future = executor.submit(self._client.fetch_details, owner, name)
                tree_future = executor.submit(self._client.fetch_tree, owner, name, branch)
                return details_future.result(), tree_future.result(), branch

        details = self._client.fetch_details(owner, name)
        entries = self._client.fetch_tree(owner, name, details.default_branch)
        return details, entries, details.default_branch

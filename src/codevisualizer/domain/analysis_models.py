from __future__ import annotations

"""
Analysis Domain Data Models.

Defines the repository metadata record and the result object exchanged
between the analysis orchestrator and the interface layer, along with
factory functions for the success and failure shapes.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from codevisualizer.domain.stack_models import StackDescriptor
from codevisualizer.domain.tree_models import TreeNode, TreeStats

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class RepoDetails:
    """
    Repository metadata as reported by the hosting API.

    Attributes:
        owner: Account login that owns the repository.
        name: Repository name.
        description: Free-text description ('' when unset).
        stars: Stargazer count.
        forks: Fork count.
        language: Primary language ('Unknown' when unset).
        default_branch: Branch listed when no branch is requested.
    """
    owner: str
    name: str
    description: str
    stars: int
    forks: int
    language: str
    default_branch: str


@dataclass(frozen=True)
class AnalysisResult:
    """
    Outcome of one repository analysis request.

    Attributes:
        ok: Flag indicating success or failure.
        error: User-facing message in case of failure.
        request_id: Epoch of the request that produced this result.
        details: Repository metadata.
        root: Root of the repository tree.
        stack: Inferred technology stack.
        stats: Tree counters.
    """
    ok: bool
    error: str
    request_id: int = 0

    details: Optional[RepoDetails] = None
    root: Optional[TreeNode] = None
    stack: StackDescriptor = StackDescriptor()
    stats: TreeStats = TreeStats()

    def summary(self) -> Dict[str, Any]:
        """Serializable view without the tree itself."""
        return {
            "ok": self.ok,
            "error": self.error,
            "request_id": self.request_id,
            "details": _details_dict(self.details),
            "stack": self.stack.to_dict(),
            "stats": {
                "files": self.stats.files,
                "folders": self.stats.folders,
                "max_depth": self.stats.max_depth,
                "total_size": self.stats.total_size,
            },
        }

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_result(error: str, request_id: int = 0) -> AnalysisResult:
    """
    Create a failed analysis result.

    No partial state is carried: details, tree and stack stay empty.
    """
    return AnalysisResult(ok=False, error=error, request_id=request_id)


def create_success_result(
        details: RepoDetails,
        root: TreeNode,
        stack: StackDescriptor,
        stats: TreeStats,
        request_id: int = 0,
) -> AnalysisResult:
    """Create a successful analysis result."""
    return AnalysisResult(
        ok=True,
        error="",
        request_id=request_id,
        details=details,
        root=root,
        stack=stack,
        stats=stats,
    )


def _details_dict(details: Optional[RepoDetails]) -> Optional[Dict[str, Any]]:
    if details is None:
        return None
    return {
        "owner": details.owner,
        "name": details.name,
        "description": details.description,
        "stars": details.stars,
        "forks": details.forks,
        "language": details.language,
        "default_branch": details.default_branch,
    }

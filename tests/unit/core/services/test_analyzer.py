from __future__ import annotations

"""
Unit tests for the Repository Analysis Orchestrator.

Uses an in-memory client double so that no network access happens.

Verifies:
1. Successful end-to-end composition (tree, stack, stats).
2. Fetch failures end the request before classification.
3. Branch-specific fetch path.
4. Last-requested-wins result application.
"""

import threading

import pytest

from codevisualizer.core.services.analyzer import ANALYSIS_FAILED_MESSAGE, RepositoryAnalyzer
from codevisualizer.domain.analysis_models import RepoDetails
from codevisualizer.domain.errors import RepositoryFetchError
from codevisualizer.domain.tree_models import FlatEntry, NodeKind


class FakeClient:
    """Records calls and serves canned data."""

    def __init__(self, entries=None, files=None, fail_details=False, fail_tree=False):
        self.entries = entries or []
        self.files = files or {}
        self.fail_details = fail_details
        self.fail_tree = fail_tree
        self.tree_refs = []
        self.reads = []
        self.lock = threading.Lock()

    def fetch_details(self, owner, repo):
        if self.fail_details:
            raise RepositoryFetchError("details: 404")
        return RepoDetails(owner, repo, "demo", 5, 2, "TypeScript", "trunk")

    def fetch_tree(self, owner, repo, branch):
        with self.lock:
            self.tree_refs.append(branch)
        if self.fail_tree:
            raise RepositoryFetchError("tree: 403 rate limited")
        return list(self.entries)

    def reader(self, owner, repo, ref=None):
        def read_file(path):
            with self.lock:
                self.reads.append((path, ref))
            return self.files.get(path)
        return read_file


@pytest.fixture
def node_repo():
    return FakeClient(
        entries=[
            FlatEntry("package.json", NodeKind.FILE, 120),
            FlatEntry("src", NodeKind.DIRECTORY),
            FlatEntry("src/index.ts", NodeKind.FILE, 300),
        ],
        files={"package.json": '{"dependencies":{"react":"18","express":"4"}}'},
    )


def test_successful_analysis(node_repo):
    analyzer = RepositoryAnalyzer(node_repo)
    result = analyzer.analyze("octo", "demo")

    assert result.ok
    assert result.request_id == 1
    assert result.details.language == "TypeScript"
    assert result.root.name == "demo"
    assert [c.name for c in result.root.children] == ["package.json", "src"]
    assert "React" in result.stack.frontend
    assert "Express.js" in result.stack.backend
    assert (result.stats.files, result.stats.folders, result.stats.total_size) == (2, 1, 420)


def test_default_branch_used_when_none_given(node_repo):
    RepositoryAnalyzer(node_repo).analyze("octo", "demo")

    assert node_repo.tree_refs == ["trunk"]
    assert node_repo.reads == [("package.json", "trunk")]


def test_explicit_branch_is_listed_and_read(node_repo):
    result = RepositoryAnalyzer(node_repo).analyze("octo", "demo", branch="dev")

    assert result.ok
    assert node_repo.tree_refs == ["dev"]
    assert node_repo.reads == [("package.json", "dev")]


@pytest.mark.parametrize("flags", [{"fail_details": True}, {"fail_tree": True}])
def test_fetch_failure_skips_classification(flags):
    client = FakeClient(files={"package.json": "{}"}, **flags)
    result = RepositoryAnalyzer(client).analyze("octo", "demo")

    assert not result.ok
    assert result.error == ANALYSIS_FAILED_MESSAGE
    assert result.root is None
    assert result.details is None
    assert result.stack.is_empty
    assert client.reads == []


def test_fetch_failure_on_branch_path():
    client = FakeClient(fail_tree=True)
    result = RepositoryAnalyzer(client).analyze("octo", "demo", branch="dev")

    assert not result.ok
    assert result.error == ANALYSIS_FAILED_MESSAGE


def test_empty_repository_is_valid():
    result = RepositoryAnalyzer(FakeClient()).analyze("octo", "empty")

    assert result.ok
    assert result.root.children == ()
    assert result.stack.is_empty
    assert result.stats.files == 0


# -----------------------------------------------------------------------------
# LAST-REQUESTED-WINS
# -----------------------------------------------------------------------------

def test_stale_result_is_not_applied(node_repo):
    analyzer = RepositoryAnalyzer(node_repo)
    applied = []

    first_id = analyzer.begin_request()
    second_id = analyzer.begin_request()

    newer = analyzer.run(second_id, "octo", "newer")
    older = analyzer.run(first_id, "octo", "older")

    assert analyzer.apply(newer, applied.append) is True
    assert analyzer.apply(older, applied.append) is False
    assert applied == [newer]
    assert analyzer.latest_result is newer
    assert not analyzer.is_current(first_id)
    assert analyzer.is_current(second_id)


def test_stale_error_result_is_also_discarded(node_repo):
    analyzer = RepositoryAnalyzer(node_repo)
    analyzer.analyze_and_apply("octo", "demo")
    current = analyzer.latest_result

    stale_id = analyzer.begin_request()
    analyzer.begin_request()
    failing = RepositoryAnalyzer(FakeClient(fail_details=True)).run(stale_id, "octo", "gone")

    assert analyzer.apply(failing) is False
    assert analyzer.latest_result is current


def test_analyze_and_apply_publishes_to_sink(node_repo):
    analyzer = RepositoryAnalyzer(node_repo)
    received = []

    result = analyzer.analyze_and_apply("octo", "demo", sink=received.append)

    assert received == [result]
    assert analyzer.latest_result is result

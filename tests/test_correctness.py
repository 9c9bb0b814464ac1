"""Tests for the correctness metric."""

import asyncio
import json

import httpx
import pytest

from netscore.collectors.github import GitHubCollector
from netscore.identity import RepoIdentity
from netscore.metrics.correctness import (
    CorrectnessMetric,
    IssueCounts,
    count_lines,
    correctness_score,
)

REPO = RepoIdentity("octokit", "graphql.js")

ISSUES = {"data": {"repository": {
    "issues": {"totalCount": 10},
    "closedIssues": {"totalCount": 8},
    "bugIssues": {"totalCount": 2},
}}}

TREE = {"data": {"repository": {"object": {"entries": [
    {"name": "README.md", "type": "blob", "object": {"text": "a\nb\nc\nd"}},
    {"name": "logo.png", "type": "blob", "object": {"text": None}},
    {"name": "src", "type": "tree", "object": {"entries": [
        {"name": "index.js", "type": "blob", "object": {"text": "1\n2\n3\n4\n5\n6"}},
        {"name": "lib", "type": "tree", "object": {}},
    ]}},
]}}}}


def _github(issues=None, tree=None):
    """Route by query text; a None payload answers with a GraphQL error."""

    def handler(request):
        query = json.loads(request.content)["query"]
        payload = issues if "closedIssues" in query else tree
        if payload is None:
            return httpx.Response(200, json={"errors": [{"message": "rate limited"}]})
        return httpx.Response(200, json=payload)

    return GitHubCollector(token="t", client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))


class TestCountLines:
    """Tests for count_lines tree traversal."""

    def test_counts_root_and_subdirectory_blobs(self):
        entries = TREE["data"]["repository"]["object"]["entries"]
        assert count_lines(entries) == 4 + 6

    def test_empty(self):
        assert count_lines([]) == 0
        assert count_lines(None) == 0


class TestCorrectnessScore:
    """Tests for the correctness formula."""

    def test_both_terms(self):
        score = correctness_score(IssueCounts(total=10, closed=8, bugs=2), 100)
        assert score == pytest.approx(0.7 * 0.8 + 0.3 * (1 - 2 / 100))

    def test_no_issues_counts_as_fully_resolved(self):
        assert correctness_score(IssueCounts(), 100) == pytest.approx(1.0)

    def test_no_code_counts_as_bug_free(self):
        score = correctness_score(IssueCounts(total=4, closed=2, bugs=1), 0)
        assert score == pytest.approx(0.7 * 0.5 + 0.3)

    def test_issue_fetch_failed(self):
        assert correctness_score(None, 500) == pytest.approx(0.3)

    def test_loc_fetch_failed(self):
        assert correctness_score(IssueCounts(total=10, closed=10, bugs=0), None) == pytest.approx(0.7)

    def test_both_failed(self):
        assert correctness_score(None, None) == 0.0


class TestCorrectnessMetric:
    """Tests for CorrectnessMetric.calculate."""

    def test_full_calculation(self):
        score = asyncio.run(CorrectnessMetric(_github(ISSUES, TREE)).calculate(REPO))
        assert score == pytest.approx(0.7 * 0.8 + 0.3 * (1 - 2 / 10))

    def test_issue_failure_keeps_loc_term(self):
        score = asyncio.run(CorrectnessMetric(_github(None, TREE)).calculate(REPO))
        assert score == pytest.approx(0.3)

    def test_loc_failure_keeps_issue_term(self):
        score = asyncio.run(CorrectnessMetric(_github(ISSUES, None)).calculate(REPO))
        assert score == pytest.approx(0.7 * 0.8)

    def test_both_failures_score_zero(self):
        assert asyncio.run(CorrectnessMetric(_github(None, None)).calculate(REPO)) == 0.0

    def test_missing_tree_entries_are_neutral(self):
        empty_tree = {"data": {"repository": {"object": None}}}
        score = asyncio.run(CorrectnessMetric(_github(ISSUES, empty_tree)).calculate(REPO))
        assert score == pytest.approx(0.7 * 0.8 + 0.3)

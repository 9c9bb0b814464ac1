"""Tests for the responsive maintainer metric."""

import asyncio
import json

import httpx
import pytest

from netscore.collectors.github import GitHubCollector
from netscore.errors import TransportError
from netscore.identity import RepoIdentity
from netscore.metrics.responsiveness import (
    ResponsivenessMetric,
    response_times_in_months,
    responsiveness_score,
    sample_size_for,
)

REPO = RepoIdentity("octokit", "graphql.js")


def _issue(created_at, first_comment_at=None):
    comments = [{"node": {"createdAt": first_comment_at}}] if first_comment_at else []
    return {"node": {"createdAt": created_at, "comments": {"edges": comments}}}


def _github(disk_usage_kb, issues, seen=None):
    def handler(request):
        body = json.loads(request.content)
        if "diskUsage" in body["query"]:
            return httpx.Response(200, json={"data": {"repository": {"diskUsage": disk_usage_kb}}})
        if seen is not None:
            seen["first"] = body["variables"]["first"]
        return httpx.Response(200, json={"data": {"repository": {"issues": {"edges": issues}}}})

    return GitHubCollector(token="t", client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))


class TestSampleSize:
    """Tests for sample_size_for tiers."""

    def test_small_repo(self):
        assert sample_size_for(10 * 1024) == 80

    def test_medium_repo(self):
        assert sample_size_for(60 * 1024) == 90

    def test_large_repo(self):
        assert sample_size_for(200 * 1024) == 100

    def test_boundaries_are_exclusive(self):
        assert sample_size_for(50 * 1024) == 80
        assert sample_size_for(100 * 1024) == 90


class TestResponseTimes:
    """Tests for response time extraction and scoring."""

    def test_thirty_days_is_one_month(self):
        times = response_times_in_months([_issue("2024-01-01T00:00:00Z", "2024-01-31T00:00:00Z")])
        assert times == [pytest.approx(1.0)]

    def test_uncommented_issues_skipped(self):
        issues = [_issue("2024-01-01T00:00:00Z"), _issue("2024-01-01T00:00:00Z", "2024-01-16T00:00:00Z")]
        assert response_times_in_months(issues) == [pytest.approx(0.5)]

    def test_score_formula(self):
        assert responsiveness_score([1.0, 3.0], 80) == pytest.approx(1 - 2.0 / 80)

    def test_no_responses_is_neutral(self):
        assert responsiveness_score([], 80) == 0.5

    def test_slow_responses_go_negative(self):
        assert responsiveness_score([100.0], 80) == pytest.approx(-0.25)

    def test_score_not_capped_at_one(self):
        assert responsiveness_score([-8.0], 80) == pytest.approx(1.1)


class TestResponsivenessMetric:
    """Tests for ResponsivenessMetric.calculate."""

    def test_zero_closed_issues_is_neutral(self):
        assert asyncio.run(ResponsivenessMetric(_github(1024, [])).calculate(REPO)) == 0.5

    def test_only_uncommented_issues_is_neutral(self):
        github = _github(1024, [_issue("2024-01-01T00:00:00Z")])
        assert asyncio.run(ResponsivenessMetric(github).calculate(REPO)) == 0.5

    def test_sample_size_follows_disk_usage(self):
        seen = {}
        issues = [_issue("2024-01-01T00:00:00Z", "2024-01-31T00:00:00Z")]
        score = asyncio.run(ResponsivenessMetric(_github(75 * 1024, issues, seen)).calculate(REPO))

        assert seen["first"] == 90
        assert score == pytest.approx(1 - 1.0 / 90)

    def test_api_failure_propagates(self):
        def handler(request):
            return httpx.Response(200, json={"errors": [{"message": "Not Found"}]})

        github = GitHubCollector(token="t", client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))
        with pytest.raises(TransportError):
            asyncio.run(ResponsivenessMetric(github).calculate(REPO))

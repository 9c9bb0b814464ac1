"""Responsive maintainer: time from issue creation to first comment."""

import logging

from dateutil.parser import isoparse

from netscore.collectors.github import GitHubCollector
from netscore.errors import DataShapeError
from netscore.identity import RepoIdentity
from netscore.metrics.base import BaseMetric, MetricName

logger = logging.getLogger(__name__)

DISK_USAGE_QUERY = """
query($owner: String!, $repo: String!) {
  repository(owner: $owner, name: $repo) {
    diskUsage
  }
}
"""

CLOSED_ISSUES_QUERY = """
query($owner: String!, $repo: String!, $first: Int!) {
  repository(owner: $owner, name: $repo) {
    issues(first: $first, states: CLOSED) {
      edges {
        node {
          createdAt
          comments(first: 1) {
            edges {
              node {
                createdAt
              }
            }
          }
        }
      }
    }
  }
}
"""

NEUTRAL_SCORE = 0.5
SECONDS_PER_MONTH = 60 * 60 * 24 * 30


def sample_size_for(disk_usage_kb: float) -> int:
    """Bigger repositories get a larger issue sample."""
    size_mb = disk_usage_kb / 1024
    if size_mb > 100:
        return 100
    if size_mb > 50:
        return 90
    return 80


def response_times_in_months(issue_edges: list[dict]) -> list[float]:
    """Months between issue creation and first comment, for commented issues."""
    times = []
    for edge in issue_edges:
        node = edge.get("node") or {}
        comments = (node.get("comments") or {}).get("edges") or []
        if not comments or not node.get("createdAt"):
            continue
        opened = isoparse(node["createdAt"])
        answered = isoparse(comments[0]["node"]["createdAt"])
        times.append((answered - opened).total_seconds() / SECONDS_PER_MONTH)
    return times


def responsiveness_score(response_times: list[float], sample_size: int) -> float:
    """
    One minus the mean response time (months) scaled by the sample size.

    Not clamped: an average slower than ``sample_size`` months goes
    negative. Neutral 0.5 when nothing was answered.
    """
    if not response_times:
        return NEUTRAL_SCORE
    average = sum(response_times) / len(response_times)
    return 1 - average / sample_size


class ResponsivenessMetric(BaseMetric):
    """Responsive maintainer score over a size-scaled sample of closed issues."""

    name = MetricName.RESPONSIVE_MAINTAINER

    def __init__(self, github: GitHubCollector):
        self.github = github

    async def fetch_disk_usage(self, repo: RepoIdentity) -> float:
        data = await self.github.query(DISK_USAGE_QUERY, repo)
        try:
            return data["repository"]["diskUsage"] or 0
        except (KeyError, TypeError) as e:
            raise DataShapeError(f"No disk usage reported for {repo}") from e

    async def fetch_closed_issues(self, repo: RepoIdentity, count: int) -> list[dict]:
        data = await self.github.query(CLOSED_ISSUES_QUERY, repo, first=count)
        try:
            return data["repository"]["issues"]["edges"] or []
        except (KeyError, TypeError) as e:
            raise DataShapeError(f"Unexpected issue list shape for {repo}") from e

    async def calculate(self, repo: RepoIdentity) -> float:
        try:
            sample_size = sample_size_for(await self.fetch_disk_usage(repo))
            issues = await self.fetch_closed_issues(repo, sample_size)
        except Exception as e:
            logger.error(f"Error fetching issues for {repo}: {e}")
            raise

        if not issues:
            logger.info(f"No closed issues found for {repo}")
            return NEUTRAL_SCORE

        score = responsiveness_score(response_times_in_months(issues), sample_size)
        logger.info(f"Responsiveness for {repo}: {score}")
        return score

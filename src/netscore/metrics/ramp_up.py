"""Ramp-up: how early contributors land their first pull request."""

import logging
from typing import Optional

from dateutil.parser import isoparse

from netscore.collectors.github import GitHubCollector
from netscore.identity import RepoIdentity
from netscore.metrics.base import BaseMetric, MetricName

logger = logging.getLogger(__name__)

PULL_REQUESTS_QUERY = """
query($owner: String!, $repo: String!, $after: String) {
  repository(owner: $owner, name: $repo) {
    pullRequests(first: 100, after: $after, orderBy: {field: CREATED_AT, direction: ASC}) {
      edges {
        node {
          createdAt
          author {
            login
          }
        }
      }
      pageInfo {
        hasNextPage
        endCursor
      }
    }
  }
}
"""

NEUTRAL_SCORE = 0.5


def _pull_requests(data: dict) -> dict:
    return data["repository"]["pullRequests"]


def first_pr_ratio(first_pr_times: dict[str, float]) -> float:
    """Earliest first-PR timestamp over the latest one; neutral 0.5 when empty."""
    if not first_pr_times:
        return NEUTRAL_SCORE
    return min(first_pr_times.values()) / max(first_pr_times.values())


class RampUpMetric(BaseMetric):
    """Ramp-up over the oldest pull requests of a repository."""

    name = MetricName.RAMP_UP

    MAX_PAGES = 3

    def __init__(self, github: GitHubCollector, max_pages: Optional[int] = None):
        self.github = github
        self.max_pages = self.MAX_PAGES if max_pages is None else max_pages

    async def first_pr_times(self, repo: RepoIdentity) -> dict[str, float]:
        """Map each PR author to the POSIX timestamp of their earliest PR seen."""
        first_seen: dict[str, float] = {}

        async for edges in self.github.paginate(PULL_REQUESTS_QUERY, repo, _pull_requests, self.max_pages):
            for edge in edges:
                node = edge.get("node") or {}
                login = (node.get("author") or {}).get("login")
                if not login or not node.get("createdAt"):
                    continue
                created = isoparse(node["createdAt"]).timestamp()
                if login not in first_seen or created < first_seen[login]:
                    first_seen[login] = created

        return first_seen

    async def calculate(self, repo: RepoIdentity) -> float:
        try:
            times = await self.first_pr_times(repo)
        except Exception as e:
            logger.error(f"Error fetching pull requests for {repo}: {e}")
            raise

        score = first_pr_ratio(times)
        logger.info(f"Ramp-up for {repo}: {score}")
        return score

"""Bus factor: share of contributors needed to cover a majority of commits."""

import logging
from collections import defaultdict
from typing import Optional

from netscore.collectors.github import GitHubCollector
from netscore.identity import RepoIdentity
from netscore.metrics.base import BaseMetric, MetricName

logger = logging.getLogger(__name__)

COMMIT_HISTORY_QUERY = """
query($owner: String!, $repo: String!, $after: String) {
  repository(owner: $owner, name: $repo) {
    defaultBranchRef {
      target {
        ... on Commit {
          history(first: 100, after: $after) {
            edges {
              node {
                author {
                  user {
                    login
                  }
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
    }
  }
}
"""


def _commit_history(data: dict) -> dict:
    return data["repository"]["defaultBranchRef"]["target"]["history"]


def majority_share(commit_counts: dict[str, int]) -> float:
    """
    Fraction of authors needed, busiest first, to exceed half of all commits.

    Args:
        commit_counts: Commits per author login

    Returns:
        authors_needed / total_authors, or 0.0 when there are no authors
    """
    if not commit_counts:
        return 0.0

    counts = sorted(commit_counts.values(), reverse=True)
    total = sum(counts)

    needed = 0
    running = 0
    for count in counts:
        running += count
        needed += 1
        if running > total / 2:
            break

    return needed / len(counts)


class BusFactorMetric(BaseMetric):
    """Bus factor over the most recent commits on the default branch."""

    name = MetricName.BUS_FACTOR

    # One page of 100 commits bounds API cost; not a completeness guarantee
    MAX_PAGES = 1

    def __init__(self, github: GitHubCollector, max_pages: Optional[int] = None):
        self.github = github
        self.max_pages = self.MAX_PAGES if max_pages is None else max_pages

    async def count_commits_by_author(self, repo: RepoIdentity) -> dict[str, int]:
        """Histogram of commits per author login; commits without a linked user are skipped."""
        counts: dict[str, int] = defaultdict(int)

        async for edges in self.github.paginate(COMMIT_HISTORY_QUERY, repo, _commit_history, self.max_pages):
            for edge in edges:
                author = (edge.get("node") or {}).get("author") or {}
                login = (author.get("user") or {}).get("login")
                if login:
                    counts[login] += 1

        return dict(counts)

    async def calculate(self, repo: RepoIdentity) -> float:
        try:
            counts = await self.count_commits_by_author(repo)
        except Exception as e:
            logger.error(f"Error fetching commit history for {repo}: {e}")
            return 0.0

        score = majority_share(counts)
        logger.info(f"Bus factor for {repo}: {score}")
        return score

"""Correctness: issue resolution ratio blended with bug density."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from netscore.collectors.github import GitHubCollector
from netscore.errors import DataShapeError, NetScoreError
from netscore.identity import RepoIdentity
from netscore.metrics.base import BaseMetric, MetricName

logger = logging.getLogger(__name__)

ISSUE_COUNTS_QUERY = """
query($owner: String!, $repo: String!) {
  repository(owner: $owner, name: $repo) {
    issues {
      totalCount
    }
    closedIssues: issues(states: CLOSED) {
      totalCount
    }
    bugIssues: issues(first: 5, labels: ["type: bug"]) {
      totalCount
    }
  }
}
"""

# Root tree plus one level of subdirectories; deeper trees are not walked
SOURCE_TREE_QUERY = """
query($owner: String!, $repo: String!) {
  repository(owner: $owner, name: $repo) {
    object(expression: "HEAD:") {
      ... on Tree {
        entries {
          name
          type
          object {
            ... on Blob {
              text
            }
            ... on Tree {
              entries {
                name
                type
                object {
                  ... on Blob {
                    text
                  }
                }
              }
            }
          }
        }
      }
    }
  }
}
"""

ISSUES_WEIGHT = 0.7
BUGS_WEIGHT = 0.3


@dataclass
class IssueCounts:
    """Issue totals for a repository."""

    total: int = 0
    closed: int = 0
    bugs: int = 0


def count_lines(entries: Optional[list[dict]]) -> int:
    """Sum line counts of every blob reachable through ``entries``."""
    total = 0
    for entry in entries or []:
        obj = entry.get("object") or {}
        if entry.get("type") == "blob" and obj.get("text"):
            total += len(obj["text"].split("\n"))
        elif entry.get("type") == "tree" and obj.get("entries"):
            total += count_lines(obj["entries"])
    return total


def correctness_score(issues: Optional[IssueCounts], lines_of_code: Optional[int]) -> float:
    """
    Combine the two correctness terms.

    A ``None`` argument means that fetch failed and its term contributes 0.
    Bug counts are unknown without issues, so the bug-density term then
    assumes no bugs.
    """
    if issues is None and lines_of_code is None:
        return 0.0

    issues_term = 0.0
    if issues is not None:
        issues_term = issues.closed / issues.total if issues.total > 0 else 1.0

    bugs_term = 0.0
    if lines_of_code is not None:
        bugs = issues.bugs if issues is not None else 0
        bugs_term = 1 - bugs / lines_of_code if lines_of_code > 0 else 1.0

    return ISSUES_WEIGHT * issues_term + BUGS_WEIGHT * bugs_term


class CorrectnessMetric(BaseMetric):
    """Correctness from issue counts and a shallow lines-of-code estimate."""

    name = MetricName.CORRECTNESS

    def __init__(self, github: GitHubCollector):
        self.github = github

    async def fetch_issue_counts(self, repo: RepoIdentity) -> IssueCounts:
        data = await self.github.query(ISSUE_COUNTS_QUERY, repo)
        try:
            repository = data["repository"]
            return IssueCounts(
                total=repository["issues"]["totalCount"],
                closed=repository["closedIssues"]["totalCount"],
                bugs=repository["bugIssues"]["totalCount"],
            )
        except (KeyError, TypeError) as e:
            raise DataShapeError(f"Unexpected issue count shape for {repo}") from e

    async def fetch_lines_of_code(self, repo: RepoIdentity) -> int:
        data = await self.github.query(SOURCE_TREE_QUERY, repo)
        root = (data.get("repository") or {}).get("object") or {}
        entries = root.get("entries")
        if not entries:
            logger.error(f"No tree entries found for {repo}")
            return 0
        return count_lines(entries)

    async def calculate(self, repo: RepoIdentity) -> float:
        issues_result, loc_result = await asyncio.gather(
            self.fetch_issue_counts(repo),
            self.fetch_lines_of_code(repo),
            return_exceptions=True,
        )

        issues: Optional[IssueCounts] = None
        if isinstance(issues_result, NetScoreError):
            logger.error(f"Issue fetch failed for {repo}: {issues_result}")
        elif isinstance(issues_result, BaseException):
            raise issues_result
        else:
            issues = issues_result

        lines_of_code: Optional[int] = None
        if isinstance(loc_result, NetScoreError):
            logger.error(f"Lines-of-code fetch failed for {repo}: {loc_result}")
        elif isinstance(loc_result, BaseException):
            raise loc_result
        else:
            lines_of_code = loc_result

        score = correctness_score(issues, lines_of_code)
        logger.info(f"Correctness for {repo}: {score}")
        return score

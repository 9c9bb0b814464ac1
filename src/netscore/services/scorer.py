"""Reusable scoring functions for netscore."""

import logging
from typing import Optional

from netscore.collectors.git import GitCollector
from netscore.collectors.github import GitHubCollector
from netscore.collectors.npm import NpmCollector
from netscore.identity import PackageIdentity
from netscore.scoring.engine import NetScoreCalculator
from netscore.scoring.report import CompositeReport

logger = logging.getLogger(__name__)


async def score_package(
    identity: PackageIdentity,
    url: Optional[str] = None,
    token: Optional[str] = None,
) -> CompositeReport:
    """
    Score a single package with freshly created clients.

    Args:
        identity: Package to score
        url: Original input URL to echo in the report
        token: GitHub token; defaults to GITHUB_TOKEN

    Returns:
        CompositeReport for the package
    """
    github = GitHubCollector(token=token)
    npm = NpmCollector()
    git = GitCollector()

    if not github.is_available():
        logger.warning("GITHUB_TOKEN is not set; GitHub queries will be rejected")

    try:
        calculator = NetScoreCalculator(github=github, npm=npm, git=git)
        return await calculator.score(identity, url=url)
    finally:
        await github.close()
        await npm.close()

"""Data collectors for the source platform, the registry and git."""

from netscore.collectors.git import GitCollector
from netscore.collectors.github import GitHubCollector
from netscore.collectors.npm import NpmCollector

__all__ = ["GitCollector", "GitHubCollector", "NpmCollector"]

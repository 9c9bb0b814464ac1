"""Package and repository identities."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Platform(str, Enum):
    """Where a package identity lives."""

    SOURCE_CONTROL = "github"
    REGISTRY = "npm"


@dataclass(frozen=True)
class RepoIdentity:
    """A resolved source repository: the only input calculators accept."""

    owner: str
    repo: str

    @property
    def url(self) -> str:
        return f"https://github.com/{self.owner}/{self.repo}"

    def __str__(self) -> str:
        return f"{self.owner}/{self.repo}"


@dataclass(frozen=True)
class PackageIdentity:
    """
    A package to score.

    Either a source-control repository (owner + repo) or a registry
    package (name). Registry identities are resolved to a RepoIdentity
    before any metric runs.
    """

    platform: Platform
    owner: Optional[str] = None
    repo: Optional[str] = None
    name: Optional[str] = None

    def __post_init__(self):
        if self.platform is Platform.SOURCE_CONTROL and not (self.owner and self.repo):
            raise ValueError("Source control identity requires owner and repo")
        if self.platform is Platform.REGISTRY and not self.name:
            raise ValueError("Registry identity requires a package name")

    @classmethod
    def source(cls, owner: str, repo: str) -> "PackageIdentity":
        return cls(platform=Platform.SOURCE_CONTROL, owner=owner, repo=repo)

    @classmethod
    def registry(cls, name: str) -> "PackageIdentity":
        return cls(platform=Platform.REGISTRY, name=name)

    @property
    def is_registry(self) -> bool:
        return self.platform is Platform.REGISTRY

    @property
    def url(self) -> str:
        """Canonical web URL for this identity."""
        if self.is_registry:
            return f"https://www.npmjs.com/package/{self.name}"
        return f"https://github.com/{self.owner}/{self.repo}"

    def to_repo(self) -> RepoIdentity:
        """Return the repository identity of an already-resolved package."""
        if self.is_registry:
            raise ValueError(f"Registry package {self.name} must be resolved first")
        return RepoIdentity(owner=self.owner, repo=self.repo)

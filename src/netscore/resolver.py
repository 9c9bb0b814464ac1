"""Registry package to source repository resolution."""

import logging
import re
from urllib.parse import urlparse

from netscore.collectors.npm import NpmCollector
from netscore.errors import ResolutionError, TransportError
from netscore.identity import PackageIdentity, RepoIdentity

logger = logging.getLogger(__name__)

_VCS_PREFIX_RE = re.compile(r"^git\+")
_GIT_SUFFIX_RE = re.compile(r"\.git$")


def parse_repository_url(repo_url: str) -> RepoIdentity:
    """
    Turn a registry ``repository.url`` into an owner/repo identity.

    Strips a leading ``git+`` and a trailing ``.git``, then requires the
    URL path to hold exactly two non-empty segments.

    Examples:
        git+https://github.com/expressjs/express.git -> expressjs/express
        git://github.com/owner/repo.git              -> owner/repo

    Raises:
        ResolutionError: if the URL is empty, has no scheme, or its path
            does not have exactly two segments.
    """
    if not repo_url or not repo_url.strip():
        raise ResolutionError("Empty repository URL")

    cleaned = _VCS_PREFIX_RE.sub("", repo_url.strip()).rstrip("/")
    cleaned = _GIT_SUFFIX_RE.sub("", cleaned)

    parsed = urlparse(cleaned)
    if not parsed.scheme:
        raise ResolutionError(f"Invalid package URL: {repo_url}")

    parts = [p for p in parsed.path.split("/") if p]
    if len(parts) != 2:
        raise ResolutionError(f"Invalid package URL: {repo_url}")

    return RepoIdentity(owner=parts[0], repo=parts[1])


async def resolve(identity: PackageIdentity, npm: NpmCollector) -> RepoIdentity:
    """
    Resolve any package identity to the repository the metrics run against.

    Source-control identities resolve to themselves without network access.

    Raises:
        ResolutionError: if the registry lookup fails or the declared
            repository URL is missing or malformed.
    """
    if not identity.is_registry:
        return identity.to_repo()

    try:
        repo_url = await npm.get_repository_url(identity.name)
    except TransportError as e:
        raise ResolutionError(f"Registry lookup failed for {identity.name}: {e}") from e

    if not repo_url:
        raise ResolutionError(f"No repository URL declared for {identity.name}")

    repo = parse_repository_url(repo_url)
    logger.info(f"Resolved {identity.name} to {repo}")
    return repo

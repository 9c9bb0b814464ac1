"""Batch scoring service for netscore.

Scores packages listed one URL per line and emits one NDJSON record per
package, sequentially.
"""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Awaitable, Callable, Optional, TextIO
from urllib.parse import urlparse

from netscore.identity import PackageIdentity
from netscore.scoring.report import CompositeReport
from netscore.services.scorer import score_package

logger = logging.getLogger(__name__)

Scorer = Callable[[PackageIdentity, Optional[str]], Awaitable[CompositeReport]]

_GIT_SUFFIX_RE = re.compile(r"\.git$")


@dataclass
class BatchResult:
    """Summary of a batch scoring run."""

    total: int = 0
    scored: int = 0
    skipped: int = 0
    error_details: list[str] = field(default_factory=list)


def parse_package_url(url: str) -> PackageIdentity:
    """
    Map a GitHub repository or npm package page URL to a package identity.

    Examples:
        https://github.com/cloudinary/cloudinary_npm -> source identity
        https://www.npmjs.com/package/express       -> registry identity
        https://www.npmjs.com/package/@types/node   -> registry identity "@types/node"

    Raises:
        ValueError: for any other URL.
    """
    parsed = urlparse(url.strip())
    host = parsed.netloc.lower()
    parts = [p for p in parsed.path.split("/") if p]

    if host == "github.com" or host.endswith(".github.com"):
        if len(parts) < 2:
            raise ValueError(f"GitHub URL has no owner/repo: {url}")
        return PackageIdentity.source(parts[0], _GIT_SUFFIX_RE.sub("", parts[1]))

    if host == "npmjs.com" or host.endswith(".npmjs.com"):
        if len(parts) < 2 or parts[0] != "package":
            raise ValueError(f"npm URL has no package name: {url}")
        if parts[1].startswith("@"):
            if len(parts) < 3:
                raise ValueError(f"Scoped npm URL has no package name: {url}")
            return PackageIdentity.registry(f"{parts[1]}/{parts[2]}")
        return PackageIdentity.registry(parts[1])

    raise ValueError(f"Unsupported package URL: {url}")


def load_url_file(path: str) -> list[str]:
    """Read a newline-delimited URL list, skipping blank lines."""
    text = Path(path).read_text(encoding="utf-8")
    return [line.strip() for line in text.splitlines() if line.strip()]


async def score_urls(urls: list[str], out: TextIO, scorer: Scorer = score_package) -> BatchResult:
    """
    Score each URL in turn and write one JSON line per scored package.

    Unparseable URLs are logged and skipped. Packages are processed one
    at a time.
    """
    result = BatchResult(total=len(urls))

    for url in urls:
        try:
            identity = parse_package_url(url)
        except ValueError as e:
            logger.error(f"Skipping {url}: {e}")
            result.skipped += 1
            result.error_details.append(str(e))
            continue

        report = await scorer(identity, url)
        out.write(report.to_json() + "\n")
        out.flush()
        result.scored += 1

    return result


async def score_url_file(path: str, out: TextIO, scorer: Scorer = score_package) -> BatchResult:
    """Score every URL listed in ``path``."""
    urls = load_url_file(path)
    logger.info(f"Loaded {len(urls)} URLs from {path}")
    return await score_urls(urls, out, scorer)

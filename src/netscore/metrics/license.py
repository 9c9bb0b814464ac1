"""License compatibility: package.json, then LICENSE, then README."""

import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional

from netscore.collectors.git import GitCollector
from netscore.errors import FilesystemError
from netscore.identity import RepoIdentity
from netscore.metrics.base import BaseMetric, MetricName

logger = logging.getLogger(__name__)

# Order matters: LICENSE and README tiers return the first key found as a substring
LICENSE_COMPATIBILITY: Mapping[str, float] = MappingProxyType({
    "LGPL-2.1": 0.75,
    "MIT": 1,
    "GPL-3.0": 0.25,
    "Apache-2.0": 1,
    "BSD-3-Clause": 1,
    "BSD-2-Clause": 1,
    "MPL-2.0": 0.5,
    "AGPL-3.0": 0.25,
    "EPL-1.0": 0.5,
    "EPL-2.0": 0.5,
    "CC0-1.0": 1,
    "Unlicense": 1,
    "ISC": 1,
    "Zlib": 1,
    "Artistic-2.0": 0.75,
    "OFL-1.1": 1,
    "EUPL-1.2": 0.5,
    "LGPL-3.0": 0.75,
    "GPL-2.0": 0.25,
    "GPL-2.0+": 0.25,
    "GPL-3.0+": 0.25,
    "AGPL-3.0+": 0.25,
    "LGPL-2.1+": 0.75,
    "LGPL-3.0+": 0.75,
    "Apache-1.1": 0.5,
    "Apache-1.0": 0.5,
    "CC-BY-4.0": 1,
    "CC-BY-SA-4.0": 0.75,
    "CC-BY-NC-4.0": 0,
    "CC-BY-ND-4.0": 0,
    "CC-BY-NC-SA-4.0": 0,
    "CC-BY-NC-ND-4.0": 0,
    "0BSD": 1,
    "Academic Free License v3.0": 1,
    "AFL-3.0": 1,
    "Artistic License 2.0": 0.75,
    "Boost Software License 1.0": 1,
    "BSL-1.0": 1,
    "BSD-4-Clause": 0.75,
    "BSD-3-Clause-Clear": 1,
    "Creative Commons license family": 1,
    "CC": 1,
    "Creative Commons Zero v1.0 Universal": 1,
    "Creative Commons Attribution 4.0": 1,
    "Creative Commons Attribution ShareAlike 4.0": 0.75,
    "Do What The F*ck You Want To Public License": 1,
    "WTFPL": 1,
    "Educational Community License v2.0": 0.75,
    "ECL-2.0": 0.75,
    "Eclipse Public License 1.0": 0.5,
    "Eclipse Public License 2.0": 0.5,
    "European Union Public License 1.1": 0.5,
    "EUPL-1.1": 0.5,
    "GNU Affero General Public License v3.0": 0.25,
    "GNU General Public License v2.0": 0.25,
    "GNU General Public License v3.0": 0.25,
    "GNU Lesser General Public License v2.1": 0.75,
    "GNU Lesser General Public License v3.0": 0.75,
    "LaTeX Project Public License v1.3c": 0.75,
    "LPPL-1.3c": 0.75,
    "Microsoft Public License": 0.5,
    "MS-PL": 0.5,
    "Mozilla Public License 2.0": 0.5,
    "Open Software License 3.0": 0.5,
    "OSL-3.0": 0.5,
    "PostgreSQL License": 1,
    "PostgreSQL": 1,
    "SIL Open Font License 1.1": 0.75,
    "University of Illinois/NCSA Open Source License": 1,
    "NCSA": 1,
    "The Unlicense": 1,
    "zLib License": 1,
})

PACKAGE_JSON = "package.json"
LICENSE_FILE = "LICENSE"
README_FILE = "README.md"


class LicenseScorer:
    """Pure three-tier license lookup against a compatibility table."""

    def __init__(self, compatibility: Mapping[str, float] = LICENSE_COMPATIBILITY):
        self.compatibility = compatibility

    def from_package_json(self, text: str) -> Optional[float]:
        """Exact match of the package.json ``license`` field."""
        manifest = json.loads(text)
        declared = manifest.get("license") if isinstance(manifest, dict) else None
        if isinstance(declared, str) and declared in self.compatibility:
            logger.info(f"Found license {declared} in {PACKAGE_JSON}")
            return float(self.compatibility[declared])
        return None

    def from_license_file(self, text: str) -> Optional[float]:
        """Substring match against the first line of a LICENSE file."""
        first_line = text.split("\n")[0].strip()
        for license_id, score in self.compatibility.items():
            if license_id in first_line:
                logger.info(f"Found license {license_id} in {LICENSE_FILE}")
                return float(score)
        return None

    def from_readme(self, text: str) -> Optional[float]:
        """Case-insensitive substring scan of a README."""
        lowered = text.lower()
        for license_id, score in self.compatibility.items():
            if license_id.lower() in lowered:
                logger.info(f"Found license {license_id} in {README_FILE}")
                return float(score)
        return None

    def score(
        self,
        package_json: Optional[str] = None,
        license_text: Optional[str] = None,
        readme: Optional[str] = None,
    ) -> float:
        """Walk the tiers in order; 0.0 when no tier matches."""
        if package_json is not None:
            try:
                found = self.from_package_json(package_json)
            except ValueError as e:
                logger.error(f"Could not parse {PACKAGE_JSON}: {e}")
                found = None
            if found is not None:
                return found

        if license_text is not None:
            found = self.from_license_file(license_text)
            if found is not None:
                return found

        if readme is not None:
            found = self.from_readme(readme)
            if found is not None:
                return found

        return 0.0


def read_optional(path: Path) -> Optional[str]:
    """Read a UTF-8 file; None if it is missing or unreadable."""
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.debug(f"{path.name} not present")
        return None
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Failed to read {path}: {e}")
        return None


class LicenseMetric(BaseMetric):
    """License compatibility from a shallow clone of the repository."""

    name = MetricName.LICENSE

    def __init__(self, git: GitCollector, compatibility: Mapping[str, float] = LICENSE_COMPATIBILITY):
        self.git = git
        self.scorer = LicenseScorer(compatibility)

    def score_checkout(self, workdir: Path) -> float:
        """Score an already checked-out working tree."""
        return self.scorer.score(
            package_json=read_optional(workdir / PACKAGE_JSON),
            license_text=read_optional(workdir / LICENSE_FILE),
            readme=read_optional(workdir / README_FILE),
        )

    async def calculate(self, repo: RepoIdentity) -> float:
        async with self.git.workspace() as workdir:
            try:
                await self.git.clone(repo, workdir)
            except FilesystemError:
                return 0.0

            score = self.score_checkout(workdir)

        if score == 0.0:
            logger.info(f"No compatible license found for {repo}")
        else:
            logger.info(f"License score for {repo}: {score}")
        return score

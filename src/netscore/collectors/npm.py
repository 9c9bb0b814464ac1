"""npm registry collector - the registry client."""

import logging
from typing import Optional
from urllib.parse import quote

import httpx

from netscore.collectors.base import HttpCollector
from netscore.errors import TransportError

logger = logging.getLogger(__name__)


class NpmCollector(HttpCollector):
    """Collector for npm registry data."""

    REGISTRY_URL = "https://registry.npmjs.org"

    def is_available(self) -> bool:
        """npm collector is always available."""
        return True

    async def get_package_info(self, package_name: str) -> dict:
        """
        Get package metadata from npm registry.

        Raises:
            TransportError: on network failure or any non-200 status.
        """
        # Scoped packages keep their leading @ but the slash must be escaped
        url = f"{self.REGISTRY_URL}/{quote(package_name, safe='@')}"
        try:
            response = await self.client.get(url)
        except httpx.HTTPError as e:
            logger.error(f"npm registry error for {package_name}: {e}")
            raise TransportError(f"npm registry request failed for {package_name}: {e}") from e

        if response.status_code != 200:
            raise TransportError(f"npm registry returned {response.status_code} for {package_name}")

        try:
            return response.json()
        except ValueError as e:
            raise TransportError(f"npm registry returned invalid JSON for {package_name}") from e

    @staticmethod
    def extract_repository_url(pkg_info: dict) -> Optional[str]:
        """
        Pull the declared repository URL of the latest version.

        Returns None when the latest version or its repository field is absent.
        """
        latest = (pkg_info.get("dist-tags") or {}).get("latest")
        if not latest:
            return None

        version = (pkg_info.get("versions") or {}).get(latest) or {}
        repo = version.get("repository")
        if isinstance(repo, dict):
            return repo.get("url") or None
        if isinstance(repo, str):
            return repo or None
        return None

    async def get_repository_url(self, package_name: str) -> Optional[str]:
        """Get the repository URL declared by the latest published version."""
        pkg_info = await self.get_package_info(package_name)
        return self.extract_repository_url(pkg_info)

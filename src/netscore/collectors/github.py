"""GitHub GraphQL collector - the source platform client."""

import logging
import os
from typing import Any, AsyncIterator, Callable, Optional

import httpx

from netscore.collectors.base import HttpCollector
from netscore.errors import DataShapeError, TransportError
from netscore.identity import RepoIdentity

logger = logging.getLogger(__name__)


class GitHubCollector(HttpCollector):
    """Collector for GitHub GraphQL API data."""

    GRAPHQL_URL = "https://api.github.com/graphql"

    def __init__(self, token: Optional[str] = None, client: Optional[httpx.AsyncClient] = None):
        """
        Initialize GitHub collector.

        Args:
            token: GitHub personal access token. Defaults to GITHUB_TOKEN env var.
            client: Pre-built HTTP client (tests inject a MockTransport here).
        """
        super().__init__(client)
        self.token = token or os.getenv("GITHUB_TOKEN")

    def is_available(self) -> bool:
        """Check if GitHub token is available."""
        return bool(self.token)

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def query(self, query: str, repo: RepoIdentity, **variables: Any) -> dict:
        """
        Execute a GraphQL query against one repository.

        The request always carries ``owner`` and ``repo`` variables; extra
        keyword arguments are merged in.

        Returns:
            The ``data`` member of the response body.

        Raises:
            TransportError: on network failure, non-2xx status, or a
                GraphQL ``errors`` payload.
        """
        payload = {
            "query": query,
            "variables": {"owner": repo.owner, "repo": repo.repo, **variables},
        }

        try:
            response = await self.client.post(self.GRAPHQL_URL, json=payload, headers=self._headers())
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPError as e:
            logger.error(f"GitHub GraphQL request failed for {repo}: {e}")
            raise TransportError(f"GitHub request failed for {repo}: {e}") from e
        except ValueError as e:
            raise TransportError(f"GitHub returned invalid JSON for {repo}") from e

        if body.get("errors"):
            logger.error(f"GraphQL errors for {repo}: {body['errors']}")
            raise TransportError(f"GraphQL errors for {repo}: {body['errors']}")

        data = body.get("data")
        if data is None:
            raise TransportError(f"GitHub response for {repo} has no data")
        return data

    async def paginate(
        self,
        query: str,
        repo: RepoIdentity,
        connection: Callable[[dict], dict],
        max_pages: int,
        **variables: Any,
    ) -> AsyncIterator[list[dict]]:
        """
        Walk a cursor-paginated connection, one page of edges at a time.

        Stops after ``max_pages`` pages even if the server keeps reporting
        ``hasNextPage``.

        Args:
            query: GraphQL query declaring an ``$after: String`` variable
            repo: Repository to query
            connection: Picks the connection object out of the ``data`` payload
            max_pages: Hard page budget
        """
        cursor = None
        for page in range(max_pages):
            data = await self.query(query, repo, after=cursor, **variables)
            try:
                conn = connection(data)
                edges = conn["edges"]
                page_info = conn.get("pageInfo") or {}
            except (KeyError, TypeError) as e:
                raise DataShapeError(f"Unexpected connection shape for {repo} on page {page + 1}") from e

            yield edges or []

            if not page_info.get("hasNextPage"):
                break
            cursor = page_info.get("endCursor")

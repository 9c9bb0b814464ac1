"""Git collector - shallow clones into per-call scratch workspaces."""

import asyncio
import logging
import os
import shutil
import tempfile
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional

from git import Repo
from git.exc import GitCommandError

from netscore.collectors.base import BaseCollector
from netscore.errors import FilesystemError
from netscore.identity import RepoIdentity

logger = logging.getLogger(__name__)


class GitCollector(BaseCollector):
    """Collector for repository working trees."""

    def __init__(self, scratch_root: Optional[str] = None):
        """
        Initialize the git collector.

        Args:
            scratch_root: Parent directory for temporary clones.
                Defaults to $NETSCORE_WORKDIR, then the system temp dir.
        """
        root = scratch_root or os.getenv("NETSCORE_WORKDIR")
        self.scratch_root = Path(root) if root else None
        if self.scratch_root:
            self.scratch_root.mkdir(parents=True, exist_ok=True)

    def is_available(self) -> bool:
        """Available whenever the git executable is on PATH."""
        return shutil.which("git") is not None

    def _remove_workspace(self, path: Path) -> None:
        try:
            shutil.rmtree(path)
            logger.debug(f"Removed workspace {path}")
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.error(f"Failed to remove workspace {path}: {e}")

    @asynccontextmanager
    async def workspace(self) -> AsyncIterator[Path]:
        """
        Yield a fresh, uniquely named empty directory and remove it on exit.

        Every caller gets its own directory, so concurrent scorings never
        share a working tree. Creation and removal run in a worker thread.
        """
        path = Path(await asyncio.to_thread(tempfile.mkdtemp, prefix="netscore-", dir=self.scratch_root))
        logger.debug(f"Created workspace {path}")
        try:
            yield path
        finally:
            await asyncio.to_thread(self._remove_workspace, path)

    def shallow_clone(self, repo_url: str, dest: Path) -> Path:
        """
        Clone the tip of the default branch (depth 1) into ``dest``.

        Raises:
            FilesystemError: if git fails.
        """
        logger.info(f"Cloning repository: {repo_url}")
        try:
            Repo.clone_from(repo_url, dest, depth=1)
        except GitCommandError as e:
            logger.error(f"Failed to clone repository {repo_url}: {e}")
            raise FilesystemError(f"Failed to clone {repo_url}") from e
        return dest

    async def clone(self, repo: RepoIdentity, dest: Path) -> Path:
        """Shallow-clone ``repo`` off the event loop."""
        return await asyncio.to_thread(self.shallow_clone, repo.url, dest)

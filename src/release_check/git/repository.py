"""
Git Repository Accessor

Read-only access to local git history through GitPython.
Provides ref verification and commit range listing.
"""

import logging
from pathlib import Path
from typing import List, Protocol, Union

from git import Repo
from git.exc import GitCommandError, InvalidGitRepositoryError, NoSuchPathError

from ..exceptions import GitAccessError
from ..models.commit import Commit


logger = logging.getLogger(__name__)


class VersionControl(Protocol):
    """Interface the diff reader expects from a version-control backend."""

    def verify_ref_exists(self, ref: str) -> bool:
        ...

    def log_range(self, from_ref: str, to_ref: str) -> List[Commit]:
        ...


class GitRepository:
    """
    GitPython-backed repository accessor.

    Never mutates the repository: only ``rev-parse`` and ``log``
    style queries are issued.
    """

    def __init__(self, path: Union[str, Path] = "."):
        """
        Open a git repository.

        Args:
            path: Repository path (parent directories are searched)

        Raises:
            GitAccessError: If the path is not inside a git repository
        """
        self.path = Path(path)
        try:
            self.repo = Repo(self.path, search_parent_directories=True)
        except (InvalidGitRepositoryError, NoSuchPathError) as e:
            raise GitAccessError(f"Not a git repository: {self.path} ({e})") from e

        logger.debug(f"Opened git repository at {self.repo.working_dir}")

    def verify_ref_exists(self, ref: str) -> bool:
        """Check that ``ref`` resolves to a commit."""
        try:
            self.repo.git.rev_parse('--verify', '--quiet', f'{ref}^{{commit}}')
            return True
        except GitCommandError:
            logger.debug(f"Ref did not resolve: {ref}")
            return False

    def log_range(self, from_ref: str, to_ref: str) -> List[Commit]:
        """
        List commits reachable from ``to_ref`` but not from ``from_ref``.

        Args:
            from_ref: Exclusive lower bound (the target branch)
            to_ref: Inclusive upper bound (the source branch)

        Returns:
            Commits newest first, as ``git log from..to`` prints them
        """
        rev_range = f"{from_ref}..{to_ref}"
        logger.info(f"Reading git log for {rev_range}")

        try:
            commits = [
                Commit(
                    hash=c.hexsha,
                    message=c.message.strip(),
                    author_name=c.author.name or "",
                    author_email=c.author.email or "",
                    date=c.authored_datetime,
                    parent_count=len(c.parents),
                )
                for c in self.repo.iter_commits(rev_range)
            ]
        except (GitCommandError, ValueError) as e:
            logger.error(f"git log failed for {rev_range}: {e}")
            raise GitAccessError(f"Failed to read history for {rev_range}: {e}") from e

        logger.info(f"Found {len(commits)} commits in {rev_range}")
        return commits

"""
Branch Diff Reader

Resolves the source and target refs and lists the commits that the
source branch would bring into the target branch.
"""

import logging
from typing import List, Union

from ..exceptions import RefNotFoundError
from ..models.commit import Commit
from ..models.result import EmptyDiff
from .repository import VersionControl


logger = logging.getLogger(__name__)


class BranchDiffReader:
    """
    Produces the commit set reachable from a source ref but not a target ref.

    Ordering follows the version-control log: newest commit first.
    """

    def __init__(self, vcs: VersionControl):
        self.vcs = vcs

    def diff(self, source_ref: str, target_ref: str) -> Union[List[Commit], EmptyDiff]:
        """
        Diff two branches.

        Args:
            source_ref: Branch being released (e.g. ``develop``)
            target_ref: Branch receiving the release (e.g. ``main``)

        Returns:
            Commits only on ``source_ref``, or ``EmptyDiff`` when there are none

        Raises:
            RefNotFoundError: If either ref cannot be resolved
        """
        # Both refs are checked before any log is read
        for ref in (source_ref, target_ref):
            if not self.vcs.verify_ref_exists(ref):
                logger.error(f"Ref not found: {ref}")
                raise RefNotFoundError(ref)

        commits = self.vcs.log_range(target_ref, source_ref)
        if not commits:
            logger.info(f"No differences between {source_ref} and {target_ref}")
            return EmptyDiff(source_branch=source_ref, target_branch=target_ref)

        logger.info(f"{len(commits)} commits on {source_ref} are not on {target_ref}")
        return commits

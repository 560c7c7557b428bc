"""
Main Release Check API

Main interface that orchestrates the complete check from branch
diff collection to a classified, render-ready result.
"""

import logging
from typing import Iterable, List, Optional, Sequence, Union

from .check.classifier import CommitClassifier
from .check.resolver import PrMembershipResolver
from .config import AppConfig
from .git.reader import BranchDiffReader
from .git.repository import GitRepository
from .github.client import GitHubClient
from .models.commit import PullRequestReference
from .models.result import EmptyDiff, ReleaseCheckResult


logger = logging.getLogger(__name__)


class ReleaseCheckAPI:
    """
    Main Release Check API interface.

    Orchestrates one check:
    1. Verify both refs and read the branch diff
    2. Resolve PR commit membership (concurrent fetches)
    3. Classify every non-merge commit

    Collaborators are injected; ``from_config`` wires the defaults.
    """

    def __init__(
        self,
        reader: BranchDiffReader,
        resolver: PrMembershipResolver,
        classifier: Optional[CommitClassifier] = None,
        config: Optional[AppConfig] = None,
    ):
        """
        Initialize Release Check API.

        Args:
            reader: Branch diff reader
            resolver: Pull request membership resolver
            classifier: Commit classifier (built from config when omitted)
            config: Configuration supplying branch and pattern defaults
        """
        self.config = config or AppConfig()
        self.reader = reader
        self.resolver = resolver
        self.classifier = classifier or CommitClassifier(
            merge_prefixes=self.config.check.merge_prefixes,
            detect_merges_by_parents=self.config.check.detect_merges_by_parents,
        )

    @classmethod
    def from_config(cls, config: AppConfig) -> "ReleaseCheckAPI":
        """Build the API with a local git repository and the GitHub API."""
        logger.info("Initializing Release Check API components...")

        repository = GitRepository(config.git.repo_path)
        client = GitHubClient(
            token=config.github.token,
            base_url=config.github.api_base_url,
            timeout=config.github.timeout_seconds,
            max_retries=config.github.max_retries,
        )

        return cls(
            reader=BranchDiffReader(repository),
            resolver=PrMembershipResolver(client, max_workers=config.github.max_workers),
            config=config,
        )

    def run_check(
        self,
        pr_urls: Iterable[Union[str, PullRequestReference]],
        source_branch: Optional[str] = None,
        target_branch: Optional[str] = None,
        exclude_patterns: Optional[Sequence[str]] = None,
    ) -> Union[ReleaseCheckResult, EmptyDiff]:
        """
        Run a release check.

        Args:
            pr_urls: Pull request URLs (or parsed references) in the release
            source_branch: Branch being released (config default when None)
            target_branch: Branch receiving the release (config default when None)
            exclude_patterns: Disqualifying substrings (config default when None)

        Returns:
            ReleaseCheckResult, or EmptyDiff when the branches do not differ

        Raises:
            RefNotFoundError: If either branch cannot be resolved
            AllPrFetchesFailed: If no pull request commits could be fetched
        """
        source = source_branch or self.config.check.source_branch
        target = target_branch or self.config.check.target_branch
        patterns: List[str] = list(
            self.config.check.exclude_patterns if exclude_patterns is None else exclude_patterns
        )

        logger.info(f"Starting release check: {source} -> {target}")

        diff = self.reader.diff(source, target)
        if isinstance(diff, EmptyDiff):
            return diff

        membership = self.resolver.resolve(pr_urls)

        result = self.classifier.classify(
            diff,
            patterns,
            membership.commit_set,
            source_branch=source,
            target_branch=target,
            pull_requests=membership.references,
            warnings=membership.warnings,
        )

        logger.info(
            f"Release check completed: {source} -> {target} "
            f"({result.flagged_count}/{result.total_examined} flagged)"
        )
        return result

"""
Commit Classifier

Assigns a release verdict to every non-merge commit of a branch diff,
based on exclusion patterns and pull request membership.
"""

import logging
from typing import AbstractSet, Iterable, List, Optional, Sequence, Tuple

from ..models.commit import Commit, PullRequestReference, normalize_hash
from ..models.result import (
    NOT_IN_PR_LABEL,
    ClassifiedCommit,
    PrWarning,
    ReleaseCheckResult,
    Verdict,
)


logger = logging.getLogger(__name__)


DEFAULT_MERGE_PREFIXES = ("Merge pull request", "Merge branch")


class CommitClassifier:
    """
    Pure, synchronous verdict engine.

    Precedence per commit:
    1. Merge commits (by message prefix) are omitted from the report
    2. A matching exclusion pattern wins regardless of PR membership
    3. Commits outside the PR set are ``NOT_IN_PR``
    4. Everything else is ``RELEASE_SAFE``
    """

    def __init__(
        self,
        merge_prefixes: Iterable[str] = DEFAULT_MERGE_PREFIXES,
        detect_merges_by_parents: bool = False,
    ):
        """
        Initialize commit classifier.

        Args:
            merge_prefixes: Message prefixes that mark routine merge commits
            detect_merges_by_parents: Also treat commits with several parents as merges
        """
        self.merge_prefixes = tuple(p for p in merge_prefixes if p)
        self.detect_merges_by_parents = detect_merges_by_parents

    def is_merge(self, commit: Commit) -> bool:
        """Check if a commit is routine merge bookkeeping."""
        if self.merge_prefixes and commit.message.startswith(self.merge_prefixes):
            return True
        return self.detect_merges_by_parents and commit.has_multiple_parents

    def match_pattern(self, message: str, patterns: Sequence[str]) -> Optional[str]:
        """Return the first pattern contained in ``message``, in configured order."""
        for pattern in patterns:
            if pattern and pattern in message:
                return pattern
        return None

    def classify_commit(
        self,
        commit: Commit,
        patterns: Sequence[str],
        pr_commit_set: AbstractSet[str],
    ) -> ClassifiedCommit:
        """
        Classify a single non-merge commit.

        Args:
            commit: Commit to classify
            patterns: Exclusion patterns in priority order
            pr_commit_set: Normalized commit hashes of the referenced PRs

        Returns:
            ClassifiedCommit with verdict, display label and PR coverage flag
        """
        matched_pattern = self.match_pattern(commit.message, patterns)
        in_pr = commit.normalized_hash in pr_commit_set

        if matched_pattern:
            verdict = Verdict.EXCLUDED_BY_PATTERN
            label = matched_pattern
        elif not in_pr:
            verdict = Verdict.NOT_IN_PR
            label = NOT_IN_PR_LABEL
        else:
            verdict = Verdict.RELEASE_SAFE
            label = ""

        return ClassifiedCommit(
            commit=commit,
            verdict=verdict,
            label=label,
            in_pr=in_pr,
            matched_pattern=matched_pattern,
        )

    def classify(
        self,
        diff_commits: Iterable[Commit],
        exclusion_patterns: Sequence[str],
        pr_commit_set: AbstractSet[str],
        source_branch: str = "",
        target_branch: str = "",
        pull_requests: Optional[List[PullRequestReference]] = None,
        warnings: Optional[List[PrWarning]] = None,
    ) -> ReleaseCheckResult:
        """
        Classify every commit of a branch diff.

        Args:
            diff_commits: Commits on the source branch but not the target
            exclusion_patterns: Disqualifying substrings, first match wins
            pr_commit_set: Commit hashes of the referenced pull requests
            source_branch: Source branch name for the report
            target_branch: Target branch name for the report
            pull_requests: Pull requests the membership set was built from
            warnings: Non-fatal warnings to carry into the result

        Returns:
            ReleaseCheckResult in diff order, merges omitted
        """
        patterns = [p for p in exclusion_patterns if p]
        membership = frozenset(normalize_hash(h) for h in pr_commit_set)

        classified, merge_skipped = self._classify_all(diff_commits, patterns, membership)

        result = ReleaseCheckResult(
            source_branch=source_branch,
            target_branch=target_branch,
            pull_requests=list(pull_requests or []),
            commits=classified,
            merge_skipped=merge_skipped,
            warnings=list(warnings or []),
        )

        logger.info(
            f"Classified {result.total_examined} commits: {result.flagged_count} flagged, "
            f"{merge_skipped} merges skipped"
        )
        return result

    def _classify_all(
        self,
        diff_commits: Iterable[Commit],
        patterns: Sequence[str],
        membership: AbstractSet[str],
    ) -> Tuple[List[ClassifiedCommit], int]:
        classified = []
        merge_skipped = 0

        for commit in diff_commits:
            if self.is_merge(commit):
                logger.debug(f"Skipping merge commit {commit.short_hash}")
                merge_skipped += 1
                continue
            classified.append(self.classify_commit(commit, patterns, membership))

        return classified, merge_skipped

"""
Pull Request Membership Resolver

Fetches the commit list of every referenced pull request and unions
their identifiers into one membership set. Individual failures are
downgraded to warnings; only a completely empty result is fatal.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, List, Optional, Protocol, Tuple, Union

from ..exceptions import AllPrFetchesFailed, InvalidPullRequestURL, MalformedPayloadError
from ..github.client import GitHubAPIError
from ..github.parser import PullRequestParser
from ..models.commit import PullRequestReference
from ..models.result import PrWarning


logger = logging.getLogger(__name__)


class PullRequestCommitSource(Protocol):
    """Anything that can list a pull request's commits (e.g. GitHubClient)."""

    def get_pull_request_commits(self, owner: str, repo: str, pr_number: int) -> list:
        ...


@dataclass
class MembershipResolution:
    """Outcome of resolving a set of pull requests."""
    commit_set: FrozenSet[str]
    warnings: List[PrWarning] = field(default_factory=list)
    resolved: List[PullRequestReference] = field(default_factory=list)
    failed: List[PullRequestReference] = field(default_factory=list)
    # Every well-formed reference that was attempted, in input order
    references: List[PullRequestReference] = field(default_factory=list)


class PrMembershipResolver:
    """
    Builds the PR commit membership set.

    Fetches fan out over a thread pool; results are merged on the calling
    thread only, so the accumulating set has a single writer.
    """

    def __init__(
        self,
        client: PullRequestCommitSource,
        parser: Optional[PullRequestParser] = None,
        max_workers: int = 4,
        deadline_seconds: Optional[float] = None,
    ):
        """
        Initialize the resolver.

        Args:
            client: Pull request commit source
            parser: URL and payload parser
            max_workers: Maximum concurrent fetches
            deadline_seconds: Time allowed for all fetches; unfinished
                fetches are reported as timed out (None waits for all)
        """
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self.client = client
        self.parser = parser or PullRequestParser()
        self.max_workers = max_workers
        self.deadline_seconds = deadline_seconds

    def resolve(
        self, pr_references: Iterable[Union[str, PullRequestReference]]
    ) -> MembershipResolution:
        """
        Resolve pull request references into a commit membership set.

        Args:
            pr_references: PR URLs or already parsed references

        Returns:
            MembershipResolution with the union of normalized commit hashes

        Raises:
            AllPrFetchesFailed: If no pull request contributed any commit
        """
        if isinstance(pr_references, (str, PullRequestReference)):
            pr_references = [pr_references]

        references, warnings = self._parse_references(pr_references)
        commit_set = set()
        resolved = []
        failed = []

        if references:
            logger.info(f"Resolving commits for {len(references)} pull requests")
            executor = ThreadPoolExecutor(
                max_workers=min(self.max_workers, len(references)),
                thread_name_prefix="pr-fetch",
            )
            try:
                futures = [executor.submit(self._fetch_hashes, ref) for ref in references]
                _, not_done = wait(futures, timeout=self.deadline_seconds)

                for reference, future in zip(references, futures):
                    if future in not_done:
                        future.cancel()
                        message = f"Timed out after {self.deadline_seconds}s"
                    else:
                        try:
                            commit_set.update(future.result())
                            resolved.append(reference)
                            continue
                        except (GitHubAPIError, MalformedPayloadError) as e:
                            message = str(e)
                        except Exception as e:
                            logger.exception(f"Unexpected error fetching {reference}")
                            message = f"Unexpected error: {e}"

                    logger.warning(f"Skipping {reference}: {message}")
                    warnings.append(PrWarning(reference=str(reference), message=message))
                    failed.append(reference)
            finally:
                executor.shutdown(wait=False, cancel_futures=True)

        if not commit_set:
            logger.error("No pull request commits could be resolved")
            raise AllPrFetchesFailed(warnings)

        logger.info(
            f"Resolved {len(commit_set)} commits from {len(resolved)} pull requests "
            f"({len(warnings)} warnings)"
        )
        return MembershipResolution(
            commit_set=frozenset(commit_set),
            warnings=warnings,
            resolved=resolved,
            failed=failed,
            references=references,
        )

    def _parse_references(
        self, pr_references: Iterable[Union[str, PullRequestReference]]
    ) -> Tuple[List[PullRequestReference], List[PrWarning]]:
        """Validate references, dropping malformed and duplicate entries."""
        references = []
        warnings = []
        seen = set()

        for item in pr_references:
            if isinstance(item, PullRequestReference):
                reference = item
            else:
                try:
                    reference = self.parser.parse_url(item)
                except InvalidPullRequestURL as e:
                    logger.warning(str(e))
                    warnings.append(PrWarning(reference=str(item), message="Malformed pull request URL"))
                    continue

            if reference in seen:
                logger.debug(f"Ignoring duplicate reference {reference}")
                continue
            seen.add(reference)
            references.append(reference)

        return references, warnings

    def _fetch_hashes(self, reference: PullRequestReference) -> List[str]:
        payload = self.client.get_pull_request_commits(
            reference.owner, reference.repo, reference.number
        )
        return self.parser.parse_commit_hashes(payload)

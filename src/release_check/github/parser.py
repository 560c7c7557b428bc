"""
Pull Request Parser

Parses pull request URLs into structured references and GitHub
commit listings into commit identifiers.
"""

import re
import logging
from typing import Any, List

from ..exceptions import InvalidPullRequestURL, MalformedPayloadError
from ..models.commit import PullRequestReference, normalize_hash


logger = logging.getLogger(__name__)


class PullRequestParser:
    """
    Parser for pull request URLs and GitHub API commit payloads.

    Accepts URLs of the form ``https://<host>/<owner>/<repo>/pull/<number>``,
    optionally followed by a sub-page (``/commits``, ``/files``), a query
    string or a fragment.
    """

    def __init__(self):
        """Initialize pull request parser."""
        self.pr_url_pattern = re.compile(
            r'^https?://(?P<host>[^/\s]+)/(?P<owner>[^/\s]+)/(?P<repo>[^/\s]+)'
            r'/pull/(?P<number>\d+)(?:/[^\s?#]*)?(?:[?#]\S*)?$'
        )
        self.sha_pattern = re.compile(r'^[0-9a-fA-F]{4,64}$')

    def parse_url(self, url: str) -> PullRequestReference:
        """
        Parse a pull request URL.

        Args:
            url: Pull request URL

        Returns:
            PullRequestReference for the URL

        Raises:
            InvalidPullRequestURL: If the URL does not have the expected shape
        """
        if not isinstance(url, str):
            raise InvalidPullRequestURL(str(url))

        match = self.pr_url_pattern.match(url.strip())
        if not match:
            raise InvalidPullRequestURL(url)

        number = int(match.group('number'))
        if number <= 0:
            raise InvalidPullRequestURL(url)

        repo = match.group('repo')
        if repo.endswith('.git'):
            repo = repo[:-4]

        reference = PullRequestReference(
            owner=match.group('owner'),
            repo=repo,
            number=number,
            url=url.strip(),
        )
        logger.debug(f"Parsed PR URL {url} -> {reference}")
        return reference

    def parse_commit_hashes(self, payload: Any) -> List[str]:
        """
        Extract normalized commit identifiers from a commit listing.

        Args:
            payload: JSON-decoded response of the PR commits endpoint

        Returns:
            Lower-cased commit hashes in payload order

        Raises:
            MalformedPayloadError: If the payload is not a list of commit objects
        """
        if not isinstance(payload, list):
            raise MalformedPayloadError(
                f"Expected a list of commits, got {type(payload).__name__}"
            )

        hashes = []
        for index, entry in enumerate(payload):
            sha = entry.get('sha') if isinstance(entry, dict) else None
            if not isinstance(sha, str) or not self.sha_pattern.match(sha.strip()):
                raise MalformedPayloadError(f"Commit entry {index} has no valid 'sha'")
            hashes.append(normalize_hash(sha))

        logger.debug(f"Parsed {len(hashes)} commit hashes")
        return hashes

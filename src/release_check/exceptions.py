"""
Release Check Errors

Fatal errors abort the check; per-PR problems are downgraded to warnings
by the resolver and never reach the caller as exceptions.
"""

from typing import List, Optional

from .models.result import PrWarning


class ReleaseCheckError(Exception):
    """Base class for release check errors"""


class RefNotFoundError(ReleaseCheckError):
    """A branch or ref could not be resolved in the repository"""
    def __init__(self, ref: str, reason: Optional[str] = None):
        message = f"Ref not found: {ref}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.ref = ref


class GitAccessError(ReleaseCheckError):
    """Reading history from the repository failed"""


class InvalidPullRequestURL(ReleaseCheckError):
    """A pull request URL does not have the owner/repo/pull/number shape"""
    def __init__(self, url: str):
        super().__init__(f"Invalid pull request URL: {url!r}")
        self.url = url


class MalformedPayloadError(ReleaseCheckError):
    """The pull request API returned a payload that cannot be interpreted"""


class AllPrFetchesFailed(ReleaseCheckError):
    """No pull request contributed any commit to the membership set"""
    def __init__(self, warnings: List[PrWarning]):
        super().__init__(
            f"Could not resolve commits for any pull request ({len(warnings)} warnings)"
        )
        self.warnings = list(warnings)

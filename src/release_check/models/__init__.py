"""
Data Models

Release Check 시스템의 핵심 데이터 모델들
"""

from .commit import Commit, PullRequestReference, normalize_hash
from .result import (
    NOT_IN_PR_LABEL,
    ClassifiedCommit,
    EmptyDiff,
    PrWarning,
    ReleaseCheckRequest,
    ReleaseCheckResponse,
    ReleaseCheckResult,
    Verdict,
)

__all__ = [
    "Commit",
    "PullRequestReference",
    "normalize_hash",
    "NOT_IN_PR_LABEL",
    "ClassifiedCommit",
    "EmptyDiff",
    "PrWarning",
    "ReleaseCheckRequest",
    "ReleaseCheckResponse",
    "ReleaseCheckResult",
    "Verdict",
]

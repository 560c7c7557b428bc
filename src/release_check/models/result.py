"""
Release Check Result Models

커밋 분류 결과 및 리포트 관련 데이터 모델들
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, validator

from .commit import Commit, PullRequestReference


NOT_IN_PR_LABEL = "not in PR"


class Verdict(str, Enum):
    """커밋별 판정 결과"""
    RELEASE_SAFE = "release_safe"
    EXCLUDED_BY_PATTERN = "excluded_by_pattern"
    NOT_IN_PR = "not_in_pr"
    # Merge commits are dropped from the report and never carry this verdict
    MERGE_SKIPPED = "merge_skipped"


@dataclass(frozen=True)
class PrWarning:
    """개별 PR 처리 중 발생한 비치명적 경고"""
    reference: str
    message: str

    def __str__(self) -> str:
        return f"{self.reference}: {self.message}"


@dataclass(frozen=True)
class ClassifiedCommit:
    """판정이 부여된 커밋"""
    commit: Commit
    verdict: Verdict
    label: str
    in_pr: bool
    matched_pattern: Optional[str] = None

    def __post_init__(self):
        """데이터 검증"""
        if self.verdict == Verdict.MERGE_SKIPPED:
            raise ValueError("Merge commits are not part of the report")
        if self.verdict == Verdict.EXCLUDED_BY_PATTERN and not self.matched_pattern:
            raise ValueError("Pattern exclusion requires a matched pattern")

    @property
    def is_flagged(self) -> bool:
        """릴리스 대상에서 제외해야 하는 커밋인지 확인"""
        return self.verdict in (Verdict.EXCLUDED_BY_PATTERN, Verdict.NOT_IN_PR)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'hash': self.commit.hash,
            'short_hash': self.commit.short_hash,
            'message': self.commit.message,
            'author': self.commit.author,
            'date': self.commit.date.isoformat() if self.commit.date else None,
            'verdict': self.verdict.value,
            'label': self.label,
            'matched_pattern': self.matched_pattern,
            'in_pr': self.in_pr,
        }


@dataclass
class ReleaseCheckResult:
    """릴리스 체크 전체 결과 (렌더러에 전달되는 데이터)"""
    source_branch: str
    target_branch: str
    pull_requests: List[PullRequestReference]
    commits: List[ClassifiedCommit]
    merge_skipped: int = 0
    warnings: List[PrWarning] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        """데이터 검증"""
        if self.merge_skipped < 0:
            raise ValueError("Merge skipped count must be non-negative")

    @property
    def total_examined(self) -> int:
        """머지 커밋을 제외하고 검사한 커밋 수"""
        return len(self.commits)

    @property
    def flagged(self) -> List[ClassifiedCommit]:
        return [c for c in self.commits if c.is_flagged]

    @property
    def flagged_count(self) -> int:
        return len(self.flagged)

    @property
    def release_safe(self) -> List[ClassifiedCommit]:
        return [c for c in self.commits if c.verdict == Verdict.RELEASE_SAFE]

    @property
    def is_safe(self) -> bool:
        """모든 커밋이 릴리스 가능한지 확인"""
        return self.flagged_count == 0

    def counts_by_verdict(self) -> Dict[str, int]:
        counts = {
            Verdict.RELEASE_SAFE.value: 0,
            Verdict.EXCLUDED_BY_PATTERN.value: 0,
            Verdict.NOT_IN_PR.value: 0,
        }
        for classified in self.commits:
            counts[classified.verdict.value] += 1
        counts[Verdict.MERGE_SKIPPED.value] = self.merge_skipped
        return counts

    def to_dict(self) -> Dict[str, Any]:
        return {
            'source_branch': self.source_branch,
            'target_branch': self.target_branch,
            'pull_requests': [str(pr) for pr in self.pull_requests],
            'is_safe': self.is_safe,
            'total_examined': self.total_examined,
            'flagged_count': self.flagged_count,
            'merge_skipped': self.merge_skipped,
            'counts': self.counts_by_verdict(),
            'warnings': [str(w) for w in self.warnings],
            'commits': [c.to_dict() for c in self.commits],
            'created_at': self.created_at.isoformat(),
        }


@dataclass(frozen=True)
class EmptyDiff:
    """두 브랜치 간 차이가 없는 경우의 결과 (오류 아님)"""
    source_branch: str
    target_branch: str

    @property
    def message(self) -> str:
        return f"No differences between {self.source_branch} and {self.target_branch}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'source_branch': self.source_branch,
            'target_branch': self.target_branch,
            'message': self.message,
        }


# Pydantic models for API validation
class ReleaseCheckRequest(BaseModel):
    """API 요청용 릴리스 체크 모델"""
    pr_urls: List[str]
    source_branch: Optional[str] = None
    target_branch: Optional[str] = None
    exclude_patterns: Optional[List[str]] = None
    format: str = "json"

    @validator('pr_urls')
    def validate_pr_urls(cls, v):
        urls = [url.strip() for url in v if url and url.strip()]
        if not urls:
            raise ValueError('At least one pull request URL is required')
        return urls

    @validator('source_branch', 'target_branch')
    def validate_branch(cls, v):
        if v is not None and not v.strip():
            raise ValueError('Branch name cannot be blank')
        return v.strip() if v else v

    @validator('format')
    def validate_format(cls, v):
        if v not in {'json', 'markdown'}:
            raise ValueError('Invalid format')
        return v


class ReleaseCheckResponse(BaseModel):
    """API 응답용 릴리스 체크 모델"""
    status: str
    source_branch: str
    target_branch: str
    pull_requests: List[str] = []
    is_safe: bool = True
    total_examined: int = 0
    flagged_count: int = 0
    merge_skipped: int = 0
    counts: Dict[str, int] = {}
    warnings: List[str] = []
    commits: List[Dict[str, Any]] = []
    created_at: Optional[str] = None
    report: Optional[str] = None

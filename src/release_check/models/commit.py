"""
Commit Data Models

커밋 및 Pull Request 참조 관련 데이터 모델들
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


def normalize_hash(value: str) -> str:
    """커밋 해시를 비교용 정규 형식(소문자)으로 변환"""
    return value.strip().lower()


@dataclass(frozen=True)
class Commit:
    """브랜치 히스토리에서 읽어온 개별 커밋"""
    hash: str
    message: str
    author_name: str
    author_email: str
    date: Optional[datetime] = None
    parent_count: int = 1

    def __post_init__(self):
        """데이터 검증"""
        if not self.hash or not self.hash.strip():
            raise ValueError("Commit hash cannot be empty")

    @property
    def has_multiple_parents(self) -> bool:
        """부모 커밋이 둘 이상인지 (머지 커밋) 확인"""
        return self.parent_count > 1

    @property
    def normalized_hash(self) -> str:
        return normalize_hash(self.hash)

    @property
    def short_hash(self) -> str:
        """7자리 축약 해시"""
        return self.hash[:7]

    @property
    def author(self) -> str:
        return f"{self.author_name} <{self.author_email}>"

    @property
    def subject(self) -> str:
        """커밋 메시지 첫 줄"""
        lines = self.message.strip().splitlines()
        return lines[0] if lines else ""


@dataclass(frozen=True)
class PullRequestReference:
    """URL에서 파싱한 Pull Request 참조"""
    owner: str
    repo: str
    number: int
    url: str = field(default="", compare=False)

    def __post_init__(self):
        """데이터 검증"""
        if not self.owner or not self.repo:
            raise ValueError("Owner and repository name are required")
        if self.number <= 0:
            raise ValueError("PR number must be positive")

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"

    def __str__(self) -> str:
        return f"{self.full_name}#{self.number}"

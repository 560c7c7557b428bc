"""
Configuration Management

시스템 설정 관리
"""

import os
import yaml
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List
from pathlib import Path
import logging


def _split_list(value: Optional[str], default: List[str]) -> List[str]:
    """콤마로 구분된 환경 변수 값을 리스트로 변환"""
    if value is None:
        return list(default)
    return [item.strip() for item in value.split(',') if item.strip()]


DEFAULT_EXCLUDE_PATTERNS = ["WIP", "DO NOT MERGE", "NOT FOR RELEASE"]
DEFAULT_MERGE_PREFIXES = ["Merge pull request", "Merge branch"]


@dataclass
class GitConfig:
    """로컬 Git 저장소 설정"""
    repo_path: str = "."


@dataclass
class GitHubConfig:
    """GitHub API 설정"""
    token: Optional[str] = None
    api_base_url: str = "https://api.github.com"
    timeout_seconds: int = 30
    max_retries: int = 3
    max_workers: int = 4


@dataclass
class CheckConfig:
    """릴리스 체크 설정"""
    source_branch: str = "develop"
    target_branch: str = "main"
    exclude_patterns: List[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDE_PATTERNS))
    merge_prefixes: List[str] = field(default_factory=lambda: list(DEFAULT_MERGE_PREFIXES))
    detect_merges_by_parents: bool = False


@dataclass
class LoggingConfig:
    """로깅 설정"""
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file_path: Optional[str] = None
    max_file_size: int = 10 * 1024 * 1024  # 10MB
    backup_count: int = 5


@dataclass
class AppConfig:
    """전체 애플리케이션 설정"""
    git: GitConfig = field(default_factory=GitConfig)
    github: GitHubConfig = field(default_factory=GitHubConfig)
    check: CheckConfig = field(default_factory=CheckConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    debug: bool = False

    @classmethod
    def from_env(cls) -> "AppConfig":
        """환경 변수에서 설정 로드"""
        return cls(
            git=GitConfig(
                repo_path=os.getenv("RELEASE_CHECK_REPO_PATH", "."),
            ),
            github=GitHubConfig(
                token=os.getenv("GITHUB_TOKEN") or None,
                api_base_url=os.getenv("GITHUB_API_URL", "https://api.github.com"),
                timeout_seconds=int(os.getenv("GITHUB_TIMEOUT", "30")),
                max_retries=int(os.getenv("GITHUB_MAX_RETRIES", "3")),
                max_workers=int(os.getenv("GITHUB_MAX_WORKERS", "4")),
            ),
            check=CheckConfig(
                source_branch=os.getenv("RELEASE_CHECK_SOURCE_BRANCH", "develop"),
                target_branch=os.getenv("RELEASE_CHECK_TARGET_BRANCH", "main"),
                exclude_patterns=_split_list(
                    os.getenv("RELEASE_CHECK_EXCLUDE_PATTERNS"), DEFAULT_EXCLUDE_PATTERNS
                ),
                merge_prefixes=_split_list(
                    os.getenv("RELEASE_CHECK_MERGE_PREFIXES"), DEFAULT_MERGE_PREFIXES
                ),
                detect_merges_by_parents=os.getenv("RELEASE_CHECK_MERGES_BY_PARENTS", "false").lower() == "true",
            ),
            logging=LoggingConfig(
                level=os.getenv("LOG_LEVEL", "INFO"),
                format=os.getenv("LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
                file_path=os.getenv("LOG_FILE"),
                max_file_size=int(os.getenv("LOG_MAX_SIZE", str(10 * 1024 * 1024))),
                backup_count=int(os.getenv("LOG_BACKUP_COUNT", "5")),
            ),
            debug=os.getenv("DEBUG", "false").lower() == "true",
        )

    @classmethod
    def from_yaml(cls, config_path: str) -> "AppConfig":
        """YAML 파일에서 설정 로드"""
        config_file = Path(config_path)
        if not config_file.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_file, 'r', encoding='utf-8') as f:
            config_data = yaml.safe_load(f) or {}

        return cls(
            git=GitConfig(**config_data.get('git', {})),
            github=GitHubConfig(**config_data.get('github', {})),
            check=CheckConfig(**config_data.get('check', {})),
            logging=LoggingConfig(**config_data.get('logging', {})),
            debug=config_data.get('debug', False),
        )

    def validate(self) -> None:
        """설정 유효성 검사"""
        errors = []

        # 브랜치 이름 확인
        if not self.check.source_branch.strip():
            errors.append("Source branch is required")
        if not self.check.target_branch.strip():
            errors.append("Target branch is required")

        if any(not isinstance(p, str) for p in self.check.exclude_patterns):
            errors.append("Exclude patterns must be strings")
        if any(not isinstance(p, str) or not p for p in self.check.merge_prefixes):
            errors.append("Merge prefixes must be non-empty strings")

        # GitHub 요청 설정 검증
        if self.github.timeout_seconds <= 0:
            errors.append("GitHub timeout must be positive")
        if self.github.max_workers <= 0:
            errors.append("GitHub max workers must be positive")
        if self.github.max_retries < 0:
            errors.append("GitHub max retries must be non-negative")

        # 로그 레벨 검증
        valid_log_levels = {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}
        if self.logging.level.upper() not in valid_log_levels:
            errors.append(f"Invalid log level: {self.logging.level}")

        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

    def to_dict(self) -> Dict[str, Any]:
        """설정을 딕셔너리로 변환"""
        return {
            'git': {
                'repo_path': self.git.repo_path,
            },
            'github': {
                'api_base_url': self.github.api_base_url,
                'timeout_seconds': self.github.timeout_seconds,
                'max_retries': self.github.max_retries,
                'max_workers': self.github.max_workers,
                # 보안상 토큰은 제외
            },
            'check': {
                'source_branch': self.check.source_branch,
                'target_branch': self.check.target_branch,
                'exclude_patterns': list(self.check.exclude_patterns),
                'merge_prefixes': list(self.check.merge_prefixes),
                'detect_merges_by_parents': self.check.detect_merges_by_parents,
            },
            'logging': {
                'level': self.logging.level,
                'format': self.logging.format,
                'file_path': self.logging.file_path,
                'max_file_size': self.logging.max_file_size,
                'backup_count': self.logging.backup_count,
            },
            'debug': self.debug,
        }


class ConfigManager:
    """설정 관리자"""

    def __init__(self, config: Optional[AppConfig] = None):
        self._config = config or AppConfig.from_env()
        self._config.validate()
        self._setup_logging()

    @property
    def config(self) -> AppConfig:
        """현재 설정 반환"""
        return self._config

    def update_config(self, **kwargs) -> None:
        """설정 업데이트"""
        config_dict = self._config.to_dict()
        # to_dict()는 토큰을 내보내지 않으므로 유지
        config_dict['github']['token'] = self._config.github.token

        for key, value in kwargs.items():
            if '.' in key:
                # 중첩된 설정 (예: 'check.source_branch')
                section, field_name = key.split('.', 1)
                if section in config_dict:
                    config_dict[section][field_name] = value
            else:
                # 최상위 설정
                config_dict[key] = value

        new_config = AppConfig(
            git=GitConfig(**config_dict['git']),
            github=GitHubConfig(**config_dict['github']),
            check=CheckConfig(**config_dict['check']),
            logging=LoggingConfig(**config_dict['logging']),
            debug=config_dict['debug'],
        )
        new_config.validate()

        self._config = new_config
        self._setup_logging()

    def _setup_logging(self) -> None:
        """로깅 설정"""
        logging.basicConfig(
            level=getattr(logging, self._config.logging.level.upper()),
            format=self._config.logging.format,
        )

        # 파일 로깅이 설정된 경우 로테이션 설정
        if self._config.logging.file_path:
            from logging.handlers import RotatingFileHandler

            root_logger = logging.getLogger()
            log_path = os.path.abspath(self._config.logging.file_path)
            already_attached = any(
                isinstance(h, RotatingFileHandler) and h.baseFilename == log_path
                for h in root_logger.handlers
            )
            if already_attached:
                return

            handler = RotatingFileHandler(
                self._config.logging.file_path,
                maxBytes=self._config.logging.max_file_size,
                backupCount=self._config.logging.backup_count,
            )
            handler.setFormatter(logging.Formatter(self._config.logging.format))

            # 루트 로거에 핸들러 추가
            root_logger.addHandler(handler)


_config_manager: Optional[ConfigManager] = None


def get_config_manager() -> ConfigManager:
    """전역 설정 관리자 반환 (최초 호출 시 생성)"""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def get_config() -> AppConfig:
    """현재 설정 반환"""
    return get_config_manager().config


def update_config(**kwargs) -> None:
    """설정 업데이트"""
    get_config_manager().update_config(**kwargs)

"""
Unit tests for configuration management.
"""

import logging
from logging.handlers import RotatingFileHandler

import pytest
import yaml

from release_check.config import AppConfig, CheckConfig, ConfigManager, GitHubConfig


class TestAppConfig:
    """Unit tests for AppConfig class."""

    def test_defaults(self):
        config = AppConfig()

        assert config.check.source_branch == "develop"
        assert config.check.target_branch == "main"
        assert config.check.exclude_patterns == ["WIP", "DO NOT MERGE", "NOT FOR RELEASE"]
        assert config.check.merge_prefixes == ["Merge pull request", "Merge branch"]
        assert config.check.detect_merges_by_parents is False
        assert config.github.token is None
        config.validate()

    def test_default_lists_are_not_shared(self):
        a, b = CheckConfig(), CheckConfig()
        a.exclude_patterns.append("HACK")
        assert "HACK" not in b.exclude_patterns

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("GITHUB_TOKEN", "secret")
        monkeypatch.setenv("RELEASE_CHECK_SOURCE_BRANCH", "release")
        monkeypatch.setenv("RELEASE_CHECK_TARGET_BRANCH", "production")
        monkeypatch.setenv("RELEASE_CHECK_EXCLUDE_PATTERNS", "WIP, HOLD ,")
        monkeypatch.setenv("RELEASE_CHECK_MERGES_BY_PARENTS", "true")
        monkeypatch.setenv("GITHUB_MAX_WORKERS", "8")

        config = AppConfig.from_env()

        assert config.github.token == "secret"
        assert config.github.max_workers == 8
        assert config.check.source_branch == "release"
        assert config.check.target_branch == "production"
        assert config.check.exclude_patterns == ["WIP", "HOLD"]
        assert config.check.merge_prefixes == ["Merge pull request", "Merge branch"]
        assert config.check.detect_merges_by_parents is True

    def test_from_yaml(self, tmp_path):
        config_file = tmp_path / "release-check.yaml"
        config_file.write_text(yaml.safe_dump({
            'git': {'repo_path': '/srv/repo'},
            'check': {'source_branch': 'dev', 'exclude_patterns': ['TEMP']},
            'logging': {'level': 'DEBUG'},
        }), encoding='utf-8')

        config = AppConfig.from_yaml(str(config_file))

        assert config.git.repo_path == '/srv/repo'
        assert config.check.source_branch == 'dev'
        assert config.check.target_branch == 'main'
        assert config.check.exclude_patterns == ['TEMP']
        assert config.logging.level == 'DEBUG'

    def test_from_yaml_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            AppConfig.from_yaml(str(tmp_path / "missing.yaml"))

    def test_validate_collects_errors(self):
        config = AppConfig(
            github=GitHubConfig(timeout_seconds=0, max_workers=0),
            check=CheckConfig(source_branch=" ", merge_prefixes=[""]),
        )
        config.logging.level = "LOUD"

        with pytest.raises(ValueError) as exc_info:
            config.validate()

        message = str(exc_info.value)
        assert "Source branch is required" in message
        assert "Merge prefixes" in message
        assert "timeout" in message
        assert "max workers" in message
        assert "Invalid log level" in message

    def test_identical_branches_are_valid(self):
        config = AppConfig(check=CheckConfig(source_branch="main", target_branch="main"))

        config.validate()
        ConfigManager(config)

    def test_to_dict_excludes_token(self):
        config = AppConfig(github=GitHubConfig(token="secret"))
        assert 'token' not in config.to_dict()['github']


class TestConfigManager:
    """Unit tests for ConfigManager class."""

    def test_update_config_keeps_token(self):
        manager = ConfigManager(AppConfig(github=GitHubConfig(token="secret")))

        manager.update_config(**{'check.source_branch': 'release', 'debug': True})

        assert manager.config.check.source_branch == 'release'
        assert manager.config.debug is True
        assert manager.config.github.token == "secret"

    def test_invalid_update_keeps_previous_config(self):
        manager = ConfigManager(AppConfig())

        with pytest.raises(ValueError):
            manager.update_config(**{'check.target_branch': 'release', 'github.max_workers': 0})

        assert manager.config.check.target_branch == 'main'
        assert manager.config.github.max_workers == 4

    def test_file_logging(self, tmp_path):
        log_file = tmp_path / "release-check.log"
        config = AppConfig()
        config.logging.file_path = str(log_file)
        root_logger = logging.getLogger()
        before = list(root_logger.handlers)

        try:
            ConfigManager(config)
            ConfigManager(config)
            added = [
                h for h in root_logger.handlers
                if h not in before and isinstance(h, RotatingFileHandler)
            ]
            assert len(added) == 1
        finally:
            for handler in root_logger.handlers[:]:
                if handler not in before:
                    root_logger.removeHandler(handler)
                    handler.close()

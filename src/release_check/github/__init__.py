"""
GitHub Integration Layer

This module provides GitHub API integration for pull request
commit retrieval and pull request URL parsing.
"""

from .client import GitHubClient, GitHubAPIError, RateLimitExceeded
from .parser import PullRequestParser

__all__ = ['GitHubClient', 'GitHubAPIError', 'RateLimitExceeded', 'PullRequestParser']

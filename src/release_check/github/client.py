"""
GitHub API Client

Handles GitHub API authentication, rate limiting, and communication.
Provides the pull request commit listing used for PR membership.
"""

import time
import logging
import threading
from typing import Dict, List, Optional
from datetime import datetime
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry


logger = logging.getLogger(__name__)


class GitHubAPIError(Exception):
    """GitHub API related errors"""
    def __init__(self, message: str, status_code: Optional[int] = None, response_data: Optional[Dict] = None):
        super().__init__(message)
        self.status_code = status_code
        self.response_data = response_data


class RateLimitExceeded(GitHubAPIError):
    """GitHub API rate limit exceeded"""
    def __init__(self, reset_time: datetime):
        super().__init__(f"Rate limit exceeded. Resets at {reset_time}", status_code=429)
        self.reset_time = reset_time


class GitHubClient:
    """
    GitHub API client with optional authentication, rate limiting, and error handling.

    Provides methods for:
    - Pull request commit listing (paginated)
    - API rate limit tracking
    """

    # GitHub caps the pull request commits endpoint at 250 commits
    MAX_PR_COMMITS = 250

    def __init__(
        self,
        token: Optional[str] = None,
        base_url: str = "https://api.github.com",
        timeout: float = 30,
        max_retries: int = 3,
    ):
        """
        Initialize GitHub client.

        Args:
            token: GitHub personal access token (None for unauthenticated access)
            base_url: GitHub API base URL (default: https://api.github.com)
            timeout: Per-request timeout in seconds
            max_retries: Retries for 429/5xx responses
        """
        self.token = token
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.max_retries = max_retries
        self.session = self._create_session()
        # Shared by concurrent fetches
        self._rate_limit_lock = threading.Lock()
        self.rate_limit_remaining = 5000
        self.rate_limit_reset = datetime.now()

    @property
    def headers(self) -> Dict[str, str]:
        return dict(self.session.headers)

    def _create_session(self) -> requests.Session:
        """Create requests session with retry strategy and authentication."""
        session = requests.Session()

        # Configure retry strategy
        retry_strategy = Retry(
            total=self.max_retries,
            backoff_factor=1,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["GET"],
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("http://", adapter)
        session.mount("https://", adapter)

        session.headers.update({
            'Accept': 'application/vnd.github.v3+json',
            'User-Agent': 'Release-Check/1.0'
        })
        if self.token:
            session.headers['Authorization'] = f'token {self.token}'

        return session

    def _check_rate_limit(self) -> None:
        """Check and handle GitHub API rate limits."""
        with self._rate_limit_lock:
            remaining, reset = self.rate_limit_remaining, self.rate_limit_reset
        if remaining <= 0 and datetime.now() < reset:
            logger.warning(f"Rate limit exhausted until {reset}")
            raise RateLimitExceeded(reset)

    def _update_rate_limit(self, response: requests.Response) -> None:
        """Update rate limit information from response headers."""
        with self._rate_limit_lock:
            try:
                if 'X-RateLimit-Remaining' in response.headers:
                    self.rate_limit_remaining = int(response.headers['X-RateLimit-Remaining'])

                if 'X-RateLimit-Reset' in response.headers:
                    reset_timestamp = int(response.headers['X-RateLimit-Reset'])
                    self.rate_limit_reset = datetime.fromtimestamp(reset_timestamp)
            except (ValueError, OverflowError, OSError) as e:
                # Unparseable headers keep the previous values
                logger.warning(f"Ignoring malformed rate limit headers: {e}")

    def _make_request(self, method: str, endpoint: str, **kwargs) -> requests.Response:
        """
        Make request to GitHub API with rate limiting.

        Args:
            method: HTTP method (GET, POST, etc.)
            endpoint: API endpoint (without base URL)
            **kwargs: Additional arguments for requests

        Returns:
            Response object

        Raises:
            GitHubAPIError: For API errors, timeouts and connection failures
            RateLimitExceeded: When rate limit is exceeded
        """
        self._check_rate_limit()

        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        kwargs.setdefault('timeout', self.timeout)

        try:
            response = self.session.request(method, url, **kwargs)
        except requests.RequestException as e:
            logger.error(f"Request failed: {e}")
            raise GitHubAPIError(f"Request failed: {str(e)}") from e

        self._update_rate_limit(response)

        if response.status_code == 429 or (
            response.status_code == 403 and response.headers.get('X-RateLimit-Remaining') == '0'
        ):
            try:
                reset_time = datetime.fromtimestamp(int(response.headers.get('X-RateLimit-Reset', time.time() + 3600)))
            except (ValueError, OverflowError, OSError):
                reset_time = datetime.fromtimestamp(time.time() + 3600)
            raise RateLimitExceeded(reset_time)

        if response.status_code != 200:
            try:
                error_data = response.json() if response.content else {}
            except ValueError:
                error_data = {}
            if not isinstance(error_data, dict):
                error_data = {}
            raise GitHubAPIError(
                f"GitHub API error: {response.status_code} - {error_data.get('message', 'Unknown error')}",
                status_code=response.status_code,
                response_data=error_data
            )

        return response

    def get_pull_request_commits(self, owner: str, repo: str, pr_number: int) -> List[Dict]:
        """
        Get commits belonging to a pull request.

        Args:
            owner: Repository owner
            repo: Repository name
            pr_number: Pull request number

        Returns:
            List of commit data as returned by the API (a non-list
            payload is returned unchanged)

        Raises:
            GitHubAPIError: For API errors or a non-JSON response body
        """
        logger.info(f"Fetching PR commits for {owner}/{repo}#{pr_number}")

        commits = []
        page = 1
        per_page = 100

        while True:
            response = self._make_request(
                'GET',
                f'/repos/{owner}/{repo}/pulls/{pr_number}/commits',
                params={'page': page, 'per_page': per_page}
            )

            try:
                page_commits = response.json()
            except ValueError as e:
                raise GitHubAPIError(f"Invalid JSON in commits response: {e}", status_code=response.status_code) from e

            if not isinstance(page_commits, list):
                # Leave shape validation of unexpected payloads to the parser
                return page_commits

            if not page_commits:
                break

            commits.extend(page_commits)

            if len(page_commits) < per_page or len(commits) >= self.MAX_PR_COMMITS:
                break

            page += 1

        if len(commits) >= self.MAX_PR_COMMITS:
            logger.warning(f"{owner}/{repo}#{pr_number} has at least {self.MAX_PR_COMMITS} commits; list may be truncated")

        logger.info(f"Found {len(commits)} commits in {owner}/{repo}#{pr_number}")
        return commits

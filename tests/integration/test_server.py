"""
Integration tests for the HTTP surface.
"""

import pytest

from release_check.api import ReleaseCheckAPI
from release_check.check.resolver import PrMembershipResolver
from release_check.git.reader import BranchDiffReader
from release_check.github.client import GitHubAPIError
from run_server import create_app

from conftest import FakePullRequestSource, FakeVersionControl, commits_payload, make_commit


PR_URL = "https://github.com/octo/app/pull/1"


def _client(commits, pr_response, refs=("develop", "main")):
    api = ReleaseCheckAPI(
        reader=BranchDiffReader(FakeVersionControl(refs=set(refs), commits=commits)),
        resolver=PrMembershipResolver(FakePullRequestSource({("octo", "app", 1): pr_response})),
    )
    app = create_app(check_api=api)
    app.config['TESTING'] = True
    return app.test_client()


class TestServer:
    """Flask endpoint tests."""

    def test_health(self):
        response = _client([], []).get('/api/v1/health')

        assert response.status_code == 200
        assert response.get_json()['status'] == 'healthy'

    def test_release_check_completed(self, scenario_commits):
        client = _client(scenario_commits, commits_payload("c1c1c1c1", "c2c2c2c2"))

        response = client.post('/api/v1/release-check', json={
            'pr_urls': [PR_URL],
            'exclude_patterns': ['WIP'],
            'format': 'markdown',
        })

        data = response.get_json()
        assert response.status_code == 200
        assert data['status'] == 'completed'
        assert data['is_safe'] is False
        assert data['flagged_count'] == 1
        assert data['merge_skipped'] == 1
        assert [c['verdict'] for c in data['commits']] == ['release_safe', 'excluded_by_pattern']
        assert data['pull_requests'] == ['octo/app#1']
        assert data['counts'] == {
            'release_safe': 1,
            'excluded_by_pattern': 1,
            'not_in_pr': 0,
            'merge_skipped': 1,
        }
        assert data['created_at']
        assert "non-release commits detected" in data['report']

    def test_release_check_no_changes(self):
        response = _client([], commits_payload("c1c1c1c1")).post(
            '/api/v1/release-check', json={'pr_urls': [PR_URL]}
        )

        assert response.status_code == 200
        assert response.get_json()['status'] == 'no_changes'

    @pytest.mark.parametrize("body", [{}, {'pr_urls': []}, {'pr_urls': [PR_URL], 'format': 'html'}])
    def test_invalid_request(self, body):
        response = _client([], []).post('/api/v1/release-check', json=body)

        assert response.status_code == 400
        assert response.get_json()['status'] == 'invalid_request'

    @pytest.mark.parametrize("body", [[PR_URL], "pr", 3])
    def test_non_object_body(self, body):
        response = _client([], []).post('/api/v1/release-check', json=body)

        assert response.status_code == 400
        assert response.get_json()['status'] == 'invalid_request'

    def test_ref_not_found(self):
        response = _client([make_commit("c1c1c1c1", "Fix")], commits_payload("c1c1c1c1"), refs=("main",)).post(
            '/api/v1/release-check', json={'pr_urls': [PR_URL]}
        )

        assert response.status_code == 404
        assert response.get_json()['status'] == 'ref_not_found'

    def test_all_pr_fetches_failed(self):
        client = _client([make_commit("c1c1c1c1", "Fix")], GitHubAPIError("GitHub API error: 404 - Not Found", status_code=404))

        response = client.post('/api/v1/release-check', json={'pr_urls': [PR_URL]})

        data = response.get_json()
        assert response.status_code == 502
        assert data['status'] == 'pr_fetch_failed'
        assert data['warnings'] == ["octo/app#1: GitHub API error: 404 - Not Found"]

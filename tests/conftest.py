"""Shared fixtures for release check tests."""

from datetime import datetime, timezone

import pytest

from release_check.models.commit import Commit


class FakeVersionControl:
    """In-memory version-control accessor."""

    def __init__(self, refs=None, commits=None):
        self.refs = set(refs or [])
        self.commits = list(commits or [])
        self.log_calls = []

    def verify_ref_exists(self, ref):
        return ref in self.refs

    def log_range(self, from_ref, to_ref):
        self.log_calls.append((from_ref, to_ref))
        return list(self.commits)


class FakePullRequestSource:
    """Pull request commit source returning canned payloads or raising errors."""

    def __init__(self, responses):
        self.responses = responses
        self.calls = []

    def get_pull_request_commits(self, owner, repo, pr_number):
        self.calls.append((owner, repo, pr_number))
        response = self.responses[(owner, repo, pr_number)]
        if isinstance(response, Exception):
            raise response
        return response


def make_commit(sha, message, author="Dev", email="dev@example.com", parents=1):
    return Commit(
        hash=sha,
        message=message,
        author_name=author,
        author_email=email,
        date=datetime(2024, 1, 1, tzinfo=timezone.utc),
        parent_count=parents,
    )


def commits_payload(*shas):
    """Build a GitHub 'list PR commits' payload."""
    return [
        {'sha': sha, 'commit': {'message': f'commit {sha}', 'author': {'name': 'Dev'}}}
        for sha in shas
    ]


@pytest.fixture
def scenario_commits():
    return [
        make_commit("c1c1c1c1", "Fix bug"),
        make_commit("c2c2c2c2", "WIP feature"),
        make_commit("c3c3c3c3", "Merge branch target into develop", parents=2),
    ]

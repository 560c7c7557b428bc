"""
Unit tests for the branch diff reader.
"""

import pytest

from release_check.exceptions import RefNotFoundError
from release_check.git.reader import BranchDiffReader
from release_check.models.result import EmptyDiff

from conftest import FakeVersionControl, make_commit


class TestBranchDiffReader:
    """Unit tests for BranchDiffReader class."""

    def test_diff_returns_commits_in_log_order(self):
        commits = [make_commit("bbbb", "newer"), make_commit("aaaa", "older")]
        vcs = FakeVersionControl(refs={"develop", "main"}, commits=commits)

        diff = BranchDiffReader(vcs).diff("develop", "main")

        assert diff == commits
        # log range is target..source
        assert vcs.log_calls == [("main", "develop")]

    def test_empty_diff(self):
        vcs = FakeVersionControl(refs={"develop", "main"}, commits=[])

        diff = BranchDiffReader(vcs).diff("develop", "main")

        assert diff == EmptyDiff(source_branch="develop", target_branch="main")

    @pytest.mark.parametrize("refs, missing", [
        ({"main"}, "develop"),
        ({"develop"}, "main"),
        (set(), "develop"),
    ])
    def test_missing_ref_fails_before_log(self, refs, missing):
        vcs = FakeVersionControl(refs=refs, commits=[make_commit("aaaa", "x")])

        with pytest.raises(RefNotFoundError) as exc_info:
            BranchDiffReader(vcs).diff("develop", "main")

        assert exc_info.value.ref == missing
        assert vcs.log_calls == []

"""
Release Report Formatter

Renders release check results as GitHub-flavoured markdown
suitable for a PR comment or a terminal.
"""

import logging
from typing import List, Union

from ..models.result import ClassifiedCommit, EmptyDiff, ReleaseCheckResult


logger = logging.getLogger(__name__)


class ReleaseReportFormatter:
    """
    Formats a ReleaseCheckResult for humans.

    Only flagged commits are listed by default; release-safe commits
    are summarized in the counts.
    """

    def __init__(self, include_safe_commits: bool = False, max_subject_length: int = 72):
        """
        Initialize report formatter.

        Args:
            include_safe_commits: Also list release-safe commits
            max_subject_length: Truncate commit subjects longer than this
        """
        self.include_safe_commits = include_safe_commits
        self.max_subject_length = max_subject_length

    def format(self, outcome: Union[ReleaseCheckResult, EmptyDiff]) -> str:
        """Render a check outcome as markdown."""
        if isinstance(outcome, EmptyDiff):
            return f"## Release Check\n\n{outcome.message}. Nothing to check.\n"
        return self.format_result(outcome)

    def format_result(self, result: ReleaseCheckResult) -> str:
        logger.debug(f"Formatting report for {result.source_branch} -> {result.target_branch}")

        lines = ["## Release Check", ""]
        lines.append(f"Branch comparison: **{result.source_branch}** → **{result.target_branch}**")

        if result.pull_requests:
            lines.append("")
            lines.append("Pull requests:")
            lines.extend(f"- {pr.url or pr}" for pr in result.pull_requests)

        lines.append("")
        lines.append(self._summary_line(result))

        if result.warnings:
            lines.append("")
            lines.append("### Warnings")
            lines.extend(f"- {warning}" for warning in result.warnings)

        listed = result.commits if self.include_safe_commits else result.flagged
        if listed:
            lines.append("")
            lines.append("### Commits" if self.include_safe_commits else "### Non-release commits")
            lines.extend(self._commit_table(listed))

        return "\n".join(lines) + "\n"

    def _summary_line(self, result: ReleaseCheckResult) -> str:
        counts = (
            f"{result.total_examined} commits examined, "
            f"{result.merge_skipped} merge commits skipped"
        )
        if result.is_safe:
            return (
                f"✅ No non-release commits found ({counts}). "
                f"Merging {result.source_branch} into {result.target_branch} is safe."
            )
        return f"⚠️ **{result.flagged_count} non-release commits detected** ({counts})."

    def _commit_table(self, commits: List[ClassifiedCommit]) -> List[str]:
        rows = [
            "",
            "| Commit | Author | Message | Detected | In PR |",
            "| --- | --- | --- | --- | --- |",
        ]
        for classified in commits:
            commit = classified.commit
            label = f'"{classified.label}"' if classified.matched_pattern else classified.label
            rows.append(
                f"| `{commit.short_hash}` | {self._escape(commit.author)} "
                f"| {self._escape(self._truncate(commit.subject))} "
                f"| {self._escape(label) or '-'} | {'yes' if classified.in_pr else 'no'} |"
            )
        return rows

    def _truncate(self, text: str) -> str:
        if len(text) <= self.max_subject_length:
            return text
        return text[:self.max_subject_length - 3] + "..."

    def _escape(self, text: str) -> str:
        """Escape text for a markdown table cell."""
        return (
            text.replace("\\", "\\\\")
            .replace("|", "\\|")
            .replace("<", "&lt;")
            .replace(">", "&gt;")
            .replace("\r", " ")
            .replace("\n", " ")
        )

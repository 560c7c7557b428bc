"""
Report Formatter

This module renders release check results as markdown reports.
"""

from .report import ReleaseReportFormatter

__all__ = ['ReleaseReportFormatter']

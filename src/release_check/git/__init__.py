"""
Git Integration Layer

This module provides read-only access to local branch history
and the branch diff used by the release check.
"""

from .repository import GitRepository, VersionControl
from .reader import BranchDiffReader

__all__ = ['GitRepository', 'VersionControl', 'BranchDiffReader']

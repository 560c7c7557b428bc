"""
Release Check Engine

This module provides pull request membership resolution and the
per-commit release verdict classification.
"""

from .classifier import CommitClassifier, DEFAULT_MERGE_PREFIXES
from .resolver import MembershipResolution, PrMembershipResolver

__all__ = [
    'CommitClassifier',
    'DEFAULT_MERGE_PREFIXES',
    'MembershipResolution',
    'PrMembershipResolver',
]

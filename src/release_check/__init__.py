"""
Release Check

Branch release safety check: flags commits that are marked as
not-for-release or that do not belong to the released pull requests.
"""

__version__ = "1.0.0"

from .api import ReleaseCheckAPI

__all__ = ["ReleaseCheckAPI"]

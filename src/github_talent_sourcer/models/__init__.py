"""Data models for GitHub Talent Sourcer."""

from github_talent_sourcer.models.contributor import (
    ContributionEvent,
    ContributionKind,
    ContributorRecord,
    NotableContributions,
)
from github_talent_sourcer.models.options import FetchOptions
from github_talent_sourcer.models.repository import RepoIdentifier
from github_talent_sourcer.models.user import UserProfile

__all__ = [
    "UserProfile",
    "RepoIdentifier",
    "FetchOptions",
    "ContributionKind",
    "ContributionEvent",
    "NotableContributions",
    "ContributorRecord",
]

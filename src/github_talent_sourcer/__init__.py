"""GitHub Talent Sourcer - Find and rank the contributors of GitHub repositories.

This SDK collects, for one or more repositories:
- Committers (cumulative commit counts)
- Pull request authors
- Issue authors

and merges them into one ranked record per user, ready for CSV export.

Example usage:
    ```python
    from github_talent_sourcer import TalentSourcer

    async with TalentSourcer(token="ghp_xxx") as sourcer:
        result = await sourcer.source(["prisma/prisma", "trpc/trpc"])
        print(f"Top contributor: {result.contributors[0].username}")
    ```
"""

from github_talent_sourcer._version import version as __version__
from github_talent_sourcer.config import Config
from github_talent_sourcer.exceptions import (
    ConfigurationError,
    ExportIOError,
    GitHubAPIError,
    GitHubNotFoundError,
    GitHubRateLimitError,
    InvalidRepositoryReference,
    MissingCredentialError,
    ProfileLookupError,
    TalentSourcerError,
)
from github_talent_sourcer.models import (
    ContributionEvent,
    ContributionKind,
    ContributorRecord,
    FetchOptions,
    NotableContributions,
    RepoIdentifier,
    UserProfile,
)
from github_talent_sourcer.sdk import SourcingResult, TalentSourcer

__all__ = [
    "__version__",
    # Main SDK class
    "TalentSourcer",
    "SourcingResult",
    # Configuration
    "Config",
    "FetchOptions",
    # Exceptions
    "TalentSourcerError",
    "GitHubAPIError",
    "GitHubRateLimitError",
    "GitHubNotFoundError",
    "InvalidRepositoryReference",
    "ProfileLookupError",
    "ExportIOError",
    "MissingCredentialError",
    "ConfigurationError",
    # Models
    "RepoIdentifier",
    "UserProfile",
    "ContributionKind",
    "ContributionEvent",
    "NotableContributions",
    "ContributorRecord",
]

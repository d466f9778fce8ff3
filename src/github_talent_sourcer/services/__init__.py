"""Services for GitHub contributor collection."""

from github_talent_sourcer.services.contributor_collector import ContributorCollector
from github_talent_sourcer.services.github_rest_client import GitHubRestClient
from github_talent_sourcer.services.profile_collector import ProfileCollector

__all__ = [
    "GitHubRestClient",
    "ProfileCollector",
    "ContributorCollector",
]

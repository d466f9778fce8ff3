"""Profile collector service."""

import logging

import httpx

from github_talent_sourcer.exceptions import GitHubAPIError, ProfileLookupError
from github_talent_sourcer.models.user import UserProfile
from github_talent_sourcer.services.github_rest_client import GitHubRestClient

logger = logging.getLogger(__name__)


class ProfileCollector:
    """Collects user profiles, fetching each username at most once per run."""

    def __init__(self, rest_client: GitHubRestClient):
        self.rest_client = rest_client
        self._profiles: dict[str, UserProfile] = {}

    async def collect_profile(self, username: str) -> UserProfile:
        """Collect user profile data.

        Args:
            username: GitHub username

        Returns:
            UserProfile with all available data

        Raises:
            ProfileLookupError: If the profile request fails
        """
        logger.debug("Fetching profile for %s", username)

        try:
            data = await self.rest_client.get_user(username)
        except (GitHubAPIError, httpx.HTTPError) as e:
            raise ProfileLookupError(username, e) from e

        # Key on the login as the contribution stream reported it
        return UserProfile.from_api({**data, "login": username})

    async def get_profile(self, username: str) -> UserProfile:
        """Return the cached profile, fetching it on first use.

        A failed lookup is replaced by a placeholder profile so a single
        missing user never stops a collection pass. Placeholders are not
        cached; the next first sighting of the user tries again.
        """
        if username in self._profiles:
            return self._profiles[username]

        try:
            profile = await self.collect_profile(username)
        except ProfileLookupError as e:
            logger.warning("Could not fetch profile for %s: %s", username, e.cause)
            return UserProfile.placeholder(username)

        self._profiles[username] = profile
        return profile

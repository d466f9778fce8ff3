"""User profile model."""

from typing import Any

from pydantic import BaseModel

PROFILE_URL_TEMPLATE = "https://github.com/{username}"


class UserProfile(BaseModel):
    """Public GitHub profile fields used for outreach."""

    username: str
    name: str | None = None
    email: str | None = None
    location: str | None = None
    bio: str | None = None
    company: str | None = None
    twitter_username: str | None = None
    blog: str | None = None
    html_url: str = ""

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "UserProfile":
        """Create from GitHub REST API response."""
        username = data.get("login", "")
        return cls(
            username=username,
            name=data.get("name"),
            email=data.get("email"),
            location=data.get("location"),
            bio=data.get("bio"),
            company=data.get("company"),
            twitter_username=data.get("twitter_username"),
            blog=data.get("blog"),
            html_url=data.get("html_url") or PROFILE_URL_TEMPLATE.format(username=username),
        )

    @classmethod
    def placeholder(cls, username: str) -> "UserProfile":
        """Profile used when the lookup fails: only the URL is known."""
        return cls(
            username=username,
            html_url=PROFILE_URL_TEMPLATE.format(username=username),
        )

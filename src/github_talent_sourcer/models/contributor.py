"""Contribution event and contributor record models."""

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from github_talent_sourcer.models.user import UserProfile

NOTABLE_CONTRIBUTIONS_CAPACITY = 5


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ContributionKind(str, Enum):
    """Kinds of contribution the collector observes."""

    COMMIT = "commit"
    PULL_REQUEST = "pull_request"
    ISSUE = "issue"


class ContributionEvent(BaseModel):
    """One observed unit of activity attributable to a single user."""

    kind: ContributionKind
    count: int = Field(default=1, ge=0)
    title: str | None = None
    created_at: datetime | None = None

    @classmethod
    def from_contributor_stat(cls, data: dict[str, Any]) -> "ContributionEvent":
        """Create from a /contributors entry (cumulative commit count, undated)."""
        return cls(
            kind=ContributionKind.COMMIT,
            count=data.get("contributions", 0),
        )

    @classmethod
    def from_api(cls, data: dict[str, Any], kind: ContributionKind) -> "ContributionEvent":
        """Create from a pull request or issue API response."""
        return cls(
            kind=kind,
            count=1,
            title=data.get("title"),
            created_at=_parse_datetime(data.get("created_at")),
        )


class NotableContributions(BaseModel):
    """Small capped sample of contribution titles.

    Titles are kept in insertion order. Once ``capacity`` titles are stored,
    further titles are rejected rather than rotated in. Repeated titles from
    one repository are kept; ``union`` collapses exact duplicates.
    """

    titles: list[str] = Field(default_factory=list)
    capacity: int = NOTABLE_CONTRIBUTIONS_CAPACITY

    @property
    def is_full(self) -> bool:
        return len(self.titles) >= self.capacity

    def __len__(self) -> int:
        return len(self.titles)

    def __contains__(self, title: str) -> bool:
        return title in self.titles

    def add(self, title: str | None) -> bool:
        """Append a title; returns False if it was rejected."""
        if not title or self.is_full:
            return False
        self.titles.append(title)
        return True

    def union(self, other: "NotableContributions") -> "NotableContributions":
        """Our titles first, then unseen titles from ``other``, deduplicated and re-capped."""
        merged = NotableContributions(capacity=self.capacity)
        for title in [*self.titles, *other.titles]:
            if title not in merged:
                merged.add(title)
        return merged

    def sample(self, limit: int) -> list[str]:
        """First ``limit`` titles for display."""
        return self.titles[:limit]


class ContributorRecord(BaseModel):
    """Aggregated contribution summary for one GitHub user."""

    username: str

    # Profile (captured once, when the record is created)
    name: str | None = None
    email: str | None = None
    location: str | None = None
    bio: str | None = None
    company: str | None = None
    twitter_username: str | None = None
    blog: str | None = None
    profile_url: str

    # Counters
    commits: int = Field(default=0, ge=0)
    pull_requests: int = Field(default=0, ge=0)
    issues: int = Field(default=0, ge=0)

    notable_contributions: NotableContributions = Field(default_factory=NotableContributions)
    first_contribution: datetime | None = None
    last_contribution: datetime | None = None

    repositories: list[str] = Field(default_factory=list)
    collected_at: datetime = Field(default_factory=utc_now)

    @classmethod
    def from_profile(cls, profile: UserProfile, repository: str) -> "ContributorRecord":
        """Create an empty record for a user first seen in ``repository``."""
        return cls(
            username=profile.username,
            name=profile.name,
            email=profile.email,
            location=profile.location,
            bio=profile.bio,
            company=profile.company,
            twitter_username=profile.twitter_username,
            blog=profile.blog,
            profile_url=profile.html_url,
            repositories=[repository],
        )

    @property
    def total_contributions(self) -> int:
        """Commits, pull requests and issues combined."""
        return self.commits + self.pull_requests + self.issues

    @property
    def repository_names(self) -> str:
        """Repositories in first-seen order, comma separated."""
        return ", ".join(self.repositories)

    def add_event(self, event: ContributionEvent, at: datetime | None = None) -> None:
        """Apply one contribution event to this record."""
        if event.kind is ContributionKind.COMMIT:
            self.commits += event.count
        elif event.kind is ContributionKind.PULL_REQUEST:
            self.pull_requests += event.count
        else:
            self.issues += event.count

        self.notable_contributions.add(event.title)
        self._observe_dates(event.created_at, event.created_at)
        self.collected_at = at or utc_now()

    def absorb(self, other: "ContributorRecord", at: datetime | None = None) -> None:
        """Fold another record for the same user (from another repository) into this one."""
        self.commits += other.commits
        self.pull_requests += other.pull_requests
        self.issues += other.issues

        self.notable_contributions = self.notable_contributions.union(
            other.notable_contributions
        )
        self._observe_dates(other.first_contribution, other.last_contribution)

        for repository in other.repositories:
            if repository not in self.repositories:
                self.repositories.append(repository)

        self.collected_at = at or utc_now()

    def _observe_dates(self, first: datetime | None, last: datetime | None) -> None:
        if first and (self.first_contribution is None or first < self.first_contribution):
            self.first_contribution = first
        if last and (self.last_contribution is None or last > self.last_contribution):
            self.last_contribution = last


def _parse_datetime(value: str | None) -> datetime | None:
    """Parse ISO datetime string."""
    if not value:
        return None
    try:
        # Handle ISO format with or without Z suffix
        if value.endswith("Z"):
            value = value[:-1] + "+00:00"
        return datetime.fromisoformat(value)
    except (ValueError, TypeError):
        return None

"""Fetch options model."""

from datetime import datetime, timedelta, timezone

from pydantic import BaseModel, Field

# Months are approximated as 30 days when computing the recency cutoff
DAYS_PER_MONTH = 30


class FetchOptions(BaseModel):
    """Options controlling what is collected for each repository."""

    location_filter: list[str] | None = None
    min_contributions: int = Field(default=1, ge=0)
    active_within_months: int | None = Field(default=None, ge=0)
    include_commits: bool = True
    include_pull_requests: bool = True
    include_issues: bool = True

    @property
    def has_location_filter(self) -> bool:
        """Whether any location term is configured."""
        return bool(self.location_filter)

    def recency_cutoff(self, now: datetime | None = None) -> datetime | None:
        """Timestamp before which PR/issue pagination stops, if any."""
        if not self.active_within_months:
            return None
        now = now or datetime.now(timezone.utc)
        return now - timedelta(days=self.active_within_months * DAYS_PER_MONTH)

"""Aggregation of contribution events into contributor records."""

import logging
from collections.abc import Iterable
from datetime import datetime

from github_talent_sourcer.models.contributor import (
    ContributionEvent,
    ContributorRecord,
    utc_now,
)
from github_talent_sourcer.models.user import UserProfile

logger = logging.getLogger(__name__)

# username -> record; insertion order is the order users were first seen
ContributorMap = dict[str, ContributorRecord]


def record_contribution(
    contributors: ContributorMap,
    username: str,
    event: ContributionEvent,
) -> ContributorRecord:
    """Apply an event to an existing record within one repository."""
    record = contributors[username]
    record.add_event(event)
    return record


def admit_contributor(
    contributors: ContributorMap,
    profile: UserProfile,
    repository: str,
    event: ContributionEvent,
) -> ContributorRecord:
    """Create the record for a user first seen in ``repository``."""
    record = ContributorRecord.from_profile(profile, repository)
    record.add_event(event)
    contributors[profile.username] = record
    return record


def merge_contributor_sets(
    existing: ContributorMap,
    new: Iterable[ContributorRecord],
    merged_at: datetime | None = None,
) -> ContributorMap:
    """Fold one repository's records into the run-wide map.

    Unknown users are inserted as-is; known users absorb the new record
    (counters add, samples union, dates widen, repository list grows).

    Args:
        existing: Run-wide map, updated in place
        new: Records collected for one repository
        merged_at: Timestamp recorded on merged records (defaults to now)

    Returns:
        The updated ``existing`` map
    """
    merged_at = merged_at or utc_now()
    merged = 0

    for record in new:
        current = existing.get(record.username)
        if current is None:
            existing[record.username] = record
        else:
            current.absorb(record, at=merged_at)
            merged += 1

    logger.debug("Merged %d returning contributors (%d total)", merged, len(existing))
    return existing

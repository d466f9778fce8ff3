"""Location matching and final filtering/ranking of contributors."""

from collections.abc import Iterable

from github_talent_sourcer.models.contributor import ContributorRecord


def matches_location(location: str | None, terms: Iterable[str] | None) -> bool:
    """Check whether a profile location contains any of the terms.

    Matching is a case-insensitive substring test. With no terms every
    location (including a missing one) matches; with terms a missing
    location never matches.
    """
    terms = [term for term in (terms or []) if term]
    if not terms:
        return True
    if not location:
        return False

    location_lower = location.lower()
    return any(term.lower() in location_lower for term in terms)


def filter_by_contributions(
    records: Iterable[ContributorRecord],
    min_contributions: int = 1,
) -> list[ContributorRecord]:
    """Keep records with at least ``min_contributions`` total contributions."""
    return [r for r in records if r.total_contributions >= min_contributions]


def rank_contributors(
    records: Iterable[ContributorRecord],
    min_contributions: int = 1,
) -> list[ContributorRecord]:
    """Filter by threshold, then sort by total contributions, highest first.

    ``sorted`` is stable, so equal totals keep their merge order.
    """
    return sorted(
        filter_by_contributions(records, min_contributions),
        key=lambda r: r.total_contributions,
        reverse=True,
    )

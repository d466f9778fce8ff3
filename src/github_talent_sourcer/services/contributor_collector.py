"""Contributor collector service: committers, PR authors and issue authors."""

import logging
from collections.abc import Awaitable, Callable
from datetime import datetime

import httpx

from github_talent_sourcer.exceptions import GitHubAPIError
from github_talent_sourcer.models.contributor import ContributionEvent, ContributionKind
from github_talent_sourcer.models.options import FetchOptions
from github_talent_sourcer.models.repository import RepoIdentifier
from github_talent_sourcer.services.aggregator import (
    ContributorMap,
    admit_contributor,
    record_contribution,
)
from github_talent_sourcer.services.filters import matches_location
from github_talent_sourcer.services.github_rest_client import GitHubRestClient, Page
from github_talent_sourcer.services.profile_collector import ProfileCollector

logger = logging.getLogger(__name__)

PER_PAGE = 100
MAX_PAGES = 3  # 300 PRs/issues per repository keeps quota usage bounded


class ContributorCollector:
    """Collects contributors of one repository into a username-keyed map.

    Three passes run one after another, all feeding the same map:
    the contributor statistics list (commit counts), pull requests and
    issues. A failing pass keeps what it gathered and the next pass runs.
    """

    def __init__(
        self,
        rest_client: GitHubRestClient,
        profile_collector: ProfileCollector | None = None,
        options: FetchOptions | None = None,
        per_page: int = PER_PAGE,
        max_pages: int = MAX_PAGES,
    ):
        self.rest_client = rest_client
        self.profile_collector = profile_collector or ProfileCollector(rest_client)
        self.options = options or FetchOptions()
        self.per_page = per_page
        self.max_pages = max_pages

    async def collect(
        self,
        repo: RepoIdentifier,
        now: datetime | None = None,
    ) -> ContributorMap:
        """Collect all contributors of a repository.

        Args:
            repo: Repository to collect
            now: Reference time for the recency cutoff (defaults to now)

        Returns:
            Map of username -> ContributorRecord for this repository
        """
        logger.info("Fetching contributors for %s", repo.full_name)

        contributors: ContributorMap = {}
        cutoff = self.options.recency_cutoff(now)

        if self.options.include_commits:
            await self.collect_committers(repo, contributors)
        if self.options.include_pull_requests:
            await self.collect_pull_request_authors(repo, contributors, cutoff)
        if self.options.include_issues:
            await self.collect_issue_authors(repo, contributors, cutoff)

        logger.info(
            "Found %d unique contributors in %s", len(contributors), repo.full_name
        )
        return contributors

    async def collect_committers(
        self,
        repo: RepoIdentifier,
        contributors: ContributorMap,
    ) -> int:
        """Add commit counts from the contributor statistics list.

        Returns:
            Number of human committers seen
        """
        logger.info("  Fetching committers...")

        seen = 0
        try:
            entries = await self.rest_client.list_contributors(
                repo.owner, repo.name, per_page=self.per_page
            )
            for entry in entries:
                # Bots and anonymous entries have no profile to contact
                if entry.get("type") != "User":
                    continue
                username = entry.get("login")
                if not username:
                    continue

                seen += 1
                event = ContributionEvent.from_contributor_stat(entry)
                await self._observe(repo, contributors, username, event)
        except (GitHubAPIError, httpx.HTTPError) as e:
            logger.warning("    Error fetching committers for %s: %s", repo.full_name, e)

        logger.info("    Found %d committers", seen)
        return seen

    async def collect_pull_request_authors(
        self,
        repo: RepoIdentifier,
        contributors: ContributorMap,
        cutoff: datetime | None = None,
    ) -> int:
        """Add pull request authors, newest first, up to ``max_pages`` pages.

        Returns:
            Number of pull requests counted
        """
        logger.info("  Fetching PR authors...")
        count = await self._collect_paged(
            repo,
            contributors,
            self.rest_client.list_pull_requests,
            ContributionKind.PULL_REQUEST,
            cutoff,
        )
        logger.info("    Found %d PRs", count)
        return count

    async def collect_issue_authors(
        self,
        repo: RepoIdentifier,
        contributors: ContributorMap,
        cutoff: datetime | None = None,
    ) -> int:
        """Add issue authors, newest first, up to ``max_pages`` pages.

        Returns:
            Number of issues counted
        """
        logger.info("  Fetching issue creators...")
        count = await self._collect_paged(
            repo,
            contributors,
            self.rest_client.list_issues,
            ContributionKind.ISSUE,
            cutoff,
        )
        logger.info("    Found %d issues", count)
        return count

    async def _collect_paged(
        self,
        repo: RepoIdentifier,
        contributors: ContributorMap,
        fetch_page: Callable[..., Awaitable[Page]],
        kind: ContributionKind,
        cutoff: datetime | None,
    ) -> int:
        """Walk pages of PRs or issues until exhausted, capped or past the cutoff.

        The cutoff check assumes pages are sorted newest first: the first
        item older than the cutoff ends pagination, and items already seen
        are kept. A request failure ends the pass with what was gathered.
        """
        count = 0
        page_number = 1

        try:
            while page_number <= self.max_pages:
                page = await fetch_page(
                    repo.owner, repo.name, page=page_number, per_page=self.per_page
                )
                if not page.items:
                    break

                for item in page.items:
                    # The issues endpoint also lists pull requests
                    if kind is ContributionKind.ISSUE and item.get("pull_request"):
                        continue

                    event = ContributionEvent.from_api(item, kind)
                    if cutoff and event.created_at and event.created_at < cutoff:
                        logger.debug("Reached recency cutoff on page %d", page_number)
                        return count

                    username = (item.get("user") or {}).get("login")
                    if not username:
                        continue

                    count += 1
                    await self._observe(repo, contributors, username, event)

                if not page.has_next:
                    break
                page_number += 1
        except (GitHubAPIError, httpx.HTTPError) as e:
            logger.warning(
                "    Error fetching %ss for %s: %s", kind.value, repo.full_name, e
            )

        return count

    async def _observe(
        self,
        repo: RepoIdentifier,
        contributors: ContributorMap,
        username: str,
        event: ContributionEvent,
    ) -> None:
        """Record an event, creating the contributor on first sight.

        The location filter runs only when a user is first seen in this
        repository; a rejected user leaves no record, so a later sighting
        evaluates the filter again.
        """
        if username in contributors:
            record_contribution(contributors, username, event)
            return

        profile = await self.profile_collector.get_profile(username)

        if self.options.has_location_filter and not matches_location(
            profile.location, self.options.location_filter
        ):
            logger.debug(
                "Skipping %s: location %r does not match filter", username, profile.location
            )
            return

        admit_contributor(contributors, profile, repo.full_name, event)

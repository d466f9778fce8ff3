"""GitHub Talent Sourcer SDK - High-level API for ranking repository contributors."""

import asyncio
import logging
import tempfile
from collections.abc import Iterable, Sequence
from pathlib import Path

import httpx
from pydantic import BaseModel, Field

from github_talent_sourcer.config import Config
from github_talent_sourcer.exceptions import (
    ExportIOError,
    InvalidRepositoryReference,
    TalentSourcerError,
)
from github_talent_sourcer.models.contributor import ContributorRecord
from github_talent_sourcer.models.options import FetchOptions
from github_talent_sourcer.models.repository import RepoIdentifier
from github_talent_sourcer.output.csv_writer import default_output_path, write_csv_report
from github_talent_sourcer.services.aggregator import ContributorMap, merge_contributor_sets
from github_talent_sourcer.services.contributor_collector import ContributorCollector
from github_talent_sourcer.services.filters import rank_contributors
from github_talent_sourcer.services.github_rest_client import GitHubRestClient
from github_talent_sourcer.services.profile_collector import ProfileCollector

logger = logging.getLogger(__name__)


class SourcingResult(BaseModel):
    """Outcome of one sourcing run."""

    contributors: list[ContributorRecord] = Field(default_factory=list)
    processed: list[str] = Field(default_factory=list)  # owner/name, in order
    failed: dict[str, str] = Field(default_factory=dict)  # reference -> error


class TalentSourcer:
    """High-level SDK for finding and ranking repository contributors.

    Example usage:
        ```python
        from github_talent_sourcer import FetchOptions, TalentSourcer

        async with TalentSourcer(token="ghp_xxx") as sourcer:
            result = await sourcer.source(
                ["prisma/prisma", "https://github.com/trpc/trpc"],
                FetchOptions(location_filter=["berlin"], min_contributions=3),
            )
            sourcer.export(result.contributors)
        ```

    Args:
        token: GitHub personal access token (required).
        api_url: GitHub API base URL (default: https://api.github.com)
        config: Full configuration; overrides ``token`` and ``api_url``
    """

    def __init__(
        self,
        token: str | None = None,
        api_url: str = "https://api.github.com",
        config: Config | None = None,
    ):
        self._config = config or Config(github_token=token, github_api_url=api_url)
        self._rest_client: GitHubRestClient | None = None
        self._profile_collector: ProfileCollector | None = None
        self._initialized = False

    @property
    def config(self) -> Config:
        return self._config

    async def __aenter__(self) -> "TalentSourcer":
        """Async context manager entry."""
        await self._initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()

    async def _initialize(self) -> None:
        """Initialize clients.

        Raises:
            MissingCredentialError: If no token is configured
        """
        if self._initialized:
            return

        self._config.require_token()
        self._rest_client = GitHubRestClient(config=self._config)
        self._profile_collector = ProfileCollector(self._rest_client)

        self._initialized = True
        logger.debug("TalentSourcer initialized (api=%s)", self._config.github_api_url)

    async def close(self) -> None:
        """Close all HTTP connections."""
        if self._rest_client:
            await self._rest_client.close()
        self._initialized = False
        logger.debug("TalentSourcer closed")

    def _ensure_initialized(self) -> None:
        """Ensure the client is initialized."""
        if not self._initialized:
            raise TalentSourcerError(
                "Client not initialized. Use 'async with TalentSourcer(...) as sourcer:'"
            )

    def _collector(self, options: FetchOptions) -> ContributorCollector:
        return ContributorCollector(
            self._rest_client,
            profile_collector=self._profile_collector,
            options=options,
            per_page=self._config.per_page,
            max_pages=self._config.max_pages,
        )

    async def collect_repository(
        self,
        reference: str | RepoIdentifier,
        options: FetchOptions | None = None,
    ) -> ContributorMap:
        """Collect the contributors of a single repository.

        Args:
            reference: ``owner/name``, a GitHub URL or a parsed identifier
            options: Fetch options (defaults to the configured ones)

        Returns:
            Map of username -> ContributorRecord for that repository

        Raises:
            InvalidRepositoryReference: If the reference cannot be parsed
        """
        self._ensure_initialized()

        if isinstance(reference, RepoIdentifier):
            repo = reference
        else:
            repo = RepoIdentifier.parse(reference)
        options = options or self._config.fetch_options()
        return await self._collector(options).collect(repo)

    async def source(
        self,
        references: Sequence[str],
        options: FetchOptions | None = None,
    ) -> SourcingResult:
        """Collect, merge and rank contributors across repositories.

        Repositories are processed one at a time in the given order, with a
        fixed pause between them. A reference that cannot be parsed or
        fetched is recorded in ``failed`` and the run moves on.

        Args:
            references: Repository references (``owner/name`` or URLs)
            options: Fetch options (defaults to the configured ones)

        Returns:
            SourcingResult with contributors ranked by total contributions
        """
        self._ensure_initialized()
        options = options or self._config.fetch_options()
        collector = self._collector(options)

        result = SourcingResult()
        contributors: ContributorMap = {}
        fetched_any = False

        for reference in references:
            try:
                repo = RepoIdentifier.parse(reference)
            except InvalidRepositoryReference as e:
                logger.error("Skipping %s: %s", reference, e)
                result.failed[reference] = str(e)
                continue

            if fetched_any:
                await asyncio.sleep(self._config.repo_delay_seconds)
            fetched_any = True

            try:
                repo_contributors = await collector.collect(repo)
            except (TalentSourcerError, httpx.HTTPError) as e:
                logger.error("Error processing %s: %s", reference, e)
                result.failed[reference] = str(e)
                continue

            merge_contributor_sets(contributors, repo_contributors.values())
            result.processed.append(repo.full_name)

        result.contributors = rank_contributors(
            contributors.values(), options.min_contributions
        )
        logger.info(
            "Ranked %d contributors from %d repositories",
            len(result.contributors),
            len(result.processed),
        )
        return result

    def export(
        self,
        records: Iterable[ContributorRecord],
        output_path: Path | None = None,
    ) -> Path:
        """Write records to CSV, falling back to the temp directory once.

        Args:
            records: Contributors in output order
            output_path: Destination (defaults to the dated file in output_dir)

        Returns:
            Path actually written

        Raises:
            ExportIOError: If both the destination and the fallback fail
        """
        records = list(records)
        output_path = output_path or default_output_path(self._config.output_dir)

        try:
            return write_csv_report(records, output_path)
        except ExportIOError as e:
            fallback = Path(tempfile.gettempdir()) / output_path.name
            if fallback == output_path:
                raise
            logger.warning("%s; retrying in %s", e, fallback.parent)
            return write_csv_report(records, fallback)

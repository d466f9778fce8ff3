"""GitHub REST API client."""

from dataclasses import dataclass, field
from typing import Any, Optional

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from github_talent_sourcer._version import version as __version__
from github_talent_sourcer.config import Config, get_config
from github_talent_sourcer.exceptions import (
    GitHubAPIError,
    GitHubNotFoundError,
    GitHubRateLimitError,
)
from github_talent_sourcer.utils.pagination import has_next_page
from github_talent_sourcer.utils.rate_limit import (
    describe_reset,
    is_rate_limit_response,
    parse_reset_header,
)


@dataclass
class Page:
    """One page of a list endpoint."""

    items: list[dict[str, Any]] = field(default_factory=list)
    has_next: bool = False


class GitHubRestClient:
    """Async client for GitHub REST API."""

    def __init__(
        self,
        config: Optional[Config] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config or get_config()
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _get_headers(self) -> dict[str, str]:
        """Get headers for API requests."""
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": f"github-talent-sourcer/{__version__}",
        }
        if self.config.github_token:
            headers["Authorization"] = f"Bearer {self.config.github_token}"
        return headers

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.config.github_api_url,
                headers=self._get_headers(),
                timeout=self.config.request_timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def __aenter__(self) -> "GitHubRestClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    @retry(
        retry=retry_if_exception_type((httpx.TimeoutException, httpx.ConnectError)),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        reraise=True,
    )
    async def _request(
        self,
        method: str,
        endpoint: str,
        **kwargs,
    ) -> httpx.Response:
        """Make an API request, retrying transport failures only."""
        client = await self._get_client()
        response = await client.request(method, endpoint, **kwargs)

        if response.status_code < 400:
            return response

        body = _error_body(response)

        # Handle errors
        if response.status_code == 404:
            raise GitHubNotFoundError(
                f"Resource not found: {endpoint}",
                status_code=404,
                response_body=body,
            )
        elif is_rate_limit_response(response.status_code, body, response.headers):
            reset_time = parse_reset_header(response.headers)
            raise GitHubRateLimitError(
                f"Rate limit exceeded.{describe_reset(reset_time)}",
                status_code=response.status_code,
                response_body=body,
                reset_time=reset_time,
            )
        elif response.status_code == 401:
            raise GitHubAPIError(
                f"Unauthorized: {body.get('message', 'Bad credentials')}",
                status_code=401,
                response_body=body,
            )
        elif response.status_code == 403:
            raise GitHubAPIError(
                f"Forbidden: {body.get('message', 'Unknown error')}",
                status_code=403,
                response_body=body,
            )
        elif response.status_code >= 500:
            raise GitHubAPIError(
                f"Server error: {response.status_code}",
                status_code=response.status_code,
            )
        raise GitHubAPIError(
            f"API error: {body.get('message', 'Unknown error')}",
            status_code=response.status_code,
            response_body=body,
        )

    async def get(self, endpoint: str, **kwargs) -> Any:
        """Make a GET request and return JSON response (None when empty)."""
        response = await self._request("GET", endpoint, **kwargs)
        if not response.content:
            return None
        return _decode_json(response, endpoint)

    async def get_page(
        self,
        endpoint: str,
        page: int = 1,
        per_page: int = 100,
        params: Optional[dict[str, Any]] = None,
    ) -> Page:
        """Fetch a single page of a list endpoint.

        Args:
            endpoint: API endpoint
            page: Page number (1-indexed)
            per_page: Items per page (max 100)
            params: Extra query parameters

        Returns:
            Page with the items and whether a next page is advertised
        """
        query = dict(params or {})
        query["per_page"] = per_page
        query["page"] = page

        response = await self._request("GET", endpoint, params=query)
        data = _decode_json(response, endpoint) if response.content else []
        items = data if isinstance(data, list) else []

        return Page(items=items, has_next=has_next_page(response.headers.get("Link")))

    # Convenience methods for the endpoints the collector uses

    async def get_user(self, username: str) -> dict[str, Any]:
        """Get user profile data."""
        return await self.get(f"/users/{username}") or {}

    async def list_contributors(
        self,
        owner: str,
        repo: str,
        per_page: int = 100,
    ) -> list[dict[str, Any]]:
        """Get the first page of a repository's contributor statistics."""
        page = await self.get_page(f"/repos/{owner}/{repo}/contributors", per_page=per_page)
        return page.items

    async def list_pull_requests(
        self,
        owner: str,
        repo: str,
        page: int = 1,
        per_page: int = 100,
    ) -> Page:
        """Get one page of pull requests, newest first."""
        return await self.get_page(
            f"/repos/{owner}/{repo}/pulls",
            page=page,
            per_page=per_page,
            params={"state": "all", "sort": "created", "direction": "desc"},
        )

    async def list_issues(
        self,
        owner: str,
        repo: str,
        page: int = 1,
        per_page: int = 100,
    ) -> Page:
        """Get one page of issues (pull requests included by GitHub), newest first."""
        return await self.get_page(
            f"/repos/{owner}/{repo}/issues",
            page=page,
            per_page=per_page,
            params={"state": "all", "sort": "created", "direction": "desc"},
        )


def _error_body(response: httpx.Response) -> dict:
    if not response.content:
        return {}
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def _decode_json(response: httpx.Response, endpoint: str) -> Any:
    """Decode a 2xx body; HTML from a proxy or captive portal is an API error."""
    try:
        return response.json()
    except ValueError as e:
        raise GitHubAPIError(
            f"Invalid JSON response from {endpoint}",
            status_code=response.status_code,
        ) from e

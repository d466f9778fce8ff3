"""Tests for the GitHub REST client using httpx.MockTransport."""

import httpx
import pytest

from github_talent_sourcer.exceptions import (
    GitHubAPIError,
    GitHubNotFoundError,
    GitHubRateLimitError,
)
from github_talent_sourcer.services.github_rest_client import GitHubRestClient


def make_client(test_config, handler) -> GitHubRestClient:
    return GitHubRestClient(config=test_config, transport=httpx.MockTransport(handler))


class TestRequests:
    """Tests for request construction and pagination."""

    @pytest.mark.asyncio
    async def test_list_pull_requests_query(self, test_config):
        """Test query parameters and next-page detection."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["params"] = dict(request.url.params)
            seen["auth"] = request.headers.get("Authorization")
            return httpx.Response(
                200,
                json=[{"title": "Fix bug"}],
                headers={
                    "Link": '<https://api.github.com/repos/acme/widgets/pulls?page=3>; rel="next"'
                },
            )

        async with make_client(test_config, handler) as client:
            page = await client.list_pull_requests("acme", "widgets", page=2)

        assert seen["path"] == "/repos/acme/widgets/pulls"
        assert seen["params"] == {
            "state": "all",
            "sort": "created",
            "direction": "desc",
            "per_page": "100",
            "page": "2",
        }
        assert seen["auth"] == "Bearer test_token"
        assert page.items == [{"title": "Fix bug"}]
        assert page.has_next is True

    @pytest.mark.asyncio
    async def test_last_page_has_no_next(self, test_config):
        """Test a page without a next relation."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                json=[],
                headers={"Link": '<https://api.github.com/repos/a/b/issues?page=1>; rel="first"'},
            )

        async with make_client(test_config, handler) as client:
            page = await client.list_issues("a", "b")

        assert page.items == []
        assert page.has_next is False

    @pytest.mark.asyncio
    async def test_empty_contributors_response(self, test_config):
        """Test that a 204 for an empty repository yields no contributors."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(204)

        async with make_client(test_config, handler) as client:
            assert await client.list_contributors("acme", "empty") == []

    @pytest.mark.asyncio
    async def test_get_user(self, test_config):
        """Test profile lookup."""

        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/users/alice"
            return httpx.Response(200, json={"login": "alice", "location": "Pune"})

        async with make_client(test_config, handler) as client:
            data = await client.get_user("alice")

        assert data["location"] == "Pune"


class TestErrorMapping:
    """Tests for HTTP error translation."""

    @pytest.mark.asyncio
    async def test_not_found(self, test_config):
        """Test 404 mapping."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, json={"message": "Not Found"})

        async with make_client(test_config, handler) as client:
            with pytest.raises(GitHubNotFoundError) as exc_info:
                await client.get_user("nobody")

        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_rate_limit(self, test_config):
        """Test 403 rate-limit mapping with reset time."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                403,
                json={"message": "API rate limit exceeded for user ID 1."},
                headers={"x-ratelimit-remaining": "0", "x-ratelimit-reset": "1700000000"},
            )

        async with make_client(test_config, handler) as client:
            with pytest.raises(GitHubRateLimitError) as exc_info:
                await client.list_issues("acme", "widgets")

        assert exc_info.value.reset_time == 1700000000.0

    @pytest.mark.asyncio
    async def test_secondary_rate_limit_429(self, test_config):
        """Test 429 mapping."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(429, json={"message": "Too many requests"})

        async with make_client(test_config, handler) as client:
            with pytest.raises(GitHubRateLimitError):
                await client.list_contributors("acme", "widgets")

    @pytest.mark.asyncio
    async def test_forbidden_is_not_rate_limit(self, test_config):
        """Test that other 403 responses are plain API errors."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(403, json={"message": "Resource not accessible"})

        async with make_client(test_config, handler) as client:
            with pytest.raises(GitHubAPIError) as exc_info:
                await client.get_user("alice")

        assert not isinstance(exc_info.value, GitHubRateLimitError)
        assert "Resource not accessible" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_server_error(self, test_config):
        """Test 5xx mapping, including non-JSON bodies."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(502, text="<html>Bad gateway</html>")

        async with make_client(test_config, handler) as client:
            with pytest.raises(GitHubAPIError) as exc_info:
                await client.list_pull_requests("acme", "widgets")

        assert exc_info.value.status_code == 502

    @pytest.mark.asyncio
    async def test_non_json_profile(self, test_config):
        """Test that an HTML body on a 200 is reported as an API error."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>proxy error</html>")

        async with make_client(test_config, handler) as client:
            with pytest.raises(GitHubAPIError, match="Invalid JSON") as exc_info:
                await client.get_user("alice")

        assert exc_info.value.status_code == 200

    @pytest.mark.asyncio
    async def test_non_json_page(self, test_config):
        """Test that a list page with an HTML body is reported as an API error."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>captive portal</html>")

        async with make_client(test_config, handler) as client:
            with pytest.raises(GitHubAPIError, match="Invalid JSON"):
                await client.list_pull_requests("acme", "widgets")

"""Exceptions for GitHub Talent Sourcer.

Exception Hierarchy:
    TalentSourcerError (base)
    ├── GitHubAPIError (HTTP API errors with status codes)
    │   ├── GitHubRateLimitError (403/429 rate limit from API response)
    │   └── GitHubNotFoundError (404 not found)
    ├── InvalidRepositoryReference (malformed owner/name or URL)
    ├── ProfileLookupError (single user profile could not be fetched)
    ├── ExportIOError (CSV could not be written)
    ├── MissingCredentialError (no token configured)
    └── ConfigurationError (malformed settings)

Usage:
    - GitHubAPIError and subclasses abort the current collection pass only
    - InvalidRepositoryReference skips one repository reference
    - ProfileLookupError is recovered with a placeholder profile
    - ExportIOError and MissingCredentialError end the run
"""

__all__ = [
    "TalentSourcerError",
    "GitHubAPIError",
    "GitHubRateLimitError",
    "GitHubNotFoundError",
    "InvalidRepositoryReference",
    "ProfileLookupError",
    "ExportIOError",
    "MissingCredentialError",
    "ConfigurationError",
]


class TalentSourcerError(Exception):
    """Base exception for all GitHub Talent Sourcer errors."""

    pass


class GitHubAPIError(TalentSourcerError):
    """Base exception for GitHub API errors (HTTP responses with error status codes)."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_body: dict | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body


class GitHubRateLimitError(GitHubAPIError):
    """Raised when GitHub API reports the request quota as exhausted.

    The tool never retries these; the current pass stops with partial results.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = 403,
        response_body: dict | None = None,
        reset_time: float | None = None,
    ):
        super().__init__(message, status_code=status_code, response_body=response_body)
        self.reset_time = reset_time


class GitHubNotFoundError(GitHubAPIError):
    """Raised when a GitHub resource is not found (HTTP 404)."""

    def __init__(
        self,
        message: str,
        status_code: int | None = 404,
        response_body: dict | None = None,
    ):
        super().__init__(message, status_code=status_code, response_body=response_body)


class InvalidRepositoryReference(TalentSourcerError):
    """Raised when a repository reference is neither owner/name nor a GitHub URL."""

    def __init__(self, reference: str, reason: str | None = None):
        message = f"Invalid repository reference: {reference!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.reference = reference


class ProfileLookupError(TalentSourcerError):
    """Raised when a user's profile cannot be fetched."""

    def __init__(self, username: str, cause: Exception | None = None):
        super().__init__(f"Could not fetch profile for {username}")
        self.username = username
        self.cause = cause


class ExportIOError(TalentSourcerError):
    """Raised when the CSV export cannot be created or written."""

    def __init__(self, path: str, cause: Exception | None = None):
        detail = f": {cause}" if cause else ""
        super().__init__(f"Could not write export to {path}{detail}")
        self.path = path
        self.cause = cause


class MissingCredentialError(TalentSourcerError):
    """Raised when no GitHub token is configured."""

    pass


class ConfigurationError(TalentSourcerError):
    """Raised when a configuration value cannot be parsed."""

    pass

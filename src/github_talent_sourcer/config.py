"""Configuration management for GitHub Talent Sourcer."""

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from github_talent_sourcer.exceptions import ConfigurationError, MissingCredentialError
from github_talent_sourcer.models.options import FetchOptions


@dataclass
class Config:
    """Application configuration."""

    github_token: str | None
    github_api_url: str = "https://api.github.com"

    # Fetch defaults (overridable from the CLI)
    location_filter: list[str] | None = None
    min_contributions: int = 1
    active_within_months: int | None = None

    # Pagination
    per_page: int = 100  # GitHub page-size ceiling
    max_pages: int = 3  # PR/issue passes stop after 300 items

    # Pause between repositories to stay clear of the hourly quota
    repo_delay_seconds: float = 1.0

    output_dir: Path = field(default_factory=lambda: Path("output"))

    # Timeouts
    request_timeout: float = 30.0

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        # override=False ensures environment variables take precedence over .env
        load_dotenv(override=False)

        # Support both GITHUB_TALENT_SOURCER_TOKEN (preferred) and GITHUB_TOKEN (fallback)
        token = os.getenv("GITHUB_TALENT_SOURCER_TOKEN") or os.getenv("GITHUB_TOKEN")

        min_contributions = _env_int("MIN_CONTRIBUTIONS")

        return cls(
            github_token=token,
            github_api_url=os.getenv("GITHUB_API_URL", "https://api.github.com"),
            location_filter=parse_location_terms(os.getenv("LOCATION_FILTER")),
            min_contributions=1 if min_contributions is None else min_contributions,
            active_within_months=_env_int("ACTIVE_WITHIN_MONTHS"),
            output_dir=Path(os.getenv("OUTPUT_DIR", "output")),
        )

    @property
    def is_authenticated(self) -> bool:
        """Check if a GitHub token is configured."""
        return bool(self.github_token)

    def require_token(self) -> str:
        """Return the token or fail before any network activity."""
        if not self.github_token:
            raise MissingCredentialError(
                "GITHUB_TOKEN not found. Set GITHUB_TOKEN or GITHUB_TALENT_SOURCER_TOKEN "
                "in the environment or in a .env file."
            )
        return self.github_token

    def fetch_options(self) -> FetchOptions:
        """Build fetch options from the configured defaults."""
        return FetchOptions(
            location_filter=self.location_filter,
            min_contributions=self.min_contributions,
            active_within_months=self.active_within_months,
        )


def parse_location_terms(value: str | None) -> list[str] | None:
    """Split a comma-separated location filter, dropping blank terms."""
    if not value:
        return None
    terms = [term.strip() for term in value.split(",") if term.strip()]
    return terms or None


def _env_int(name: str) -> int | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    try:
        number = int(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    if number < 0:
        raise ConfigurationError(f"{name} must not be negative, got {number}")
    return number


# Global config instance
_config: Config | None = None


def get_config() -> Config:
    """Get or create the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.from_env()
    return _config


def set_config(config: Config | None) -> None:
    """Set the global configuration instance (useful for testing)."""
    global _config
    _config = config

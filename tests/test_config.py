"""Tests for configuration loading."""

from pathlib import Path

import pytest

from github_talent_sourcer.config import Config, get_config, parse_location_terms, set_config
from github_talent_sourcer.exceptions import ConfigurationError, MissingCredentialError

ENV_VARS = [
    "GITHUB_TALENT_SOURCER_TOKEN",
    "GITHUB_TOKEN",
    "GITHUB_API_URL",
    "LOCATION_FILTER",
    "MIN_CONTRIBUTIONS",
    "ACTIVE_WITHIN_MONTHS",
    "OUTPUT_DIR",
]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Clear related variables and keep any local .env out of reach."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return monkeypatch


class TestFromEnv:
    """Tests for Config.from_env."""

    def test_defaults(self, clean_env):
        """Test defaults with no variables set."""
        config = Config.from_env()

        assert config.github_token is None
        assert config.is_authenticated is False
        assert config.location_filter is None
        assert config.min_contributions == 1
        assert config.active_within_months is None
        assert config.output_dir == Path("output")

    def test_token_preference(self, clean_env):
        """Test the tool-specific token wins over GITHUB_TOKEN."""
        clean_env.setenv("GITHUB_TOKEN", "generic")
        assert Config.from_env().github_token == "generic"

        clean_env.setenv("GITHUB_TALENT_SOURCER_TOKEN", "specific")
        assert Config.from_env().github_token == "specific"

    def test_filters(self, clean_env):
        """Test location and threshold variables."""
        clean_env.setenv("LOCATION_FILTER", "bangalore, berlin ,")
        clean_env.setenv("MIN_CONTRIBUTIONS", "0")
        clean_env.setenv("ACTIVE_WITHIN_MONTHS", "6")

        config = Config.from_env()

        assert config.location_filter == ["bangalore", "berlin"]
        assert config.min_contributions == 0
        assert config.active_within_months == 6

    def test_malformed_integer(self, clean_env):
        """Test that a non-numeric threshold is a configuration error."""
        clean_env.setenv("MIN_CONTRIBUTIONS", "lots")

        with pytest.raises(ConfigurationError, match="MIN_CONTRIBUTIONS"):
            Config.from_env()

    @pytest.mark.parametrize("name", ["MIN_CONTRIBUTIONS", "ACTIVE_WITHIN_MONTHS"])
    def test_negative_integer(self, clean_env, name):
        """Test that negative thresholds are rejected with a readable message."""
        clean_env.setenv(name, "-1")

        with pytest.raises(ConfigurationError, match="must not be negative"):
            Config.from_env()


class TestConfig:
    """Tests for Config helpers."""

    def test_require_token(self):
        """Test that a missing token is reported before any request."""
        with pytest.raises(MissingCredentialError):
            Config(github_token=None).require_token()
        assert Config(github_token="abc").require_token() == "abc"

    def test_fetch_options(self):
        """Test that fetch options mirror the configured defaults."""
        options = Config(
            github_token="abc",
            location_filter=["pune"],
            min_contributions=3,
            active_within_months=12,
        ).fetch_options()

        assert options.location_filter == ["pune"]
        assert options.min_contributions == 3
        assert options.active_within_months == 12
        assert options.include_commits is True

    def test_parse_location_terms(self):
        """Test comma splitting."""
        assert parse_location_terms(None) is None
        assert parse_location_terms("") is None
        assert parse_location_terms(" , ") is None
        assert parse_location_terms("Bangalore") == ["Bangalore"]

    def test_global_config(self):
        """Test the global instance can be replaced."""
        config = Config(github_token="abc")
        set_config(config)
        assert get_config() is config

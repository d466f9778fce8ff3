"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from github_talent_sourcer.config import Config, set_config


@pytest.fixture(autouse=True)
def reset_globals():
    """Reset global state before each test."""
    set_config(None)
    yield
    set_config(None)


@pytest.fixture
def test_config(tmp_path: Path) -> Config:
    """Create a test configuration with no pause between repositories."""
    config = Config(
        github_token="test_token",
        github_api_url="https://api.github.com",
        output_dir=tmp_path / "output",
        repo_delay_seconds=0,
    )
    set_config(config)
    return config


@pytest.fixture
def user_payload():
    """Build a /users/{username} API response."""

    def build(login: str, location: str | None = None, **fields) -> dict:
        data = {
            "login": login,
            "name": fields.pop("name", login.title()),
            "email": None,
            "location": location,
            "bio": None,
            "company": None,
            "twitter_username": None,
            "blog": "",
            "html_url": f"https://github.com/{login}",
        }
        data.update(fields)
        return data

    return build

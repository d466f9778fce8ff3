"""Utility modules for GitHub Talent Sourcer."""

from github_talent_sourcer.utils.pagination import (
    get_next_page_url,
    has_next_page,
    parse_link_header,
)
from github_talent_sourcer.utils.rate_limit import (
    describe_reset,
    format_reset_time,
    format_time_remaining,
)

__all__ = [
    "parse_link_header",
    "get_next_page_url",
    "has_next_page",
    "format_time_remaining",
    "format_reset_time",
    "describe_reset",
]

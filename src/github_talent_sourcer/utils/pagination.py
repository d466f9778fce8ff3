"""Pagination utilities for GitHub API."""

import re
from typing import Optional


def parse_link_header(link_header: Optional[str]) -> dict[str, str]:
    """Parse GitHub's Link header into a dictionary of rel -> url.

    Example Link header:
    <https://api.github.com/repos/acme/widgets/pulls?page=2>; rel="next",
    <https://api.github.com/repos/acme/widgets/pulls?page=5>; rel="last"

    Returns:
        dict: {"next": "url", "last": "url", "prev": "url", "first": "url"}
    """
    if not link_header:
        return {}

    links = {}
    # Pattern to match <url>; rel="name"
    pattern = r'<([^>]+)>;\s*rel="([^"]+)"'

    for match in re.finditer(pattern, link_header):
        url, rel = match.groups()
        links[rel] = url

    return links


def get_next_page_url(link_header: Optional[str]) -> Optional[str]:
    """Extract the 'next' page URL from a Link header."""
    links = parse_link_header(link_header)
    return links.get("next")


def has_next_page(link_header: Optional[str]) -> bool:
    """Whether the Link header advertises another page."""
    return get_next_page_url(link_header) is not None

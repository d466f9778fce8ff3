"""Helpers for reporting GitHub rate-limit responses."""

import time
from datetime import datetime
from typing import Optional


def format_time_remaining(seconds: float) -> str:
    """Format seconds into a human-friendly string."""
    if seconds <= 0:
        return "now"

    seconds = int(seconds)

    if seconds < 60:
        return f"{seconds} second{'s' if seconds != 1 else ''}"
    elif seconds < 3600:
        minutes = seconds // 60
        secs = seconds % 60
        if secs > 0:
            return f"{minutes} min {secs} sec"
        return f"{minutes} minute{'s' if minutes != 1 else ''}"
    else:
        hours = seconds // 3600
        minutes = (seconds % 3600) // 60
        if minutes > 0:
            return f"{hours} hr {minutes} min"
        return f"{hours} hour{'s' if hours != 1 else ''}"


def format_reset_time(reset_timestamp: float) -> str:
    """Format reset timestamp to a human-readable local time."""
    reset_dt = datetime.fromtimestamp(reset_timestamp)
    return reset_dt.strftime("%H:%M:%S")


def parse_reset_header(headers: dict) -> Optional[float]:
    """Read the x-ratelimit-reset header as a Unix timestamp."""
    value = headers.get("x-ratelimit-reset")
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def describe_reset(reset_time: Optional[float]) -> str:
    """Human-readable 'resets in' suffix for rate-limit messages."""
    if reset_time is None:
        return ""
    human_time = format_time_remaining(reset_time - time.time())
    return f" Resets in {human_time} (at {format_reset_time(reset_time)})"


def is_rate_limit_response(status_code: int, body: dict, headers: dict) -> bool:
    """Whether a 403/429 response is GitHub's quota exhaustion signal."""
    if status_code == 429:
        return True
    if status_code != 403:
        return False
    if headers.get("x-ratelimit-remaining") == "0":
        return True
    return "rate limit" in str(body.get("message", "")).lower()

"""Utility functions for parsing, formatting and diagnostics."""

from datetime import datetime, timezone
from typing import Optional, Union

from dateutil import parser as dateparser


def log(message: str, verbose: bool) -> None:
    """Print a diagnostic line if verbose mode is enabled."""
    if verbose:
        print(message)


def parse_timestamp(value: str) -> Optional[datetime]:
    """Parse a provider timestamp as an aware datetime, naive values being UTC."""
    try:
        dt = dateparser.parse(value)
    except (ValueError, OverflowError):
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def format_reset_time(iso_time: str, now: Optional[datetime] = None) -> str:
    """
    Format the time left until a reset timestamp.

    Args:
        iso_time: Reset timestamp as reported by the provider.
        now: Reference time, defaults to the current UTC time.

    Returns:
        "now" when the reset is due, "<h>h <m>m" or "<m>m" otherwise.
        Unparsable input is returned unchanged.
    """
    reset_dt = parse_timestamp(iso_time)
    if reset_dt is None:
        return iso_time

    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    seconds = (reset_dt - now).total_seconds()
    if seconds <= 0:
        return "now"

    hours, remainder = divmod(int(seconds), 3600)
    minutes = remainder // 60
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


def format_local_datetime(value: str) -> Optional[str]:
    """Format a timestamp as local "YYYY-MM-DD HH:MM", or None if unparsable."""
    dt = parse_timestamp(value)
    if dt is None:
        return None
    return dt.astimezone().strftime("%Y-%m-%d %H:%M")


def format_count(v: Union[int, float]) -> str:
    """Format a quota counter, dropping the decimal part of whole numbers."""
    if isinstance(v, float) and v.is_integer():
        return str(int(v))
    return str(v)

"""Utilities for date handling."""

from datetime import UTC, datetime


def now_utc() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(UTC)


def today() -> str:
    """Today's UTC date as ``YYYY-MM-DD``."""
    return now_utc().strftime("%Y-%m-%d")

# File: utils/dt_utils.py
"""Date and time utilities for Corn Cat.

Pure Python date/time functions with ZERO Home Assistant dependencies.
All functions here can be unit tested without Home Assistant mocking.

All persisted timestamps are ISO 8601 strings in UTC. Streaks are counted on
UTC calendar dates, so nothing here depends on the configured time zone.

Functions:
    - dt_now_utc: Current datetime in UTC
    - dt_now_iso: Current (or given) datetime as ISO string
    - as_utc: Normalize a datetime to UTC
    - dt_to_utc: Parse an ISO string to a UTC-aware datetime
    - dt_utc_date: UTC calendar date of an ISO timestamp
    - dt_from_epoch_ms: Convert a millisecond epoch to a UTC datetime
    - dt_seconds_until: Whole seconds remaining until a target (rounded up)
"""

from __future__ import annotations

from datetime import UTC, date, datetime
import logging
import math

# Module-level logger (no HA dependency)
_LOGGER = logging.getLogger(__name__)


# ==============================================================================
# Current Time
# ==============================================================================


def dt_now_utc() -> datetime:
    """Return the current datetime in UTC (timezone-aware)."""
    return datetime.now(UTC)


def dt_now_iso(now: datetime | None = None) -> str:
    """Return the given datetime (default: now) as a UTC ISO string."""
    return as_utc(now or dt_now_utc()).isoformat()


# ==============================================================================
# Conversion / Parsing
# ==============================================================================


def as_utc(dt_obj: datetime) -> datetime:
    """Convert a datetime to UTC timezone.

    Naive datetimes are assumed to already be UTC.
    """
    if dt_obj.tzinfo is None:
        return dt_obj.replace(tzinfo=UTC)
    return dt_obj.astimezone(UTC)


def dt_to_utc(dt_str: str | None) -> datetime | None:
    """Parse an ISO datetime string and convert it to UTC.

    Args:
        dt_str: ISO 8601 string ("2025-04-07T14:30:00Z", "2025-04-07T14:30:00+02:00",
            naive strings are treated as UTC), or None

    Returns:
        UTC-aware datetime, or None if the input is empty or unparsable.
    """
    if not dt_str or not isinstance(dt_str, str):
        return None
    try:
        parsed = datetime.fromisoformat(dt_str)
    except ValueError:
        _LOGGER.debug("Unparsable timestamp ignored: %s", dt_str)
        return None
    return as_utc(parsed)


def dt_utc_date(dt_str: str | None) -> date | None:
    """Return the UTC calendar date of an ISO timestamp, or None."""
    parsed = dt_to_utc(dt_str)
    return parsed.date() if parsed else None


def dt_from_epoch_ms(epoch_ms: float) -> datetime:
    """Convert milliseconds since the Unix epoch to a UTC datetime."""
    return datetime.fromtimestamp(epoch_ms / 1000, tz=UTC)


# ==============================================================================
# Countdown
# ==============================================================================


def dt_seconds_until(target: datetime | None, now: datetime) -> int:
    """Return whole seconds from now until target, rounded up, never negative."""
    if target is None:
        return 0
    remaining = (target - now).total_seconds()
    if remaining <= 0:
        return 0
    return math.ceil(remaining)

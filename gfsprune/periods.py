# SPDX-License-Identifier: LGPL-2.1-only
# Copyright (c) 2026 Akshat Kotpalliwar (alias IntegerAlex)

"""
Calendar period keys for GFS grouping.

Weeks follow ISO-8601 (Monday start, week 1 holds the year's first
Thursday) and everything is computed in UTC.
"""

from datetime import datetime, UTC
from typing import NamedTuple


class WeekKey(NamedTuple):
    """ISO week-numbering year and week (1-53)."""

    year: int
    week: int

    def __str__(self) -> str:
        return f"{self.year}-W{self.week:02d}"


class MonthKey(NamedTuple):
    """UTC calendar year and month (1-12)."""

    year: int
    month: int

    def __str__(self) -> str:
        return f"{self.year}-{self.month:02d}"


def to_utc(instant: datetime) -> datetime:
    """Return ``instant`` in UTC. Naive datetimes are taken to be UTC already."""
    if instant.tzinfo is None:
        return instant.replace(tzinfo=UTC)
    return instant.astimezone(UTC)


def parse_timestamp(value: str) -> datetime:
    """
    Parse an ISO-8601 timestamp into a UTC-aware datetime.

    Accepts the ``Z`` suffix written by manifest producers.

    Raises:
        ValueError: If the string is not a valid ISO-8601 timestamp
    """
    return to_utc(datetime.fromisoformat(value))


def iso_week_key(instant: datetime) -> WeekKey:
    """
    Get the ISO-8601 week containing ``instant`` (UTC).

    The last days of December can belong to week 1 of the next year and
    the first days of January to week 52/53 of the previous one, e.g.
    2025-12-29 -> (2026, 1) and 2021-01-01 -> (2020, 53).
    """
    iso = to_utc(instant).date().isocalendar()
    return WeekKey(iso.year, iso.week)


def month_period(instant: datetime) -> MonthKey:
    """Get the UTC (year, month) of ``instant``."""
    utc = to_utc(instant)
    return MonthKey(utc.year, utc.month)


def month_key(instant: datetime) -> str:
    """Get the ``YYYY-MM`` month key of ``instant`` (UTC)."""
    return str(month_period(instant))

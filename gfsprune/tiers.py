# SPDX-License-Identifier: LGPL-2.1-only
# Copyright (c) 2026 Akshat Kotpalliwar (alias IntegerAlex)

"""
GFS Tier Classifier - Grandfather-Father-Son retention tiers.

Classification is a pure function of the backup set and the tier sizes:
the same inputs always yield the same tiers, whatever order the backups
arrive in. Passes run in priority order and each pass only sees backups
that no earlier pass claimed:

1. daily   - the newest N backups
2. weekly  - the oldest backup of each ISO week, newest weeks first
3. monthly - the oldest backup of each month, newest months first
4. prunable - everything left over
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, FrozenSet, Iterable, List, Sequence, Tuple

import structlog

from gfsprune.config import TierConfig
from gfsprune.periods import iso_week_key, month_period, parse_timestamp, to_utc

logger = structlog.get_logger()


class Tier(str, Enum):
    """Retention tier of a single backup."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    PRUNABLE = "prunable"

    @property
    def priority(self) -> int:
        """monthly > weekly > daily > prunable."""
        return _TIER_PRIORITY[self]


_TIER_PRIORITY = {
    Tier.PRUNABLE: 0,
    Tier.DAILY: 1,
    Tier.WEEKLY: 2,
    Tier.MONTHLY: 3,
}

EXCEEDS_RETENTION = "exceeds retention"


@dataclass(frozen=True)
class BackupRecord:
    """A backup as seen by the classifier: identifier plus creation instant."""

    id: str
    timestamp: datetime

    def __post_init__(self) -> None:
        # Naive and aware instants must stay comparable
        object.__setattr__(self, "timestamp", to_utc(self.timestamp))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BackupRecord":
        """Build a record from ``{"id": ..., "timestamp": "<ISO-8601>"}``."""
        timestamp = data["timestamp"]
        if isinstance(timestamp, str):
            timestamp = parse_timestamp(timestamp)
        return cls(id=str(data["id"]), timestamp=timestamp)


@dataclass(frozen=True)
class Classification:
    """Tier assignment for one backup, with a human-readable reason."""

    backup: BackupRecord
    tier: Tier
    reason: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "id": self.backup.id,
            "timestamp": self.backup.timestamp.isoformat(),
            "tier": self.tier.value,
            "reason": self.reason,
        }


# Identical instants are ordered by identifier
def _sort_key(backup: BackupRecord) -> Tuple[datetime, str]:
    return (backup.timestamp, backup.id)


def _newest_first(backups: Iterable[BackupRecord]) -> List[BackupRecord]:
    return sorted(backups, key=_sort_key, reverse=True)


def _claim_newest(
    ordered: Sequence[BackupRecord],
    count: int,
) -> Tuple[FrozenSet[BackupRecord], List[Classification]]:
    """Daily pass: the first ``count`` backups of the newest-first order."""
    claimed = ordered[: max(count, 0)]
    reason = f"newest {count}"
    return (
        frozenset(claimed),
        [Classification(b, Tier.DAILY, reason) for b in claimed],
    )


def _claim_oldest_per_period(
    ordered: Sequence[BackupRecord],
    period_of: Callable[[datetime], Tuple[int, int]],
    limit: int,
    tier: Tier,
    label: str,
) -> Tuple[FrozenSet[BackupRecord], List[Classification]]:
    """
    Weekly/monthly pass.

    Groups ``ordered`` by period, takes the oldest backup of each period as
    its candidate and promotes the candidates of the ``limit`` most recent
    periods.
    """
    candidates: Dict[Tuple[int, int], BackupRecord] = {}
    for backup in ordered:
        period = period_of(backup.timestamp)
        current = candidates.get(period)
        if current is None or _sort_key(backup) < _sort_key(current):
            candidates[period] = backup

    promoted = sorted(candidates.items(), reverse=True)[: max(limit, 0)]
    return (
        frozenset(backup for _, backup in promoted),
        [Classification(backup, tier, f"{label} {period}") for period, backup in promoted],
    )


def _without(
    ordered: Sequence[BackupRecord],
    claimed: FrozenSet[BackupRecord],
) -> List[BackupRecord]:
    return [b for b in ordered if b not in claimed]


def classify(
    backups: Iterable[BackupRecord],
    config: TierConfig,
) -> List[Classification]:
    """
    Classify backups into GFS tiers.

    Args:
        backups: Backup records to classify (any order; ids must be unique)
        config: Number of daily, weekly and monthly periods to retain

    Returns:
        One Classification per input backup, newest first
    """
    ordered = _newest_first(backups)
    if not ordered:
        return []

    daily_claimed, daily = _claim_newest(ordered, config.daily)
    remaining = _without(ordered, daily_claimed)

    weekly_claimed, weekly = _claim_oldest_per_period(
        remaining, iso_week_key, config.weekly, Tier.WEEKLY, "week"
    )
    remaining = _without(remaining, weekly_claimed)

    monthly_claimed, monthly = _claim_oldest_per_period(
        remaining, month_period, config.monthly, Tier.MONTHLY, "month"
    )
    remaining = _without(remaining, monthly_claimed)

    prunable = [Classification(b, Tier.PRUNABLE, EXCEEDS_RETENTION) for b in remaining]

    result = daily + weekly + monthly + prunable
    result.sort(key=lambda c: _sort_key(c.backup), reverse=True)

    logger.debug(
        "backups_classified",
        total=len(result),
        daily=len(daily),
        weekly=len(weekly),
        monthly=len(monthly),
        prunable=len(prunable),
    )

    return result

# SPDX-License-Identifier: LGPL-2.1-only
# Copyright (c) 2026 Akshat Kotpalliwar (alias IntegerAlex)

"""
Prune selection - which backups may actually be deleted.

Both policies honour a minimum-retention floor: at least ``min_keep``
backups survive in total. The floor only ever declines deletions; it never
changes a backup's tier.
"""

from datetime import datetime, UTC
from typing import Iterable, List

from gfsprune.config import TierConfig
from gfsprune.periods import to_utc
from gfsprune.tiers import BackupRecord, Classification, Tier, classify


def _oldest_first(classified: Iterable[Classification]) -> List[Classification]:
    return sorted(
        classified,
        key=lambda c: (c.backup.timestamp, c.backup.id),
    )


def select_prunable(
    backups: Iterable[BackupRecord],
    config: TierConfig,
    min_keep: int,
) -> List[Classification]:
    """
    Get the GFS-prunable backups that can be deleted without breaching ``min_keep``.

    Tiered backups count towards the floor but are never deleted. When the
    floor forces some prunable backups to stay, the newest ones stay.

    Args:
        backups: Backup records
        config: GFS tier sizes
        min_keep: Minimum total number of backups to keep (0 = no floor)

    Returns:
        Prunable classifications, oldest first
    """
    backups = list(backups)
    max_to_prune = max(0, len(backups) - min_keep)
    if max_to_prune == 0:
        return []

    prunable = [c for c in classify(backups, config) if c.tier is Tier.PRUNABLE]
    return _oldest_first(prunable)[:max_to_prune]


def backup_age_days(timestamp: datetime, now: datetime | None = None) -> int:
    """Whole days elapsed between ``timestamp`` and ``now``."""
    now = to_utc(now) if now else datetime.now(UTC)
    return (now - to_utc(timestamp)).days


def select_expired(
    backups: Iterable[BackupRecord],
    retention_days: int,
    min_keep: int,
    now: datetime | None = None,
) -> List[Classification]:
    """
    Age-based retention used when GFS is disabled.

    A backup expires once it is more than ``retention_days`` whole days
    old, except that the newest ``min_keep`` backups are always kept.

    Returns:
        Expired classifications (tier ``prunable``), oldest first
    """
    ordered = sorted(backups, key=lambda b: (b.timestamp, b.id), reverse=True)
    if len(ordered) <= min_keep:
        return []

    now = to_utc(now) if now else datetime.now(UTC)
    reason = f"older than {retention_days} days"

    expired = [
        Classification(backup, Tier.PRUNABLE, reason)
        for backup in ordered[min_keep:]
        if backup_age_days(backup.timestamp, now) > retention_days
    ]
    return _oldest_first(expired)

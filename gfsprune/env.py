# SPDX-License-Identifier: LGPL-2.1-only
# Copyright (c) 2026 Akshat Kotpalliwar (alias IntegerAlex)

"""
Environment-based configuration helpers and retention profiles.

These helpers are small, convenient wrappers around create_config() and
RetentionConfig.with_updates(). They make it easy to:

- Build a configuration from environment variables
- Apply ready-made retention profiles
"""

from __future__ import annotations

import os

from gfsprune.builder import create_config
from gfsprune.config import PruneMode, RetentionConfig, TierConfig
from gfsprune.errors import (
    explain_invalid_count_env,
    explain_invalid_mode_env,
    explain_missing_backup_dir_env,
)
from gfsprune.exceptions import ConfigurationError

ENV_PREFIX = "GFSPRUNE_"


def _getenv(key: str) -> str | None:
    return os.getenv(ENV_PREFIX + key)


def _parse_mode(value: str | None) -> PruneMode:
    if not value:
        return PruneMode.DRY_RUN
    try:
        return PruneMode(value.lower())
    except ValueError as exc:
        raise ConfigurationError(explain_invalid_mode_env(value)) from exc


def _parse_count(key: str, default: int) -> int:
    value = _getenv(key)
    if not value:
        return default
    try:
        count = int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(explain_invalid_count_env(ENV_PREFIX + key, value)) from exc
    if count < 0:
        raise ConfigurationError(explain_invalid_count_env(ENV_PREFIX + key, value))
    return count


def _parse_gfs() -> TierConfig | None:
    enabled = _getenv("GFS_ENABLED")

    # GFS is only used when explicitly enabled
    if not enabled or enabled.strip().lower() != "true":
        return None

    return TierConfig(
        daily=_parse_count("GFS_DAILY", 7),
        weekly=_parse_count("GFS_WEEKLY", 4),
        monthly=_parse_count("GFS_MONTHLY", 12),
    )


def create_config_from_env() -> RetentionConfig:
    """
    Create a RetentionConfig from environment variables.

    Required:
        - GFSPRUNE_BACKUP_DIR: Directory holding one subdirectory per backup

    Optional environment variables:
        - GFSPRUNE_MODE: 'dry_run' | 'execute' (default: dry_run)
        - GFSPRUNE_RETENTION_DAYS: Expiry age for age-based retention (default: 30)
        - GFSPRUNE_MIN_KEEP: Backups that always survive (default: 7)
        - GFSPRUNE_GFS_ENABLED: 'true' to use GFS tiers instead of age
        - GFSPRUNE_GFS_DAILY: Newest backups to keep (default: 7)
        - GFSPRUNE_GFS_WEEKLY: ISO weeks to keep (default: 4)
        - GFSPRUNE_GFS_MONTHLY: Months to keep (default: 12)
    """

    backup_dir = _getenv("BACKUP_DIR")
    if not backup_dir:
        raise ConfigurationError(explain_missing_backup_dir_env())

    return create_config(
        backup_dir,
        mode=_parse_mode(_getenv("MODE")),
        retention_days=_parse_count("RETENTION_DAYS", 30),
        min_keep=_parse_count("MIN_KEEP", 7),
        gfs=_parse_gfs(),
    )


# ============================================================================
# Profiles
# ============================================================================

def safe_defaults(config: RetentionConfig) -> RetentionConfig:
    """
    Apply conservative, safety-first defaults.

    - Always use DRY_RUN mode
    - Keep at least 7 backups
    """

    return config.with_updates(
        mode=PruneMode.DRY_RUN,
        min_keep=max(config.min_keep, 7),
    )


def aggressive_cleanup(config: RetentionConfig) -> RetentionConfig:
    """
    Apply a more aggressive cleanup profile.

    - EXECUTE mode (actual deletions)
    - Safety floor capped at 3 backups
    """

    return config.with_updates(
        mode=PruneMode.EXECUTE,
        min_keep=min(config.min_keep, 3),
    )


def long_term_archive(config: RetentionConfig) -> RetentionConfig:
    """
    Apply a long-term archival profile.

    - DRY_RUN mode by default
    - GFS enabled, keeping at least 24 monthly periods
    """

    tiers = config.gfs or TierConfig()
    return config.with_updates(
        mode=PruneMode.DRY_RUN,
        gfs=TierConfig(
            daily=tiers.daily,
            weekly=tiers.weekly,
            monthly=max(tiers.monthly, 24),
        ),
    )

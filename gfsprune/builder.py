# SPDX-License-Identifier: LGPL-2.1-only
# Copyright (c) 2026 Akshat Kotpalliwar (alias IntegerAlex)

"""
gfsprune Builder - Functional builder pattern for configuration.

This module provides pure functions for building RetentionConfig objects.
Each function takes a config dict and returns a new dict with the
modification applied (immutable updates).
"""

from pathlib import Path
from typing import Any, Callable, Dict

import structlog

from gfsprune.config import PruneMode, RetentionConfig, TierConfig

logger = structlog.get_logger()

# Type alias for builder functions
ConfigDict = Dict[str, Any]
BuilderFunc = Callable[[ConfigDict], ConfigDict]


def create_empty_config() -> ConfigDict:
    """
    Create an initial empty configuration dictionary.

    Returns:
        Dict with default values for all configuration fields
    """
    return {
        "backup_dir": None,
        "mode": PruneMode.DRY_RUN,
        "retention_days": 30,
        "min_keep": 7,
        "gfs": None,
    }


def with_backup_dir(config: ConfigDict, backup_dir: Path | str) -> ConfigDict:
    """
    Set the directory holding one subdirectory per backup.

    Args:
        config: Current configuration dictionary
        backup_dir: Backup root directory

    Returns:
        New configuration dictionary with backup_dir set
    """
    return {**config, "backup_dir": Path(backup_dir)}


def with_gfs_tiers(
    config: ConfigDict,
    daily: int = 7,
    weekly: int = 4,
    monthly: int = 12,
) -> ConfigDict:
    """
    Enable GFS retention with the given number of periods per tier.

    Args:
        config: Current configuration dictionary
        daily: Newest backups to keep
        weekly: ISO weeks to keep one backup for
        monthly: Months to keep one backup for

    Returns:
        New configuration dictionary with GFS enabled
    """
    return {**config, "gfs": TierConfig(daily=daily, weekly=weekly, monthly=monthly)}


def disable_gfs(config: ConfigDict) -> ConfigDict:
    """
    Fall back to age-based retention.

    Args:
        config: Current configuration dictionary

    Returns:
        New configuration dictionary with GFS disabled
    """
    return {**config, "gfs": None}


def keep_at_least(config: ConfigDict, count: int) -> ConfigDict:
    """
    Set the minimum number of backups that always survive a prune.

    Args:
        config: Current configuration dictionary
        count: Safety floor (0 = no floor)

    Returns:
        New configuration dictionary with min_keep set
    """
    if count < 0:
        raise ValueError(f"min_keep must be >= 0, got {count}")
    return {**config, "min_keep": count}


def retain_days(config: ConfigDict, days: int) -> ConfigDict:
    """
    Set the age after which backups expire under the age-based policy.

    Args:
        config: Current configuration dictionary
        days: Age in whole days

    Returns:
        New configuration dictionary with retention period set
    """
    if days < 0:
        raise ValueError(f"retention days must be >= 0, got {days}")
    return {**config, "retention_days": days}


def dry_run_mode(config: ConfigDict) -> ConfigDict:
    """
    Set mode to dry-run (report only, no deletions).

    This is the default mode. Use this explicitly for clarity.
    """
    return {**config, "mode": PruneMode.DRY_RUN}


def execute_mode(config: ConfigDict) -> ConfigDict:
    """
    Set mode to execute.

    WARNING: This enables actual deletion of backup directories!
    """
    logger.warning("execute_mode_enabled", message="Prune runs will delete backups")
    return {**config, "mode": PruneMode.EXECUTE}


def build_config(config_dict: ConfigDict) -> RetentionConfig:
    """
    Validate and build an immutable RetentionConfig from a configuration dictionary.

    Args:
        config_dict: Configuration dictionary built using builder functions

    Returns:
        Validated, immutable RetentionConfig instance

    Raises:
        ConfigurationError: If validation fails
    """
    if not config_dict.get("backup_dir"):
        from gfsprune.exceptions import ConfigurationError

        raise ConfigurationError("backup_dir is required")

    return RetentionConfig(**config_dict)


def pipe(*funcs: BuilderFunc) -> BuilderFunc:
    """
    Compose multiple builder functions into a single function.

    This allows a more readable pipeline style:

        config = pipe(
            lambda c: with_backup_dir(c, "/var/backups/app"),
            lambda c: with_gfs_tiers(c, daily=7, weekly=4, monthly=12),
            execute_mode,
        )(create_empty_config())
    """

    def composed(config: ConfigDict) -> ConfigDict:
        result = config
        for func in funcs:
            result = func(result)
        return result

    return composed


def build_from_steps(*steps: BuilderFunc) -> RetentionConfig:
    """
    Build config by applying a sequence of builder functions.

    This is a convenience function that combines pipe() and build_config().
    """
    return build_config(pipe(*steps)(create_empty_config()))


def create_config(
    backup_dir: Path | str,
    *,
    mode: str | PruneMode = "dry_run",
    retention_days: int = 30,
    min_keep: int = 7,
    gfs: TierConfig | Dict[str, int] | bool | None = None,
) -> RetentionConfig:
    """
    Create retention configuration from simple parameters.

    This is the recommended user-facing API for creating configurations.

    Args:
        backup_dir: Directory holding one subdirectory per backup (required)
        mode: "dry_run" or "execute" (default: "dry_run")
        retention_days: Expiry age for the age-based policy (default: 30)
        min_keep: Backups that always survive (default: 7)
        gfs: GFS tiers as a TierConfig, a dict like
             {"daily": 7, "weekly": 4, "monthly": 12}, True for the default
             tiers, or None/False for age-based retention

    Returns:
        Validated, immutable RetentionConfig instance

    Example:
        config = create_config(
            "/var/backups/app",
            gfs={"daily": 7, "weekly": 4, "monthly": 12},
            min_keep=3,
        )
    """
    config_dict = with_backup_dir(create_empty_config(), backup_dir)
    config_dict = retain_days(config_dict, retention_days)
    config_dict = keep_at_least(config_dict, min_keep)

    if isinstance(gfs, TierConfig):
        config_dict = {**config_dict, "gfs": gfs}
    elif isinstance(gfs, dict):
        config_dict = with_gfs_tiers(config_dict, **gfs)
    elif gfs is True:
        config_dict = with_gfs_tiers(config_dict)

    mode_value = mode.value if isinstance(mode, PruneMode) else str(mode).lower()
    if mode_value == PruneMode.EXECUTE.value:
        config_dict = execute_mode(config_dict)
    else:
        config_dict = dry_run_mode(config_dict)

    return build_config(config_dict)

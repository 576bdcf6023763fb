# SPDX-License-Identifier: LGPL-2.1-only
# Copyright (c) 2026 Akshat Kotpalliwar (alias IntegerAlex)

"""
Configuration Tests - frozen config, builder functions, environment loading.
"""

import dataclasses
from pathlib import Path

import pytest

from gfsprune.builder import (
    build_config,
    build_from_steps,
    create_config,
    create_empty_config,
    disable_gfs,
    execute_mode,
    keep_at_least,
    pipe,
    retain_days,
    with_backup_dir,
    with_gfs_tiers,
)
from gfsprune.config import PruneMode, RetentionConfig, TierConfig
from gfsprune.env import (
    aggressive_cleanup,
    create_config_from_env,
    long_term_archive,
    safe_defaults,
)
from gfsprune.exceptions import ConfigurationError


# ============================================================================
# Frozen configuration
# ============================================================================

def test_tier_config_defaults():
    tiers = TierConfig()
    assert (tiers.daily, tiers.weekly, tiers.monthly) == (7, 4, 12)
    assert tiers.total == 23


def test_negative_tier_rejected():
    with pytest.raises(ConfigurationError) as exc_info:
        TierConfig(daily=-1, weekly=4, monthly=-2)

    errors = exc_info.value.details["errors"]
    assert len(errors) == 2
    assert "daily" in errors[0]


def test_config_is_frozen(temp_dir: Path):
    config = RetentionConfig(backup_dir=temp_dir)
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.min_keep = 0


def test_config_collects_all_errors(temp_dir: Path):
    with pytest.raises(ConfigurationError) as exc_info:
        RetentionConfig(backup_dir=temp_dir, retention_days=-1, min_keep=-3)

    assert len(exc_info.value.details["errors"]) == 2


def test_with_updates_returns_new_config(temp_dir: Path):
    config = RetentionConfig(backup_dir=temp_dir)
    updated = config.with_updates(gfs=TierConfig(daily=1, weekly=1, monthly=1))

    assert config.gfs is None
    assert updated.gfs_enabled
    assert updated.backup_dir == temp_dir


# ============================================================================
# Builder
# ============================================================================

def test_builder_pipeline(temp_dir: Path):
    config = build_config(
        pipe(
            lambda c: with_backup_dir(c, temp_dir),
            lambda c: with_gfs_tiers(c, daily=3, weekly=2, monthly=6),
            lambda c: keep_at_least(c, 4),
        )(create_empty_config())
    )

    assert config.gfs == TierConfig(daily=3, weekly=2, monthly=6)
    assert config.min_keep == 4
    assert config.mode is PruneMode.DRY_RUN


def test_build_from_steps(temp_dir: Path):
    config = build_from_steps(
        lambda c: with_backup_dir(c, str(temp_dir)),
        lambda c: retain_days(c, 14),
        execute_mode,
    )

    assert config.backup_dir == temp_dir
    assert config.retention_days == 14
    assert config.mode is PruneMode.EXECUTE
    assert not config.gfs_enabled


def test_disable_gfs():
    config = disable_gfs(with_gfs_tiers(create_empty_config()))
    assert config["gfs"] is None


def test_build_requires_backup_dir():
    with pytest.raises(ConfigurationError):
        build_config(create_empty_config())


def test_builder_rejects_negative_floor():
    with pytest.raises(ValueError):
        keep_at_least(create_empty_config(), -1)


def test_create_config_with_gfs_dict(temp_dir: Path):
    config = create_config(temp_dir, gfs={"daily": 5, "weekly": 3, "monthly": 6}, min_keep=2)

    assert config.gfs == TierConfig(daily=5, weekly=3, monthly=6)
    assert config.min_keep == 2
    assert config.mode is PruneMode.DRY_RUN


def test_create_config_default_tiers_and_mode(temp_dir: Path):
    config = create_config(temp_dir, gfs=True, mode="EXECUTE")

    assert config.gfs == TierConfig()
    assert config.mode is PruneMode.EXECUTE


# ============================================================================
# Environment
# ============================================================================

@pytest.fixture
def clean_env(monkeypatch):
    for key in (
        "BACKUP_DIR",
        "MODE",
        "RETENTION_DAYS",
        "MIN_KEEP",
        "GFS_ENABLED",
        "GFS_DAILY",
        "GFS_WEEKLY",
        "GFS_MONTHLY",
    ):
        monkeypatch.delenv(f"GFSPRUNE_{key}", raising=False)
    return monkeypatch


def test_env_requires_backup_dir(clean_env):
    with pytest.raises(ConfigurationError) as exc_info:
        create_config_from_env()

    assert "GFSPRUNE_BACKUP_DIR" in str(exc_info.value)


def test_env_defaults(clean_env, temp_dir: Path):
    clean_env.setenv("GFSPRUNE_BACKUP_DIR", str(temp_dir))
    config = create_config_from_env()

    assert config.backup_dir == temp_dir
    assert config.mode is PruneMode.DRY_RUN
    assert config.retention_days == 30
    assert config.min_keep == 7
    assert config.gfs is None


def test_env_gfs_enabled(clean_env, temp_dir: Path):
    clean_env.setenv("GFSPRUNE_BACKUP_DIR", str(temp_dir))
    clean_env.setenv("GFSPRUNE_GFS_ENABLED", "TRUE")
    clean_env.setenv("GFSPRUNE_GFS_DAILY", "3")
    clean_env.setenv("GFSPRUNE_MIN_KEEP", "2")
    clean_env.setenv("GFSPRUNE_MODE", "execute")
    config = create_config_from_env()

    assert config.gfs == TierConfig(daily=3, weekly=4, monthly=12)
    assert config.min_keep == 2
    assert config.mode is PruneMode.EXECUTE


def test_env_gfs_ignored_unless_true(clean_env, temp_dir: Path):
    clean_env.setenv("GFSPRUNE_BACKUP_DIR", str(temp_dir))
    clean_env.setenv("GFSPRUNE_GFS_ENABLED", "yes")

    assert create_config_from_env().gfs is None


@pytest.mark.parametrize("value", ["-1", "seven", "1.5"])
def test_env_rejects_bad_counts(clean_env, temp_dir: Path, value: str):
    clean_env.setenv("GFSPRUNE_BACKUP_DIR", str(temp_dir))
    clean_env.setenv("GFSPRUNE_GFS_ENABLED", "true")
    clean_env.setenv("GFSPRUNE_GFS_WEEKLY", value)

    with pytest.raises(ConfigurationError) as exc_info:
        create_config_from_env()

    assert "GFSPRUNE_GFS_WEEKLY" in str(exc_info.value)


def test_env_rejects_unknown_mode(clean_env, temp_dir: Path):
    clean_env.setenv("GFSPRUNE_BACKUP_DIR", str(temp_dir))
    clean_env.setenv("GFSPRUNE_MODE", "audit_only")

    with pytest.raises(ConfigurationError):
        create_config_from_env()


# ============================================================================
# Profiles
# ============================================================================

def test_safe_defaults_profile(temp_dir: Path):
    config = create_config(temp_dir, mode="execute", min_keep=2)
    safe = safe_defaults(config)

    assert safe.mode is PruneMode.DRY_RUN
    assert safe.min_keep == 7


def test_aggressive_cleanup_profile(temp_dir: Path):
    config = aggressive_cleanup(create_config(temp_dir, min_keep=10))

    assert config.mode is PruneMode.EXECUTE
    assert config.min_keep == 3


def test_long_term_archive_profile(temp_dir: Path):
    config = long_term_archive(create_config(temp_dir, gfs={"daily": 2, "weekly": 1, "monthly": 6}))

    assert config.gfs == TierConfig(daily=2, weekly=1, monthly=24)
    assert config.mode is PruneMode.DRY_RUN

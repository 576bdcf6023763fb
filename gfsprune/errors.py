# SPDX-License-Identifier: LGPL-2.1-only
# Copyright (c) 2026 Akshat Kotpalliwar (alias IntegerAlex)

"""
Human-friendly error message helpers for gfsprune.

These helpers centralize wording for common configuration errors so that
all modules present consistent, actionable messages.
"""


def explain_missing_backup_dir_env() -> str:
    """
    Explain that the backup directory environment variable is missing.
    """

    return (
        "Backup directory is not configured. "
        "Set the GFSPRUNE_BACKUP_DIR environment variable or pass backup_dir=... to create_config()."
    )


def explain_invalid_count_env(name: str, value: str | None) -> str:
    """
    Explain that an integer count variable (days, min keep, tier size) is invalid.
    """

    return (
        f"Invalid {name} value: {value!r}. "
        "It must be a non-negative integer."
    )


def explain_invalid_mode_env(value: str | None) -> str:
    """
    Explain that GFSPRUNE_MODE is invalid.
    """

    return (
        f"Invalid GFSPRUNE_MODE value: {value!r}. "
        "Expected one of: 'dry_run' or 'execute'."
    )


def explain_negative_tier(tier: str, value: int) -> str:
    """
    Explain that a GFS tier size is negative.
    """

    return (
        f"GFS {tier} must be a non-negative integer, got {value}. "
        "Use 0 to disable the tier."
    )

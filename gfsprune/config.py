# SPDX-License-Identifier: LGPL-2.1-only
# Copyright (c) 2026 Akshat Kotpalliwar (alias IntegerAlex)

"""
gfsprune Configuration - Immutable configuration data structures.

All configuration is frozen (immutable) after creation so that a prune
run always sees the same tier sizes and safety floor it was started with.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import List

from gfsprune.errors import explain_negative_tier


class PruneMode(str, Enum):
    """Prune execution mode."""

    DRY_RUN = "dry_run"  # Report only, no deletions
    EXECUTE = "execute"  # Delete backup directories


@dataclass(frozen=True)
class TierConfig:
    """
    Number of periods to retain per GFS tier.

    Each count is a number of periods (days, ISO weeks, months), not a
    number of backups. A count of 0 disables that tier.
    """

    daily: int = 7
    weekly: int = 4
    monthly: int = 12

    def __post_init__(self) -> None:
        errors: List[str] = []
        for name in ("daily", "weekly", "monthly"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                errors.append(f"GFS {name} must be an integer, got {value!r}")
            elif value < 0:
                errors.append(explain_negative_tier(name, value))

        if errors:
            from gfsprune.exceptions import ConfigurationError

            raise ConfigurationError(
                "GFS tier configuration is invalid",
                details={"errors": errors},
            )

    @property
    def total(self) -> int:
        """Upper bound on the number of backups kept by tiers."""
        return self.daily + self.weekly + self.monthly


@dataclass(frozen=True)
class RetentionConfig:
    """
    Immutable configuration for backup retention.

    When ``gfs`` is None the legacy age-based policy applies
    (``retention_days`` plus ``min_keep``); otherwise GFS tiers decide and
    ``min_keep`` acts as the safety floor.
    """

    # Required: directory holding one subdirectory per backup
    backup_dir: Path

    # Execution mode (default: dry_run for safety)
    mode: PruneMode = PruneMode.DRY_RUN

    # Age in days after which a backup expires (age-based policy only)
    retention_days: int = 30

    # Minimum number of backups that always survive a prune
    min_keep: int = 7

    # GFS tier sizes; None disables GFS
    gfs: TierConfig | None = field(default=None)

    def __post_init__(self) -> None:
        """Validate configuration after creation."""
        errors: List[str] = []

        if not self.backup_dir:
            errors.append("backup_dir is required")
        else:
            object.__setattr__(self, "backup_dir", Path(self.backup_dir))

        if self.retention_days < 0:
            errors.append(f"retention_days must be >= 0, got {self.retention_days}")

        if self.min_keep < 0:
            errors.append(f"min_keep must be >= 0, got {self.min_keep}")

        if not isinstance(self.mode, PruneMode):
            errors.append(f"Invalid mode: {self.mode!r}")

        if errors:
            from gfsprune.exceptions import ConfigurationError

            raise ConfigurationError(
                "Configuration validation failed",
                details={"errors": errors},
            )

    @property
    def gfs_enabled(self) -> bool:
        return self.gfs is not None

    def with_updates(self, **kwargs) -> "RetentionConfig":
        """
        Create a new config with updated values.

        Since the config is frozen, this creates a new instance.
        """
        return replace(self, **kwargs)

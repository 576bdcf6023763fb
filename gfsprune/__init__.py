# SPDX-License-Identifier: LGPL-2.1-only
# Copyright (c) 2026 Akshat Kotpalliwar (alias IntegerAlex)

"""
gfsprune - Grandfather-Father-Son retention for backup sets.

Classifies backups into daily, weekly and monthly tiers, selects the ones
that may be deleted under a minimum-retention floor, and prunes backup
directories (dry-run by default). Package name: gfsprune.
"""

__version__ = "0.1.0"

# Pure retention core
from gfsprune.periods import iso_week_key, month_key
from gfsprune.tiers import BackupRecord, Classification, Tier, classify
from gfsprune.prune import select_expired, select_prunable

# Configuration creation (user-facing API)
from gfsprune.config import PruneMode, RetentionConfig, TierConfig
from gfsprune.builder import create_config
from gfsprune.env import (
    create_config_from_env,
    safe_defaults,
    aggressive_cleanup,
    long_term_archive,
)

# Orchestration
from gfsprune.core import (
    PruneResult,
    list_backups,
    load_manifests,
    plan_prune,
    run_prune,
)

__all__ = [
    # Version
    "__version__",
    # Core
    "iso_week_key",
    "month_key",
    "BackupRecord",
    "Classification",
    "Tier",
    "classify",
    "select_prunable",
    "select_expired",
    # Configuration
    "PruneMode",
    "RetentionConfig",
    "TierConfig",
    "create_config",
    "create_config_from_env",
    "safe_defaults",
    "aggressive_cleanup",
    "long_term_archive",
    # Orchestration
    "PruneResult",
    "list_backups",
    "load_manifests",
    "plan_prune",
    "run_prune",
]

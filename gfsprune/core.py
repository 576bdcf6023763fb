# SPDX-License-Identifier: LGPL-2.1-only
# Copyright (c) 2026 Akshat Kotpalliwar (alias IntegerAlex)

"""
gfsprune Core - Orchestration around the retention classifier.

Lists backup manifests, decides which backups to prune (GFS tiers or the
legacy age-based policy) and deletes the backup directories in execute
mode. Everything defaults to dry-run.
"""

import asyncio
import shutil
from dataclasses import dataclass, field
from datetime import datetime, UTC
from typing import Any, Dict, List, Sequence

import structlog
from ulid import ULID

from gfsprune.config import PruneMode, RetentionConfig
from gfsprune.exceptions import PruneError
from gfsprune.manifest import BackupManifest, backup_path, list_manifests
from gfsprune.prune import select_expired, select_prunable
from gfsprune.tiers import Classification, classify

logger = structlog.get_logger()


@dataclass
class PruneResult:
    """Result of a prune run."""

    operation_id: str  # ULID
    mode: str
    policy: str  # "gfs" or "age"
    total_backups: int
    pruned: List[str] = field(default_factory=list)
    kept: List[str] = field(default_factory=list)
    reasons: Dict[str, str] = field(default_factory=dict)
    errors: List[str] = field(default_factory=list)
    duration_seconds: float = 0.0

    @property
    def dry_run(self) -> bool:
        return self.mode == PruneMode.DRY_RUN.value

    @property
    def success(self) -> bool:
        return not self.errors

    def to_dict(self) -> Dict[str, Any]:
        return {
            "operation_id": self.operation_id,
            "mode": self.mode,
            "dry_run": self.dry_run,
            "policy": self.policy,
            "total_backups": self.total_backups,
            "pruned": self.pruned,
            "kept": self.kept,
            "reasons": self.reasons,
            "errors": self.errors,
            "success": self.success,
            "duration_seconds": self.duration_seconds,
        }


def policy_name(config: RetentionConfig) -> str:
    return "gfs" if config.gfs_enabled else "age"


def plan_prune(
    config: RetentionConfig,
    manifests: Sequence[BackupManifest],
    now: datetime | None = None,
) -> List[Classification]:
    """
    Decide which backups to prune, without touching the filesystem.

    Args:
        config: Retention configuration
        manifests: All known backup manifests
        now: Reference time for the age-based policy

    Returns:
        Classifications of the backups to delete, oldest first
    """
    records = [m.to_record() for m in manifests]

    if config.gfs is not None:
        return select_prunable(records, config.gfs, config.min_keep)

    return select_expired(records, config.retention_days, config.min_keep, now)


async def load_manifests(config: RetentionConfig) -> List[BackupManifest]:
    """
    List the manifests under the configured backup root, newest first.

    Raises:
        PruneError: If the backup root exists but is not a directory
    """
    if config.backup_dir.exists() and not config.backup_dir.is_dir():
        raise PruneError(
            f"Backup root is not a directory: {config.backup_dir}",
            details={"backup_dir": str(config.backup_dir)},
        )

    return await list_manifests(config.backup_dir)


async def list_backups(config: RetentionConfig) -> List[Dict[str, Any]]:
    """
    List backups newest first, annotated with their GFS tier when enabled.

    Returns:
        Manifest dicts; with GFS each carries ``gfs_tier: {tier, reason}``

    Raises:
        PruneError: If the backup root exists but is not a directory
    """
    manifests = await load_manifests(config)

    if config.gfs is None:
        return [m.to_dict() for m in manifests]

    tiers = {
        c.backup.id: {"tier": c.tier.value, "reason": c.reason}
        for c in classify((m.to_record() for m in manifests), config.gfs)
    }
    return [{**m.to_dict(), "gfs_tier": tiers[m.id]} for m in manifests]


async def run_prune(
    config: RetentionConfig,
    *,
    dry_run: bool | None = None,
    now: datetime | None = None,
) -> PruneResult:
    """
    Run a prune over the configured backup directory.

    Individual delete failures are recorded in ``errors`` and do not stop
    the run.

    Args:
        config: Retention configuration
        dry_run: Override the configured mode (None = use config.mode)
        now: Reference time for the age-based policy

    Returns:
        PruneResult with pruned and kept backup ids

    Raises:
        PruneError: If the backup root exists but is not a directory
    """
    if dry_run is None:
        dry_run = config.mode == PruneMode.DRY_RUN
    mode = PruneMode.DRY_RUN if dry_run else PruneMode.EXECUTE

    operation_id = str(ULID())
    start_time = datetime.now(UTC)
    policy = policy_name(config)

    logger.info(
        "prune_started",
        operation_id=operation_id,
        mode=mode.value,
        policy=policy,
        backup_dir=str(config.backup_dir),
    )

    manifests = await load_manifests(config)
    to_prune = plan_prune(config, manifests, now)

    logger.info(
        "prune_planned",
        operation_id=operation_id,
        total=len(manifests),
        to_prune=len(to_prune),
    )

    result = PruneResult(
        operation_id=operation_id,
        mode=mode.value,
        policy=policy,
        total_backups=len(manifests),
        reasons={c.backup.id: c.reason for c in to_prune},
    )

    for classification in to_prune:
        backup_id = classification.backup.id

        if dry_run:
            result.pruned.append(backup_id)
            logger.info(
                "backup_would_prune",
                operation_id=operation_id,
                backup_id=backup_id,
                reason=classification.reason,
            )
            continue

        try:
            await _delete_backup(config, backup_id)
            result.pruned.append(backup_id)
            logger.info(
                "backup_deleted",
                operation_id=operation_id,
                backup_id=backup_id,
                reason=classification.reason,
            )
        except (OSError, PruneError) as e:
            result.errors.append(f"Failed to delete {backup_id}: {e}")
            logger.error(
                "backup_delete_failed",
                operation_id=operation_id,
                backup_id=backup_id,
                error=str(e),
            )

    # Failed deletions survive; keep the listing order
    pruned = set(result.pruned)
    result.kept = [m.id for m in manifests if m.id not in pruned]

    result.duration_seconds = (datetime.now(UTC) - start_time).total_seconds()

    logger.info(
        "prune_completed",
        operation_id=operation_id,
        pruned=len(result.pruned),
        kept=len(result.kept),
        errors=len(result.errors),
        duration=result.duration_seconds,
    )

    return result


async def _delete_backup(config: RetentionConfig, backup_id: str) -> None:
    """
    Remove a backup directory off the event loop.

    Raises:
        PruneError: If the path is not a direct child of the backup root
    """
    path = backup_path(config.backup_dir, backup_id)
    if path.resolve().parent != config.backup_dir.resolve():
        raise PruneError(
            f"Refusing to delete outside the backup root: {path}",
            details={"backup_id": backup_id, "backup_dir": str(config.backup_dir)},
        )

    await asyncio.to_thread(shutil.rmtree, path)

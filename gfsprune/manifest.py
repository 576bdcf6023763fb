# SPDX-License-Identifier: LGPL-2.1-only
# Copyright (c) 2026 Akshat Kotpalliwar (alias IntegerAlex)

"""
Backup Manifest Store - One manifest.json per backup directory.

Layout::

    <backup_dir>/
        backup-2025-12-28T12-00-00/
            manifest.json
            ...backup payload...
"""

import json
from dataclasses import asdict, dataclass, field
from datetime import datetime, UTC
from pathlib import Path
from typing import Any, Dict, List

import aiofiles
import structlog

from gfsprune import __version__
from gfsprune.exceptions import ManifestError
from gfsprune.periods import parse_timestamp, to_utc
from gfsprune.tiers import BackupRecord

logger = structlog.get_logger()

MANIFEST_FILENAME = "manifest.json"

MANIFEST_STATUSES = ("complete", "failed", "partial")


@dataclass
class BackupManifest:
    """Metadata describing a single backup."""

    id: str
    timestamp: str  # ISO-8601, UTC
    version: str = __version__
    status: str = "complete"
    encrypted: bool = False
    duration: float = 0.0
    database: Dict[str, Any] = field(default_factory=dict)
    directories: List[Dict[str, Any]] = field(default_factory=list)
    offsite: Dict[str, Any] | None = None

    @property
    def created_at(self) -> datetime:
        return parse_timestamp(self.timestamp)

    def to_record(self) -> BackupRecord:
        return BackupRecord(id=self.id, timestamp=self.created_at)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        if data["offsite"] is None:
            del data["offsite"]
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BackupManifest":
        """
        Build a manifest from parsed JSON.

        Raises:
            ManifestError: If required fields are missing or invalid
        """
        try:
            # Reject timestamps the classifier could not order
            timestamp = str(data["timestamp"])
            parse_timestamp(timestamp)

            manifest = cls(
                id=str(data["id"]),
                timestamp=timestamp,
                version=str(data.get("version", __version__)),
                status=str(data.get("status", "complete")),
                encrypted=bool(data.get("encrypted", False)),
                duration=float(data.get("duration", 0.0)),
                database=dict(data.get("database") or {}),
                directories=list(data.get("directories") or []),
                offsite=data.get("offsite"),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ManifestError(
                f"Invalid manifest: {e}",
                details={"id": data.get("id") if isinstance(data, dict) else None},
            )

        if manifest.status not in MANIFEST_STATUSES:
            raise ManifestError(
                f"Invalid manifest status: {manifest.status}",
                details={"id": manifest.id},
            )

        return manifest


def generate_backup_id(now: datetime | None = None) -> str:
    """
    Generate a backup ID from a timestamp.

    2025-12-28T12:00:00Z becomes ``backup-2025-12-28T12-00-00``.
    """
    now = to_utc(now) if now else datetime.now(UTC)
    return "backup-" + now.strftime("%Y-%m-%dT%H-%M-%S")


def create_manifest(
    *,
    database: Dict[str, Any] | None = None,
    directories: List[Dict[str, Any]] | None = None,
    encrypted: bool = False,
    duration: float = 0.0,
    status: str = "complete",
    offsite: Dict[str, Any] | None = None,
    now: datetime | None = None,
) -> BackupManifest:
    """
    Create a new manifest stamped with the current time.

    Args:
        database: Database dump details (name, size, checksum, ...)
        directories: Archived directory details
        encrypted: Whether the payload is encrypted
        duration: Backup duration in seconds
        status: One of complete, failed, partial
        offsite: Offsite sync details
        now: Override the creation time (tests)

    Returns:
        New BackupManifest
    """
    now = to_utc(now) if now else datetime.now(UTC)
    return BackupManifest(
        id=generate_backup_id(now),
        timestamp=now.isoformat().replace("+00:00", "Z"),
        status=status,
        encrypted=encrypted,
        duration=duration,
        database=database or {},
        directories=directories or [],
        offsite=offsite,
    )


def backup_path(backup_dir: Path, backup_id: str) -> Path:
    """Directory holding the backup ``backup_id``."""
    return Path(backup_dir) / backup_id


def backup_exists(backup_dir: Path, backup_id: str) -> bool:
    """Check whether a backup has a manifest on disk."""
    return (backup_path(backup_dir, backup_id) / MANIFEST_FILENAME).exists()


async def save_manifest(backup_dir: Path, manifest: BackupManifest) -> Path:
    """
    Write a manifest into ``<backup_dir>/<manifest.id>/manifest.json``.

    Returns:
        Path to the written manifest
    """
    subdir = backup_path(backup_dir, manifest.id)
    manifest_path = subdir / MANIFEST_FILENAME

    try:
        subdir.mkdir(parents=True, exist_ok=True)
        async with aiofiles.open(manifest_path, "w", encoding="utf-8") as f:
            await f.write(json.dumps(manifest.to_dict(), indent=2))
    except OSError as e:
        raise ManifestError(
            f"Failed to write manifest: {e}",
            details={"id": manifest.id, "path": str(manifest_path)},
        )

    logger.debug("manifest_saved", backup_id=manifest.id, path=str(manifest_path))
    return manifest_path


async def load_manifest(manifest_path: Path) -> BackupManifest:
    """
    Load a manifest file.

    Raises:
        ManifestError: If the file is missing or not a valid manifest
    """
    try:
        async with aiofiles.open(manifest_path, "r", encoding="utf-8") as f:
            content = await f.read()
    except FileNotFoundError:
        raise ManifestError(
            f"Manifest not found: {manifest_path}",
            details={"path": str(manifest_path)},
        )
    except (OSError, UnicodeDecodeError) as e:
        raise ManifestError(
            f"Failed to read manifest: {e}",
            details={"path": str(manifest_path)},
        )

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ManifestError(
            f"Manifest is not valid JSON: {e}",
            details={"path": str(manifest_path)},
        )

    if not isinstance(data, dict):
        raise ManifestError(
            "Manifest must be a JSON object",
            details={"path": str(manifest_path)},
        )

    return BackupManifest.from_dict(data)


async def list_manifests(backup_dir: Path) -> List[BackupManifest]:
    """
    List all manifests in a backup directory, newest first.

    Entries that are not directories or have no manifest are ignored;
    unreadable manifests, and manifests whose id is not the name of the
    directory holding them, are logged and skipped.
    """
    backup_dir = Path(backup_dir)
    if not backup_dir.exists():
        return []

    manifests: List[BackupManifest] = []

    for entry in sorted(backup_dir.iterdir()):
        if not entry.is_dir():
            continue

        manifest_path = entry / MANIFEST_FILENAME
        if not manifest_path.exists():
            continue

        try:
            manifest = await load_manifest(manifest_path)
        except ManifestError as e:
            logger.warning("manifest_skipped", path=str(manifest_path), error=e.message)
            continue

        # The id names the directory a prune deletes
        if manifest.id != entry.name:
            logger.warning(
                "manifest_skipped",
                path=str(manifest_path),
                error=f"Manifest id {manifest.id!r} does not match directory {entry.name!r}",
            )
            continue

        manifests.append(manifest)

    manifests.sort(key=lambda m: (m.created_at, m.id), reverse=True)
    return manifests


async def get_latest_manifest(backup_dir: Path) -> BackupManifest | None:
    """Get the most recent manifest, or None when there are no backups."""
    manifests = await list_manifests(backup_dir)
    return manifests[0] if manifests else None

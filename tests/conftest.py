# SPDX-License-Identifier: LGPL-2.1-only
# Copyright (c) 2026 Akshat Kotpalliwar (alias IntegerAlex)

"""
Test fixtures for gfsprune tests.

Provides temporary backup directories, backup record factories and
test configuration helpers.
"""

import json
import os
import tempfile
from datetime import datetime, timedelta, UTC
from pathlib import Path
from typing import Generator, List

import pytest

from gfsprune.tiers import BackupRecord

# Set test environment variables
os.environ["GFSPRUNE_ADMIN_API_KEY"] = "test-api-key-12345"


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def backup_dir(temp_dir: Path) -> Path:
    """Create an empty backup root directory."""
    path = temp_dir / "backups"
    path.mkdir()
    return path


@pytest.fixture
def test_config(backup_dir: Path):
    """Create a GFS test configuration in dry-run mode."""
    from gfsprune.config import PruneMode, RetentionConfig, TierConfig

    return RetentionConfig(
        backup_dir=backup_dir,
        mode=PruneMode.DRY_RUN,
        min_keep=0,
        gfs=TierConfig(daily=2, weekly=1, monthly=1),
    )


def utc(value: str) -> datetime:
    """Parse ``YYYY-MM-DD`` or a full ISO timestamp as UTC."""
    if "T" not in value:
        value += "T00:00:00"
    return datetime.fromisoformat(value).replace(tzinfo=UTC)


def record(value: str, backup_id: str | None = None) -> BackupRecord:
    """Build a backup record; the id defaults to the date."""
    return BackupRecord(id=backup_id or f"backup-{value}", timestamp=utc(value))


def records_every(start: str, days: int, count: int) -> List[BackupRecord]:
    """``count`` records going back from ``start`` in steps of ``days``."""
    first = utc(start)
    return [
        BackupRecord(
            id=f"backup-{(first - timedelta(days=days * i)).date().isoformat()}",
            timestamp=first - timedelta(days=days * i),
        )
        for i in range(count)
    ]


def write_backup(backup_dir: Path, backup_id: str, timestamp: str) -> Path:
    """Write a minimal backup directory with a manifest and a payload file."""
    path = backup_dir / backup_id
    path.mkdir(parents=True)
    (path / "manifest.json").write_text(
        json.dumps(
            {
                "id": backup_id,
                "timestamp": timestamp,
                "version": "0.1.0",
                "status": "complete",
                "encrypted": False,
                "duration": 1.5,
                "database": {"name": "app", "size": 10, "checksum": "abc"},
                "directories": [],
            }
        )
    )
    (path / "database.sql.gz").write_bytes(b"dump")
    return path

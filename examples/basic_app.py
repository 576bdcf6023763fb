# SPDX-License-Identifier: LGPL-2.1-only
# Copyright (c) 2026 Akshat Kotpalliwar (alias IntegerAlex)

"""
Example FastAPI Application with gfsprune admin endpoints.

Run with:
    uvicorn examples.basic_app:app --reload

Environment variables:
    GFSPRUNE_BACKUP_DIR: Directory holding one subdirectory per backup
    GFSPRUNE_ADMIN_API_KEY: API key for admin endpoints
"""

import os
from pathlib import Path

from fastapi import FastAPI

from gfsprune.builder import (
    build_config,
    create_empty_config,
    dry_run_mode,
    keep_at_least,
    with_backup_dir,
    with_gfs_tiers,
)
from gfsprune.integrations.fastapi import register_gfsprune_routes

app = FastAPI(
    title="Backup retention admin",
    description="Example application exposing GFS backup retention",
    version="1.0.0",
)


def create_retention_config():
    """
    Create retention configuration using the functional builder pattern.
    """
    backup_dir = Path(os.getenv("GFSPRUNE_BACKUP_DIR", "/var/backups/app"))

    config = create_empty_config()
    config = with_backup_dir(config, backup_dir)

    # One backup per day for a week, per week for a month, per month for a year
    config = with_gfs_tiers(config, daily=7, weekly=4, monthly=12)

    # Never go below three backups, whatever the tiers say
    config = keep_at_least(config, 3)

    config = dry_run_mode(config)

    return build_config(config)


register_gfsprune_routes(app, create_retention_config())


@app.get("/")
async def root():
    return {"status": "ok", "admin": "/admin/backups"}

# SPDX-License-Identifier: LGPL-2.1-only
# Copyright (c) 2026 Akshat Kotpalliwar (alias IntegerAlex)

"""
gfsprune FastAPI Integration - Admin endpoints for backup retention.

This module provides:
- Protected admin endpoints for listing backups with their GFS tiers
- Prune planning (no side effects) and prune runs (dry-run by default)
"""

import os

import structlog
from fastapi import Depends, FastAPI, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from gfsprune.config import RetentionConfig
from gfsprune.core import list_backups, load_manifests, plan_prune, policy_name, run_prune
from gfsprune.exceptions import PruneError

logger = structlog.get_logger()

# Security
security = HTTPBearer(auto_error=False)


async def verify_api_key(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> bool:
    """
    Verify API key from Authorization header.

    The API key is read from the GFSPRUNE_ADMIN_API_KEY environment variable.
    Requests must include: Authorization: Bearer <api_key>

    Raises:
        HTTPException: If API key is missing or invalid
    """
    api_key = os.getenv("GFSPRUNE_ADMIN_API_KEY")

    if not api_key:
        raise HTTPException(
            status_code=500,
            detail="GFSPRUNE_ADMIN_API_KEY environment variable not set",
        )

    if not credentials:
        raise HTTPException(
            status_code=401,
            detail="Authorization header required",
        )

    if credentials.credentials != api_key:
        raise HTTPException(
            status_code=403,
            detail="Invalid API key",
        )

    return True


def register_gfsprune_routes(
    app: FastAPI,
    config: RetentionConfig,
    prefix: str = "/admin/backups",
) -> None:
    """
    Register backup retention admin endpoints on a FastAPI app.

    All endpoints require Bearer token authentication.

    Args:
        app: FastAPI application
        config: Retention configuration
        prefix: URL prefix for endpoints (default: /admin/backups)
    """
    app.state.gfsprune_config = config

    @app.get(prefix, dependencies=[Depends(verify_api_key)])
    async def get_backups() -> list:
        """
        List backups newest first, with GFS tier and reason when enabled.
        """
        try:
            return await list_backups(config)
        except PruneError as e:
            raise HTTPException(status_code=500, detail=e.message)

    @app.get(f"{prefix}/plan", dependencies=[Depends(verify_api_key)])
    async def get_prune_plan() -> dict:
        """
        Show which backups the next prune would delete, and why.
        """
        try:
            manifests = await load_manifests(config)
        except PruneError as e:
            raise HTTPException(status_code=500, detail=e.message)

        to_prune = plan_prune(config, manifests)
        return {
            "policy": policy_name(config),
            "total_backups": len(manifests),
            "to_prune": [c.to_dict() for c in to_prune],
        }

    @app.post(f"{prefix}/prune", dependencies=[Depends(verify_api_key)])
    async def trigger_prune(dry_run: bool = True) -> dict:
        """
        Run a prune.

        Args:
            dry_run: If true (default), only report what would be deleted
        """
        logger.info("prune_requested", dry_run=dry_run)
        try:
            result = await run_prune(config, dry_run=dry_run)
        except PruneError as e:
            raise HTTPException(status_code=500, detail=e.message)
        return result.to_dict()

    @app.get(f"{prefix}/config", dependencies=[Depends(verify_api_key)])
    async def get_config() -> dict:
        """
        Get current retention configuration.
        """
        return {
            "backup_dir": str(config.backup_dir),
            "mode": config.mode.value,
            "policy": policy_name(config),
            "retention_days": config.retention_days,
            "min_keep": config.min_keep,
            "gfs": (
                {
                    "daily": config.gfs.daily,
                    "weekly": config.gfs.weekly,
                    "monthly": config.gfs.monthly,
                }
                if config.gfs
                else None
            ),
        }


def get_gfsprune_config(app: FastAPI) -> RetentionConfig:
    """
    Get the retention config from a FastAPI app.

    Useful for accessing config in custom endpoints.

    Raises:
        RuntimeError: If routes were not registered
    """
    config = getattr(app.state, "gfsprune_config", None)
    if not config:
        raise RuntimeError("gfsprune not initialized. Call register_gfsprune_routes first.")
    return config

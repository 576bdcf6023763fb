# SPDX-License-Identifier: LGPL-2.1-only
# Copyright (c) 2026 Akshat Kotpalliwar (alias IntegerAlex)

"""
Framework Integrations - FastAPI admin endpoints.
"""

from gfsprune.integrations.fastapi import (
    get_gfsprune_config,
    register_gfsprune_routes,
    verify_api_key,
)

__all__ = [
    "get_gfsprune_config",
    "register_gfsprune_routes",
    "verify_api_key",
]

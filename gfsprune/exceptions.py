# SPDX-License-Identifier: LGPL-2.1-only
# Copyright (c) 2026 Akshat Kotpalliwar (alias IntegerAlex)

"""
gfsprune Exceptions - Custom exceptions for the gfsprune package.
"""


class GFSPruneError(Exception):
    """Base exception for all gfsprune errors."""

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(GFSPruneError):
    """Raised when configuration is invalid."""

    pass


class ManifestError(GFSPruneError):
    """Raised when a backup manifest cannot be read or written."""

    pass


class PruneError(GFSPruneError):
    """Raised when a prune run cannot proceed."""

    pass

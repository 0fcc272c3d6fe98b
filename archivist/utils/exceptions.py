"""
Custom exception hierarchy for the RPG Archivist graph view service.

This module defines all custom exceptions used throughout the application,
providing clear error categorization and better error handling.
"""

from __future__ import annotations

from typing import Optional


class ArchivistError(Exception):
    """Base exception for all RPG Archivist errors."""

    pass


class ConfigurationError(ArchivistError):
    """Raised when configuration is invalid or missing."""

    pass


class ValidationError(ArchivistError):
    """Raised when data validation fails."""

    pass


class GraphFetchError(ArchivistError):
    """Raised when relationship data cannot be loaded from the backend."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class AuthenticationError(GraphFetchError):
    """Raised when the backend rejects the configured credentials."""

    pass


class GraphSchemaError(GraphFetchError):
    """Raised when a backend payload does not match the graph schema."""

    pass


class LayoutError(ArchivistError):
    """Raised when a layout strategy cannot be resolved."""

    pass

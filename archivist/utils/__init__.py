"""
Utility modules for the RPG Archivist graph view service.

This package provides common exceptions, constants, and logging
configuration used throughout the application.
"""

from __future__ import annotations

from .constants import (
    DEFAULT_GRAPH_DEPTH,
    DEFAULT_GRID_SPACING,
    DEFAULT_LOG_LEVEL,
    DEFAULT_REQUEST_TIMEOUT,
    GRAPH_LOAD_ERROR_MESSAGE,
    MAX_GRAPH_DEPTH,
)
from .exceptions import (
    ArchivistError,
    AuthenticationError,
    ConfigurationError,
    GraphFetchError,
    GraphSchemaError,
    LayoutError,
    ValidationError,
)
from .logging_config import RequestIDFilter, get_logger, setup_logging

__all__ = [
    # Constants
    "DEFAULT_GRAPH_DEPTH",
    "DEFAULT_GRID_SPACING",
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_REQUEST_TIMEOUT",
    "GRAPH_LOAD_ERROR_MESSAGE",
    "MAX_GRAPH_DEPTH",
    # Exceptions
    "ArchivistError",
    "AuthenticationError",
    "ConfigurationError",
    "GraphFetchError",
    "GraphSchemaError",
    "LayoutError",
    "ValidationError",
    # Logging
    "RequestIDFilter",
    "get_logger",
    "setup_logging",
]

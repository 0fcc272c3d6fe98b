"""
Application constants for the RPG Archivist graph view service.

This module contains magic numbers, default values, and configuration
constants used throughout the application.
"""

from __future__ import annotations

# Backend API configuration
DEFAULT_API_BASE_URL = "http://localhost:4000/api"
DEFAULT_REQUEST_TIMEOUT = 30  # seconds

# Graph query defaults
DEFAULT_GRAPH_DEPTH = 1
MIN_GRAPH_DEPTH = 1
MAX_GRAPH_DEPTH = 5  # Upper bound of the depth slider

# Layout configuration
DEFAULT_GRID_SPACING = 200  # pixels between grid cells
DEFAULT_LAYOUT_SEED = 42  # Fixed seed keeps force layouts reproducible
DEFAULT_CANVAS_SCALE = 600  # Half-width of the canvas used by force layouts
DEFAULT_LAYER_SPACING = 180  # Vertical distance between hierarchy layers
DEFAULT_RING_SPACING = 220  # Radius step between radial rings

# Visualization defaults
DEFAULT_NODE_COLOR = "#cccccc"
DEFAULT_EDGE_COLOR = "#cccccc"
DEFAULT_NODE_ICON = "help_outline"
DEFAULT_EDGE_ICON = "link"
FLOW_EDGE_TYPE = "relationship"
FLOW_FALLBACK_NODE_TYPE = "entity"

# User-facing messages
GRAPH_LOAD_ERROR_MESSAGE = "Failed to load relationship data. Please try again."

# Logging configuration
DEFAULT_LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] - %(message)s"

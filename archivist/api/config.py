"""API configuration for the graph view service."""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv

from archivist.utils.constants import (
    DEFAULT_API_BASE_URL,
    DEFAULT_GRAPH_DEPTH,
    DEFAULT_GRID_SPACING,
    DEFAULT_LAYOUT_SEED,
    DEFAULT_LOG_LEVEL,
    DEFAULT_REQUEST_TIMEOUT,
    MAX_GRAPH_DEPTH,
)
from archivist.utils.exceptions import ConfigurationError

load_dotenv()

logger = logging.getLogger(__name__)


class LocalConfig:
    """Environment-based configuration.

    Covers:
    - Campaign backend API (base URL, token, timeout)
    - Graph defaults (depth, layout spacing and seed)
    - Security (CORS)
    - Logging
    """

    # Environment mode
    ENVIRONMENT = os.getenv(
        "ENVIRONMENT", "development"
    )  # development, staging, production

    # Campaign backend API
    ARCHIVIST_API_URL = os.getenv("ARCHIVIST_API_URL", DEFAULT_API_BASE_URL).rstrip("/")
    ARCHIVIST_API_TOKEN = os.getenv("ARCHIVIST_API_TOKEN", "")
    GRAPH_REQUEST_TIMEOUT = float(
        os.getenv("GRAPH_REQUEST_TIMEOUT", str(DEFAULT_REQUEST_TIMEOUT))
    )

    # Graph defaults
    GRAPH_DEFAULT_DEPTH = int(os.getenv("GRAPH_DEFAULT_DEPTH", str(DEFAULT_GRAPH_DEPTH)))
    GRAPH_MAX_DEPTH = int(os.getenv("GRAPH_MAX_DEPTH", str(MAX_GRAPH_DEPTH)))
    GRAPH_GRID_SPACING = float(
        os.getenv("GRAPH_GRID_SPACING", str(DEFAULT_GRID_SPACING))
    )
    GRAPH_LAYOUT_SEED = int(os.getenv("GRAPH_LAYOUT_SEED", str(DEFAULT_LAYOUT_SEED)))

    # Public URL of the mind map page, used as the base of share links
    MIND_MAP_PUBLIC_URL = os.getenv(
        "MIND_MAP_PUBLIC_URL", "http://localhost:3000/mind-map"
    )

    # CORS settings
    ALLOWED_ORIGINS = [
        origin.strip()
        for origin in os.getenv(
            "ALLOWED_ORIGINS", "http://localhost:3000,http://localhost:5173"
        ).split(",")
        if origin.strip()
    ]

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL)

    @classmethod
    def validate_production_config(cls) -> None:
        """Validate that required configuration is set for production deployment.

        Raises:
            ConfigurationError: If required production configuration is missing.
        """
        if cls.ENVIRONMENT != "production":
            logger.info(
                f"Running in {cls.ENVIRONMENT} mode - skipping strict validation"
            )
            return

        errors = []

        if not cls.ARCHIVIST_API_URL:
            errors.append("ARCHIVIST_API_URL must be set in production")
        elif not cls.ARCHIVIST_API_URL.startswith("https://"):
            errors.append("ARCHIVIST_API_URL must use https in production")

        if not cls.ALLOWED_ORIGINS or cls.ALLOWED_ORIGINS == ["*"]:
            errors.append(
                "ALLOWED_ORIGINS must be explicitly configured (wildcards not allowed in production)"
            )

        if cls.GRAPH_DEFAULT_DEPTH < 1 or cls.GRAPH_DEFAULT_DEPTH > cls.GRAPH_MAX_DEPTH:
            errors.append(
                f"GRAPH_DEFAULT_DEPTH must be between 1 and {cls.GRAPH_MAX_DEPTH}"
            )

        if errors:
            error_msg = "Production configuration validation failed:\n" + "\n".join(
                f"  - {e}" for e in errors
            )
            logger.error(error_msg)
            raise ConfigurationError(error_msg)

        logger.info("Production configuration validated successfully")

    @staticmethod
    def mask_sensitive(value: str, visible_chars: int = 4) -> str:
        """Mask sensitive configuration values for logging.

        Args:
            value: The sensitive value to mask
            visible_chars: Number of characters to show at the end

        Returns:
            Masked string like "***xyz" or "***" if value is too short
        """
        if not value or len(value) <= visible_chars:
            return "***"
        return "*" * (len(value) - visible_chars) + value[-visible_chars:]


config = LocalConfig()

# Validate production configuration on module import
if config.ENVIRONMENT == "production":
    config.validate_production_config()

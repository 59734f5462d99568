"""Application-wide settings for the M3 to Snowflake converter."""

import os
from typing import Any, List


def safe_get_config(key: str, default: Any = None) -> Any:
    """Get configuration value from environment or return default."""
    return os.environ.get(f"M3_CONVERTER_{key}", default)


# App
APP_TITLE = "M3 JSON to Snowflake Converter"
APP_ICON = "❄️"

# Logging configuration
LOG_DIR = safe_get_config("LOG_DIR", "logs")
LOG_FILE = safe_get_config("LOG_FILE", "converter.log")
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_LEVEL = safe_get_config("LOG_LEVEL", "INFO")

# Target environments offered for the {{env}} placeholder
TARGET_ENVIRONMENTS: List[str] = ["DEV", "TEST", "UAT", "PROD"]
ENV_PLACEHOLDER = "{{env}}"

# Download naming
DEFAULT_DOWNLOAD_STEM = "schema"

"""
Configure logging for the application.
"""
import logging
from pathlib import Path
from typing import Optional

from common.config import LOG_DIR, LOG_FILE, LOG_FORMAT, LOG_LEVEL

ROOT_LOGGER_NAME = "common"


def setup_logging(log_dir: Optional[str] = None) -> logging.Logger:
    """
    Set up logging for the converter package.

    Streamlit reruns the entrypoint on every interaction, so handlers are only
    attached the first time this is called in a process.

    Args:
        log_dir: Directory to store log files (defaults to LOG_DIR)

    Returns:
        The package logger
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    if logger.handlers:
        return logger

    level = getattr(logging, str(LOG_LEVEL).upper(), logging.INFO)
    logger.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT)

    # Create logs directory if it doesn't exist
    directory = Path(log_dir or LOG_DIR)
    directory.mkdir(parents=True, exist_ok=True)

    file_handler = logging.FileHandler(directory / LOG_FILE)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    logger.info("Logging system initialized")
    return logger

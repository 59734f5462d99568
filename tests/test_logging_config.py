"""Test logging setup."""
import logging

import pytest

from common.config import LOG_FILE
from common.logging_config import ROOT_LOGGER_NAME, setup_logging


@pytest.fixture
def clean_logger():
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    saved = list(logger.handlers)
    logger.handlers.clear()
    yield logger
    for handler in logger.handlers:
        handler.close()
    logger.handlers[:] = saved


def test_setup_logging_creates_log_file(tmp_path, clean_logger):
    logger = setup_logging(str(tmp_path / "logs"))
    assert logger is clean_logger
    assert (tmp_path / "logs" / LOG_FILE).exists()
    assert len(logger.handlers) == 2


def test_setup_logging_is_idempotent(tmp_path, clean_logger):
    """Streamlit reruns must not stack handlers."""
    setup_logging(str(tmp_path))
    setup_logging(str(tmp_path))
    assert len(clean_logger.handlers) == 2

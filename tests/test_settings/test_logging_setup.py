"""Tests for logging setup."""

import pytest
from loguru import logger

from mcp_apiserver.utils.logging_setup import setup_logging


@pytest.fixture
def restore_logger():
    """Drop sinks added by the test."""
    yield
    logger.remove()


def test_file_sink(tmp_path, restore_logger):
    """Test messages reach the rotating log file."""
    log_dir = tmp_path / "logs"
    setup_logging("INFO", str(log_dir))

    logger.debug("debug line for file")

    log_file = log_dir / "apiserver.log"
    assert log_file.exists()
    assert "debug line for file" in log_file.read_text()


def test_console_only(tmp_path, restore_logger):
    """Test no log directory is created without log_dir."""
    setup_logging("WARNING", None)
    logger.warning("console only")
    assert list(tmp_path.iterdir()) == []

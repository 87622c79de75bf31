"""Tests for logging setup."""

import logging
from collections.abc import Generator
from pathlib import Path
from unittest.mock import patch

import pytest
from rich.logging import RichHandler

from retrolambda_runner.core.config.settings import LoggingSettings
from retrolambda_runner.core.logger.logger import get_logger, setup_logging


@pytest.fixture
def root_logger() -> Generator[logging.Logger, None, None]:
    """Stand-in root logger so pytest's own handlers are left alone."""
    logger = logging.Logger("root-under-test")
    with patch("retrolambda_runner.core.logger.logger.logging.getLogger", return_value=logger):
        yield logger
    for handler in logger.handlers:
        handler.close()


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_rich_handler(self, root_logger: logging.Logger) -> None:
        """Test the Rich console handler."""
        setup_logging(LoggingSettings(level="WARNING", use_rich=True))

        assert root_logger.level == logging.WARNING
        assert len(root_logger.handlers) == 1
        assert isinstance(root_logger.handlers[0], RichHandler)
        assert root_logger.handlers[0].console.stderr is True

    def test_plain_handler_and_file(self, root_logger: logging.Logger, temp_dir: Path) -> None:
        """Test the plain handler with a log file."""
        log_file = temp_dir / "logs" / "runner.log"
        setup_logging(LoggingSettings(level="INFO", use_rich=False, file=log_file))

        root_logger.info("hello")
        for handler in root_logger.handlers:
            handler.flush()

        assert not any(isinstance(h, RichHandler) for h in root_logger.handlers)
        assert "hello" in log_file.read_text(encoding="utf-8")

    def test_replaces_handlers(self, root_logger: logging.Logger) -> None:
        """Test that repeated setup does not stack handlers."""
        setup_logging(LoggingSettings(use_rich=False))
        setup_logging(LoggingSettings(use_rich=False))

        assert len(root_logger.handlers) == 1


class TestGetLogger:
    """Tests for get_logger."""

    def test_same_instance(self) -> None:
        """Test that loggers are cached by name."""
        assert get_logger("retrolambda_runner.a") is get_logger("retrolambda_runner.a")
        assert get_logger("retrolambda_runner.a").name == "retrolambda_runner.a"

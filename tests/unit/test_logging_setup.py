"""Tests for setup_logging handler installation."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from typing import TYPE_CHECKING

import pytest

from annotation_brackets import setup_logging
from annotation_brackets.config import AppConfig, Settings

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path


@pytest.fixture
def root_logger() -> Iterator[logging.Logger]:
    """Restore the root logger's handlers and level after the test."""
    logger = logging.getLogger()
    handlers = list(logger.handlers)
    level = logger.level
    yield logger
    for handler in list(logger.handlers):
        if handler not in handlers:
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(level)


class TestSetupLogging:
    def test_repeat_calls_do_not_duplicate_handlers(
        self, root_logger: logging.Logger, tmp_path: Path
    ) -> None:
        """A second call replaces the first call's handlers."""
        before = len(root_logger.handlers)
        settings = Settings(
            _env_file=None,  # type: ignore[call-arg]
            app=AppConfig(log_dir=tmp_path),
        )

        setup_logging(settings)
        setup_logging(settings)

        assert len(root_logger.handlers) == before + 2
        file_handlers = [
            h for h in root_logger.handlers if isinstance(h, RotatingFileHandler)
        ]
        assert len(file_handlers) == 1

    def test_log_file_written(
        self, root_logger: logging.Logger, tmp_path: Path
    ) -> None:
        settings = Settings(
            _env_file=None,  # type: ignore[call-arg]
            app=AppConfig(log_dir=tmp_path),
        )

        setup_logging(settings)

        assert (tmp_path / "annotation-brackets.log").exists()

    def test_console_only_without_log_dir(self, root_logger: logging.Logger) -> None:
        before = len(root_logger.handlers)
        settings = Settings(
            _env_file=None,  # type: ignore[call-arg]
            app=AppConfig(log_dir=None),
        )

        setup_logging(settings)

        assert len(root_logger.handlers) == before + 1

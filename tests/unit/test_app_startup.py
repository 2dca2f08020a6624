"""Tests for package-level startup helpers."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from typing import TYPE_CHECKING

import inkdown

if TYPE_CHECKING:
    from pathlib import Path


class TestVersionString:
    """Version reporting."""

    def test_version_string_starts_with_version(self) -> None:
        """The package version leads the dev version string."""
        assert inkdown.get_version_string().startswith(f"{inkdown.__version__}+")


class TestSetupLogging:
    """_setup_logging() attaches a rotating file handler."""

    def test_creates_log_dir_and_file_handler(self, tmp_path: Path) -> None:
        """The log directory is created and inkdown.log is rotated."""
        root_logger = logging.getLogger()
        before = list(root_logger.handlers)
        level = root_logger.level
        log_dir = tmp_path / "logs"

        try:
            inkdown._setup_logging(log_dir)
            added = [h for h in root_logger.handlers if h not in before]

            assert log_dir.is_dir()
            rotating = [h for h in added if isinstance(h, RotatingFileHandler)]
            assert len(rotating) == 1
            assert rotating[0].baseFilename == str(log_dir / "inkdown.log")
            assert rotating[0].backupCount == 5
        finally:
            for handler in list(root_logger.handlers):
                if handler not in before:
                    root_logger.removeHandler(handler)
                    handler.close()
            root_logger.setLevel(level)

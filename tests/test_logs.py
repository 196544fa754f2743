"""Tests for CLI logging setup."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from flatsync.cli.logs import LOG_PATH_ENV, setup_logging
from flatsync.sync.logs import TRACE, level_for_verbosity


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Drop handlers installed by setup_logging between tests."""
    yield
    flatsync_logger = logging.getLogger("flatsync")
    for handler in flatsync_logger.handlers[:]:
        flatsync_logger.removeHandler(handler)
        handler.close()
    flatsync_logger.setLevel(logging.NOTSET)


class TestLevelForVerbosity:
    """Tests for level_for_verbosity function."""

    def test_levels(self) -> None:
        """Each -v flag lowers the threshold."""
        assert level_for_verbosity(0) == logging.ERROR
        assert level_for_verbosity(1) == logging.INFO
        assert level_for_verbosity(2) == logging.DEBUG
        assert level_for_verbosity(3) == TRACE

    def test_capped(self) -> None:
        """More than three flags still means trace."""
        assert level_for_verbosity(10) == TRACE

    def test_trace_name(self) -> None:
        """TRACE is registered with the logging module."""
        assert logging.getLevelName(TRACE) == "TRACE"


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_sets_level(self) -> None:
        """Should set the flatsync logger level from verbosity."""
        logger = setup_logging(2)
        assert logger.name == "flatsync"
        assert logger.level == logging.DEBUG

    def test_does_not_duplicate_handlers(self) -> None:
        """Calling twice keeps a single stream handler."""
        setup_logging(1)
        logger = setup_logging(1)
        assert len(logger.handlers) == 1

    def test_log_file(self, tmp_path: Path) -> None:
        """Records are also written to the log file."""
        log_path = tmp_path / "flatsync.log"
        logger = setup_logging(1, log_path)

        logging.getLogger("flatsync.sync.executor").info("[ADD] Synced a.txt")
        for handler in logger.handlers:
            handler.flush()

        content = log_path.read_text()
        assert "flatsync.sync.executor - INFO - [ADD] Synced a.txt" in content

    def test_log_file_from_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """$FLATSYNC_LOG_PATH is used when no path is given."""
        log_path = tmp_path / "env.log"
        monkeypatch.setenv(LOG_PATH_ENV, str(log_path))

        logger = setup_logging(0)

        assert len(logger.handlers) == 2
        assert log_path.exists()

"""Logging setup for the flatsync CLI.

This module configures the "flatsync" logger once at process start. Sync
components receive their logger by injection and never configure logging
themselves.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

from flatsync.sync.logs import level_for_verbosity

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Optional log file, overridden by --log-file
LOG_PATH_ENV = "FLATSYNC_LOG_PATH"


def setup_logging(verbosity: int = 0, log_path: Path | None = None) -> logging.Logger:
    """Configure logging to stderr and, optionally, a file.

    Args:
        verbosity: Number of -v flags (0 = errors only, 3 = trace).
        log_path: Path to a log file. Falls back to $FLATSYNC_LOG_PATH.

    Returns:
        The configured "flatsync" logger.
    """
    formatter = logging.Formatter(LOG_FORMAT)

    root_logger = logging.getLogger("flatsync")
    root_logger.setLevel(level_for_verbosity(verbosity))

    # Running twice (e.g. in tests) must not duplicate output
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(formatter)
    root_logger.addHandler(stderr_handler)

    if log_path is None and os.environ.get(LOG_PATH_ENV):
        log_path = Path(os.environ[LOG_PATH_ENV])

    if log_path is not None:
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    return root_logger

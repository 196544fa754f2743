"""Log levels shared by the sync components.

flatsync logs at error, info, debug and trace. TRACE sits below DEBUG and is
used for per-entry listing details.
"""

from __future__ import annotations

import logging

TRACE = 5

logging.addLevelName(TRACE, "TRACE")

# Verbosity count (-v flags) -> log level
VERBOSITY_LEVELS = {
    0: logging.ERROR,
    1: logging.INFO,
    2: logging.DEBUG,
    3: TRACE,
}


def level_for_verbosity(count: int) -> int:
    """Map a -v count to a log level, capping at TRACE."""
    return VERBOSITY_LEVELS[max(0, min(count, 3))]

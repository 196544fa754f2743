"""Directory reconciliation and action execution.

Architecture:
    FileChecker → ReconciliationResult → ActionExecutor

Components:
- **FileChecker**: Lists source and destination, classifies add/delete/rewrite
- **FilenameFilter**: Include/exclude regexes over bare filenames
- **ReconciliationResult**: Drainable set of pending actions (updates, adds, deletes)
- **ActionExecutor**: Performs a bounded number of actions per call

All public symbols are re-exported here.
"""

from flatsync.sync.checker import FileChecker, reconcile
from flatsync.sync.executor import ActionExecutor
from flatsync.sync.filters import FilenameFilter, compile_patterns, is_hidden
from flatsync.sync.logs import TRACE, level_for_verbosity
from flatsync.sync.types import (
    ActionOutcome,
    ActionType,
    ChangedFileEntry,
    FileEntry,
    InvalidPatternError,
    PendingAction,
    ReconcileError,
    ReconciliationResult,
    SyncError,
)

__all__ = [
    # checker
    "FileChecker",
    "reconcile",
    # executor
    "ActionExecutor",
    # filters
    "FilenameFilter",
    "compile_patterns",
    "is_hidden",
    # logs
    "TRACE",
    "level_for_verbosity",
    # types
    "ActionOutcome",
    "ActionType",
    "ChangedFileEntry",
    "FileEntry",
    "InvalidPatternError",
    "PendingAction",
    "ReconcileError",
    "ReconciliationResult",
    "SyncError",
]

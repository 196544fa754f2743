"""Action executor applying pending actions to the destination directory.

This module provides:
- ActionExecutor: Drains a bounded number of actions from a ReconciliationResult

Every action checks its precondition before touching the filesystem:
- ADD: the destination must not already hold the file (never clobbers)
- UPDATE: the destination file must still exist (never turned into an add)
- DELETE: the destination file must still exist

Failures are logged and skipped; they never abort the remaining actions.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from flatsync.sync.types import (
    ActionOutcome,
    ActionType,
    FileEntry,
    PendingAction,
    ReconciliationResult,
)

logger = logging.getLogger(__name__)


class ActionExecutor:
    """Performs add, update and delete actions on the destination.

    Usage:
        executor = ActionExecutor(src_dir, dest_dir, max_operations=1)
        outcomes = executor.execute(results)
    """

    def __init__(
        self,
        src_dir: Path | str,
        dest_dir: Path | str,
        max_operations: int = 1,
        log: logging.Logger | None = None,
    ) -> None:
        """Initialize the executor.

        Args:
            src_dir: Directory files are copied from.
            dest_dir: Directory that gets mutated.
            max_operations: Maximum number of actions per execute() call.
            log: Logger to report through (defaults to this module's logger).
        """
        if max_operations < 1:
            raise ValueError(f"max_operations must be at least 1, got {max_operations}")
        self._src_dir = Path(src_dir)
        self._dest_dir = Path(dest_dir)
        self._max_operations = max_operations
        self._log = log or logger

    @property
    def max_operations(self) -> int:
        return self._max_operations

    def execute(self, results: ReconciliationResult) -> list[ActionOutcome]:
        """Perform up to max_operations actions from the result.

        Actions are removed from the result as they are taken, whether they
        succeed or not. Anything left over stays in the result.

        Args:
            results: Result of a reconciliation pass. The caller must not
                reuse it for another purpose afterwards.

        Returns:
            One ActionOutcome per action taken, in execution order.
        """
        outcomes: list[ActionOutcome] = []
        for _ in range(self._max_operations):
            pending = results.next_action()
            if pending is None:
                self._log.debug("No more files to work on")
                break
            self._log.debug("Processing %s for %s", pending.action.name, pending.filename)
            outcomes.append(self.apply(pending))
        return outcomes

    def apply(self, pending: PendingAction) -> ActionOutcome:
        """Perform a single action.

        Args:
            pending: Action to perform.

        Returns:
            ActionOutcome describing what happened.
        """
        if pending.action == ActionType.ADD:
            return self._add(pending.entry)
        elif pending.action == ActionType.UPDATE:
            return self._update(pending.entry)
        elif pending.action == ActionType.DELETE:
            return self._delete(pending.entry)
        raise ValueError(f"Unknown action: {pending.action!r}")

    def _add(self, entry: FileEntry) -> ActionOutcome:
        source = self._src_dir / entry.filename
        target = self._dest_dir / entry.filename

        if target.exists():
            return self._fail(ActionType.ADD, entry, f"Target file {entry.filename} already exists!")

        try:
            self._copy(source, target)
        except OSError as e:
            return self._fail(ActionType.ADD, entry, f"Error syncing {entry.filename}: {e}")

        self._log.info("[ADD] Synced %s", entry.filename)
        return ActionOutcome(ActionType.ADD, entry.filename, success=True)

    def _update(self, entry: FileEntry) -> ActionOutcome:
        source = self._src_dir / entry.filename
        target = self._dest_dir / entry.filename

        if not target.is_file():
            return self._fail(
                ActionType.UPDATE, entry, f"Target file {entry.filename} doesn't exist to overwrite!"
            )

        try:
            self._copy(source, target)
        except OSError as e:
            return self._fail(ActionType.UPDATE, entry, f"Error syncing {entry.filename}: {e}")

        self._log.info("[UPDATE] Synced %s", entry.filename)
        return ActionOutcome(ActionType.UPDATE, entry.filename, success=True)

    def _delete(self, entry: FileEntry) -> ActionOutcome:
        target = self._dest_dir / entry.filename

        if not target.is_file():
            return self._fail(
                ActionType.DELETE, entry, f"Target file {entry.filename} doesn't exist to delete!"
            )

        try:
            target.unlink()
        except OSError as e:
            return self._fail(ActionType.DELETE, entry, f"Error deleting {entry.filename}: {e}")

        self._log.info("[DELETE] Removed %s", entry.filename)
        return ActionOutcome(ActionType.DELETE, entry.filename, success=True)

    @staticmethod
    def _copy(source: Path, target: Path) -> None:
        # copyfile refuses a directory target instead of copying into it
        shutil.copyfile(source, target)
        shutil.copymode(source, target)

    def _fail(self, action: ActionType, entry: FileEntry, message: str) -> ActionOutcome:
        self._log.error(message)
        return ActionOutcome(action, entry.filename, success=False, error=message)

"""Shared types and dataclasses for sync operations.

This module provides:
- SyncError, ReconcileError, InvalidPatternError: Exception classes
- ActionType: Kind of destination mutation, ordered by priority
- FileEntry, ChangedFileEntry: Files found during a reconciliation pass
- PendingAction: An action waiting to be executed
- ReconciliationResult: Drainable output of one reconciliation pass
- ActionOutcome: Result of executing one action
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path


class SyncError(Exception):
    """Base exception for sync errors."""


class InvalidPatternError(SyncError):
    """A filter pattern is not a valid regular expression."""

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid pattern {pattern!r}: {reason}")


class ReconcileError(SyncError):
    """Listing one or both directories failed, so the pass has no result.

    Attributes:
        source_errors: Error descriptions collected for the source directory.
        destination_errors: Error descriptions collected for the destination.
    """

    def __init__(
        self,
        message: str,
        source_errors: list[str] | None = None,
        destination_errors: list[str] | None = None,
    ) -> None:
        self.source_errors = source_errors or []
        self.destination_errors = destination_errors or []
        super().__init__(message)


class ActionType(IntEnum):
    """Kind of mutation to perform on the destination directory.

    Values are ordered by priority (lower = executed first).
    """

    # Fix existing content first
    UPDATE = 10
    # Then bring in new files
    ADD = 20
    # Removals last, to keep the window with missing data short
    DELETE = 30


@dataclass(frozen=True)
class FileEntry:
    """A regular file found while listing a directory."""

    path: Path
    filename: str


@dataclass(frozen=True)
class ChangedFileEntry:
    """A file present on both sides with a different byte length.

    Attributes:
        file: The source file entry.
        old_size: Byte length in the source directory.
        new_size: Byte length in the destination directory.
    """

    file: FileEntry
    old_size: int
    new_size: int

    def __post_init__(self) -> None:
        if self.old_size == self.new_size:
            raise ValueError(f"{self.file.filename} has the same size on both sides")

    @property
    def filename(self) -> str:
        return self.file.filename


@dataclass(frozen=True)
class PendingAction:
    """An action waiting to be executed against the destination."""

    action: ActionType
    entry: FileEntry

    @property
    def filename(self) -> str:
        return self.entry.filename

    def __str__(self) -> str:
        return f"{self.action.name} {self.entry.filename}"


@dataclass
class ActionOutcome:
    """Result of executing one pending action."""

    action: ActionType
    filename: str
    success: bool
    error: str | None = None


class ReconciliationResult:
    """Pending actions produced by one reconciliation pass.

    Each collection keeps discovery order (source order for adds and
    rewrites, destination order for deletes). Actions are consumed with
    next_action() in ActionType priority order (rewrites, then adds, then
    deletes), each in discovery order. Consumed actions are removed.
    """

    def __init__(
        self,
        to_add: Iterable[FileEntry] = (),
        to_delete: Iterable[FileEntry] = (),
        to_rewrite: Iterable[ChangedFileEntry] = (),
    ) -> None:
        self._to_add: deque[FileEntry] = deque(to_add)
        self._to_delete: deque[FileEntry] = deque(to_delete)
        self._to_rewrite: deque[ChangedFileEntry] = deque(to_rewrite)

    @property
    def to_add(self) -> list[FileEntry]:
        """Files in source but not in destination."""
        return list(self._to_add)

    @property
    def to_delete(self) -> list[FileEntry]:
        """Files in destination but not in source."""
        return list(self._to_delete)

    @property
    def to_rewrite(self) -> list[ChangedFileEntry]:
        """Files on both sides whose sizes differ."""
        return list(self._to_rewrite)

    @property
    def has_pending(self) -> bool:
        """Check if there is anything left to do."""
        return bool(self._to_add or self._to_delete or self._to_rewrite)

    @property
    def pending_count(self) -> int:
        return len(self._to_add) + len(self._to_delete) + len(self._to_rewrite)

    def __len__(self) -> int:
        return self.pending_count

    def next_action(self) -> PendingAction | None:
        """Remove and return the next action to perform.

        Returns:
            The next action, or None once the result is drained.
        """
        queues: dict[ActionType, deque[FileEntry] | deque[ChangedFileEntry]] = {
            ActionType.UPDATE: self._to_rewrite,
            ActionType.ADD: self._to_add,
            ActionType.DELETE: self._to_delete,
        }
        for action in sorted(ActionType):
            queue = queues[action]
            if queue:
                item = queue.popleft()
                if isinstance(item, ChangedFileEntry):
                    item = item.file
                return PendingAction(action, item)
        return None

    def format_report(self) -> str:
        """Format the pending actions for the check command."""
        return (
            "Pending updates:\n"
            f"To add:\n{_format_names(e.filename for e in self._to_add)}\n\n"
            f"To delete:\n{_format_names(e.filename for e in self._to_delete)}\n\n"
            f"To rewrite:\n{_format_names(e.filename for e in self._to_rewrite)}"
        )

    def __str__(self) -> str:
        return self.format_report()

    def __repr__(self) -> str:
        return (
            f"ReconciliationResult(add={len(self._to_add)}, "
            f"delete={len(self._to_delete)}, rewrite={len(self._to_rewrite)})"
        )


def _format_names(names: Iterable[str]) -> str:
    listed = list(names)
    return "\n".join(listed) if listed else "None"

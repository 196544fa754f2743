"""Tests for sync types: entries, pending actions and reconciliation results."""

from __future__ import annotations

from pathlib import Path

import pytest

from flatsync.sync.types import (
    ActionType,
    ChangedFileEntry,
    FileEntry,
    InvalidPatternError,
    PendingAction,
    ReconcileError,
    ReconciliationResult,
    SyncError,
)


def entry(name: str) -> FileEntry:
    return FileEntry(path=Path("/data") / name, filename=name)


def changed(name: str, old_size: int = 1, new_size: int = 2) -> ChangedFileEntry:
    return ChangedFileEntry(file=entry(name), old_size=old_size, new_size=new_size)


class TestActionType:
    """Tests for ActionType enum."""

    def test_priority_order(self) -> None:
        """Updates run before adds, adds before deletes."""
        assert ActionType.UPDATE < ActionType.ADD < ActionType.DELETE

    def test_all_types_defined(self) -> None:
        """All expected action types should be defined."""
        assert {t.name for t in ActionType} == {"ADD", "DELETE", "UPDATE"}


class TestChangedFileEntry:
    """Tests for ChangedFileEntry dataclass."""

    def test_keeps_both_sizes(self) -> None:
        """Should carry source and destination sizes."""
        item = changed("b.txt", old_size=5, new_size=8)
        assert item.old_size == 5
        assert item.new_size == 8
        assert item.filename == "b.txt"

    def test_rejects_equal_sizes(self) -> None:
        """Equal sizes mean unchanged, not a rewrite."""
        with pytest.raises(ValueError):
            changed("b.txt", old_size=3, new_size=3)


class TestPendingAction:
    """Tests for PendingAction dataclass."""

    def test_str(self) -> None:
        """Should show action and filename."""
        action = PendingAction(ActionType.ADD, entry("a.txt"))
        assert str(action) == "ADD a.txt"
        assert action.filename == "a.txt"


class TestReconciliationResult:
    """Tests for ReconciliationResult."""

    def test_empty_result(self) -> None:
        """An empty result has nothing pending."""
        result = ReconciliationResult()
        assert not result.has_pending
        assert len(result) == 0
        assert result.next_action() is None

    def test_pending_count(self) -> None:
        """Should count every collection."""
        result = ReconciliationResult(
            to_add=[entry("a")], to_delete=[entry("b"), entry("c")], to_rewrite=[changed("d")]
        )
        assert result.has_pending
        assert result.pending_count == 4
        assert len(result) == 4

    def test_priority_order(self) -> None:
        """Rewrites are drained first, then adds, then deletes."""
        result = ReconciliationResult(
            to_add=[entry("add.txt")],
            to_delete=[entry("del.txt")],
            to_rewrite=[changed("upd.txt")],
        )

        actions = [result.next_action() for _ in range(3)]

        assert [a.action for a in actions if a] == [
            ActionType.UPDATE,
            ActionType.ADD,
            ActionType.DELETE,
        ]
        assert result.next_action() is None

    def test_drain_follows_action_type_values(self) -> None:
        """The drain order is the sorted order of the ActionType values."""
        result = ReconciliationResult(
            to_add=[entry("add.txt")],
            to_delete=[entry("del.txt")],
            to_rewrite=[changed("upd.txt")],
        )

        drained = []
        while (pending := result.next_action()) is not None:
            drained.append(pending.action)

        assert drained == sorted(ActionType, key=lambda t: t.value)

    def test_discovery_order_within_kind(self) -> None:
        """Actions of the same kind come out in discovery order."""
        result = ReconciliationResult(to_add=[entry("1"), entry("2"), entry("3")])
        names = [result.next_action().filename for _ in range(3)]  # type: ignore[union-attr]
        assert names == ["1", "2", "3"]

    def test_next_action_removes_entry(self) -> None:
        """Consumed actions no longer appear in the collections."""
        result = ReconciliationResult(to_rewrite=[changed("a"), changed("b")], to_add=[entry("c")])

        action = result.next_action()

        assert action is not None
        assert action.filename == "a"
        assert [c.filename for c in result.to_rewrite] == ["b"]
        assert [e.filename for e in result.to_add] == ["c"]
        assert result.pending_count == 2

    def test_update_action_carries_source_entry(self) -> None:
        """An update action exposes the source file entry."""
        source = entry("b.txt")
        result = ReconciliationResult(
            to_rewrite=[ChangedFileEntry(file=source, old_size=5, new_size=8)]
        )
        action = result.next_action()
        assert action == PendingAction(ActionType.UPDATE, source)

    def test_collections_are_copies(self) -> None:
        """Mutating a returned list does not change the result."""
        result = ReconciliationResult(to_add=[entry("a")])
        result.to_add.clear()
        assert result.pending_count == 1

    def test_format_report_empty(self) -> None:
        """Every section shows None when empty."""
        assert ReconciliationResult().format_report() == (
            "Pending updates:\nTo add:\nNone\n\nTo delete:\nNone\n\nTo rewrite:\nNone"
        )

    def test_format_report_lists_names(self) -> None:
        """Names are listed one per line under their section."""
        result = ReconciliationResult(
            to_add=[entry("a.txt"), entry("d.txt")],
            to_delete=[entry("c.txt")],
            to_rewrite=[changed("b.txt")],
        )
        assert str(result) == (
            "Pending updates:\n"
            "To add:\na.txt\nd.txt\n\n"
            "To delete:\nc.txt\n\n"
            "To rewrite:\nb.txt"
        )

    def test_repr(self) -> None:
        """Should summarize counts."""
        result = ReconciliationResult(to_add=[entry("a")])
        assert repr(result) == "ReconciliationResult(add=1, delete=0, rewrite=0)"


class TestErrors:
    """Tests for sync exceptions."""

    def test_reconcile_error_is_sync_error(self) -> None:
        """ReconcileError should derive from SyncError."""
        error = ReconcileError("boom", source_errors=["a"])
        assert isinstance(error, SyncError)
        assert str(error) == "boom"
        assert error.source_errors == ["a"]
        assert error.destination_errors == []

    def test_invalid_pattern_error(self) -> None:
        """InvalidPatternError should name the pattern."""
        error = InvalidPatternError("(", "missing )")
        assert isinstance(error, SyncError)
        assert error.pattern == "("
        assert "'('" in str(error)

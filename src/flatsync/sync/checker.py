"""Reconciliation engine comparing a source and a destination directory.

This module provides:
- FileChecker: Lists both directories and classifies every file
- reconcile: One-shot helper around FileChecker

Architecture:
    FileChecker is the "action producer" of a sync pass:
    1. Lists the direct children of both directories (non-recursive)
    2. Keeps regular, non-hidden files accepted by the FilenameFilter
    3. Matches files by name and compares their byte lengths
    4. Returns a ReconciliationResult for the ActionExecutor to drain

    Flow: FileChecker → ReconciliationResult → ActionExecutor

    Nothing here touches file contents or mutates the filesystem.
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Iterable
from pathlib import Path

from flatsync.sync.filters import FilenameFilter
from flatsync.sync.logs import TRACE
from flatsync.sync.types import (
    ChangedFileEntry,
    FileEntry,
    ReconcileError,
    ReconciliationResult,
)

logger = logging.getLogger(__name__)


class FileChecker:
    """Computes the actions needed to make a destination mirror a source.

    Usage:
        checker = FileChecker(src_dir, dest_dir, includes=[r"\\.txt$"])
        results = checker.reconcile()
        print(results.format_report())
    """

    def __init__(
        self,
        src_dir: Path | str,
        dest_dir: Path | str,
        includes: Iterable[str | re.Pattern[str]] = (),
        excludes: Iterable[str | re.Pattern[str]] = (),
        log: logging.Logger | None = None,
    ) -> None:
        """Initialize the checker.

        Args:
            src_dir: Directory to sync from.
            dest_dir: Directory to sync to.
            includes: Patterns a filename must all match.
            excludes: Patterns a filename must not match.
            log: Logger to report through (defaults to this module's logger).

        Raises:
            InvalidPatternError: If a pattern does not compile.
        """
        self._src_dir = Path(src_dir)
        self._dest_dir = Path(dest_dir)
        self._filter = FilenameFilter(includes, excludes)
        self._log = log or logger

    @property
    def src_dir(self) -> Path:
        return self._src_dir

    @property
    def dest_dir(self) -> Path:
        return self._dest_dir

    def reconcile(self) -> ReconciliationResult:
        """Run one reconciliation pass.

        Returns:
            ReconciliationResult with the files to add, delete and rewrite.

        Raises:
            ReconcileError: If a directory cannot be opened, or if a side
                yields no usable file and reported listing errors.
        """
        open_errors: list[str] = []
        src_listing: tuple[list[FileEntry], list[str]] = ([], [])
        dest_listing: tuple[list[FileEntry], list[str]] = ([], [])

        try:
            self._log.log(TRACE, "Src dir")
            src_listing = self._list_dir(self._src_dir)
        except OSError as e:
            open_errors.append(f"Source: {e}")

        try:
            self._log.log(TRACE, "Dest dir")
            dest_listing = self._list_dir(self._dest_dir)
        except OSError as e:
            open_errors.append(f"Destination: {e}")

        if open_errors:
            raise ReconcileError(
                "\n".join(open_errors),
                source_errors=[e for e in open_errors if e.startswith("Source")],
                destination_errors=[e for e in open_errors if e.startswith("Destination")],
            )

        src_files, src_errors = src_listing
        dest_files, dest_errors = dest_listing
        self._check_listing_errors(src_files, src_errors, dest_files, dest_errors)

        return self._diff(src_files, dest_files)

    def _check_listing_errors(
        self,
        src_files: list[FileEntry],
        src_errors: list[str],
        dest_files: list[FileEntry],
        dest_errors: list[str],
    ) -> None:
        """Fail the pass when a side has nothing usable but errors."""
        sections: list[str] = []
        failed_src: list[str] = []
        failed_dest: list[str] = []

        if not src_files and src_errors:
            sections.append("Source dir:\n" + "\n".join(src_errors))
            failed_src = src_errors
        if not dest_files and dest_errors:
            sections.append("Destination dir:\n" + "\n".join(dest_errors))
            failed_dest = dest_errors

        if sections:
            raise ReconcileError(
                "\n\n".join(sections),
                source_errors=failed_src,
                destination_errors=failed_dest,
            )

    def _diff(
        self, src_files: list[FileEntry], dest_files: list[FileEntry]
    ) -> ReconciliationResult:
        """Classify files into add, delete and rewrite."""
        to_add: list[FileEntry] = []
        to_rewrite: list[ChangedFileEntry] = []

        dest_by_name = {entry.filename: entry for entry in dest_files}
        matched: set[str] = set()

        for src in src_files:
            dest = dest_by_name.get(src.filename)
            if dest is None:
                to_add.append(src)
                continue

            # A name found on both sides is never a delete, even if skipped below
            matched.add(dest.filename)

            try:
                src_len = src.path.stat().st_size
                dest_len = dest.path.stat().st_size
            except OSError as e:
                self._log.error("Error checking len of %s: %s", src.filename, e)
                continue

            if src_len != dest_len:
                self._log.debug("%s has changed", src.filename)
                to_rewrite.append(ChangedFileEntry(file=src, old_size=src_len, new_size=dest_len))
            else:
                self._log.debug("%s are the same", src.filename)

        to_delete: list[FileEntry] = []
        for dest in dest_files:
            if dest.filename in matched:
                self._log.log(TRACE, "Ignoring dest file %s, as already checked in src", dest.filename)
            else:
                to_delete.append(dest)

        return ReconciliationResult(to_add=to_add, to_delete=to_delete, to_rewrite=to_rewrite)

    def _list_dir(self, directory: Path) -> tuple[list[FileEntry], list[str]]:
        """List the eligible files directly inside a directory.

        Args:
            directory: Directory to list.

        Returns:
            Tuple of (eligible files, per-entry error descriptions).

        Raises:
            OSError: If the directory cannot be opened.
        """
        files: list[FileEntry] = []
        errors: list[str] = []
        seen = 0

        with os.scandir(directory) as entries:
            for entry in entries:
                seen += 1
                try:
                    if not entry.is_file():
                        continue
                except OSError as e:
                    errors.append(f"{type(e).__name__}: {e}")
                    self._log.error("Error reading entry %s in %s: %s", entry.name, directory, e)
                    continue

                name = _decode_name(entry.name)
                if name is None:
                    self._log.log(TRACE, "Skipping undecodable filename in %s", directory)
                    continue

                if self._filter.accepts(name):
                    files.append(FileEntry(path=Path(entry.path), filename=name))

        self._log.log(TRACE, "Before filtering: %d files/dirs", seen)
        self._log.log(TRACE, "After filtering: %d files/dirs", len(files))
        return files, errors


def _decode_name(name: str) -> str | None:
    """Return the name if it is valid text, None otherwise.

    Undecodable bytes show up as lone surrogates (surrogateescape).
    """
    try:
        name.encode("utf-8")
    except UnicodeEncodeError:
        return None
    return name


def reconcile(
    src_dir: Path | str,
    dest_dir: Path | str,
    includes: Iterable[str | re.Pattern[str]] = (),
    excludes: Iterable[str | re.Pattern[str]] = (),
    log: logging.Logger | None = None,
) -> ReconciliationResult:
    """Run a single reconciliation pass.

    Args:
        src_dir: Directory to sync from.
        dest_dir: Directory to sync to.
        includes: Patterns a filename must all match.
        excludes: Patterns a filename must not match.
        log: Logger to report through.

    Returns:
        ReconciliationResult for the pass.

    Raises:
        ReconcileError: If listing fails.
    """
    return FileChecker(src_dir, dest_dir, includes, excludes, log=log).reconcile()

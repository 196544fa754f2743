"""Scheduler running sync passes on a timer.

This module provides:
- SyncScheduler: Runs a reconcile → execute pass, then waits before the next one
- run_pass: A single pass, usable without a scheduler

The timer for the next pass starts once the previous pass has completed, so
passes never overlap.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import TYPE_CHECKING

from apscheduler.schedulers.blocking import BlockingScheduler
from apscheduler.triggers.date import DateTrigger

from flatsync.sync.types import ReconcileError

if TYPE_CHECKING:
    from flatsync.sync.checker import FileChecker
    from flatsync.sync.executor import ActionExecutor
    from flatsync.sync.types import ActionOutcome

logger = logging.getLogger(__name__)

FORMAT_NEXT_CHECK = "%H:%M:%S"
JOB_ID = "sync_pass"


def run_pass(
    checker: FileChecker,
    executor: ActionExecutor,
    log: logging.Logger | None = None,
) -> list[ActionOutcome]:
    """Reconcile both directories and execute pending actions.

    Args:
        checker: Reconciliation engine.
        executor: Executor for the resulting actions.
        log: Logger to report through.

    Returns:
        Outcomes of the executed actions (empty if nothing ran).
    """
    log = log or logger
    try:
        results = checker.reconcile()
    except ReconcileError as e:
        log.error("%s", e)
        return []

    if not results.has_pending:
        log.info("Directories already in sync")
        return []

    log.debug("%d pending action(s): %r", results.pending_count, results)
    return executor.execute(results)


class SyncScheduler:
    """Runs sync passes until stopped.

    The first pass runs as soon as start() is called. Each pass schedules
    the next one interval_seconds after it has finished.
    """

    def __init__(
        self,
        checker: FileChecker,
        executor: ActionExecutor,
        interval_seconds: float,
        log: logging.Logger | None = None,
    ) -> None:
        """Initialize the scheduler.

        Args:
            checker: Reconciliation engine.
            executor: Executor for the resulting actions.
            interval_seconds: Pause between the end of a pass and the next one.
            log: Logger to report through.
        """
        self._checker = checker
        self._executor = executor
        self._interval = timedelta(seconds=interval_seconds)
        self._log = log or logger
        self._scheduler: BlockingScheduler | None = None

    @property
    def running(self) -> bool:
        return self._scheduler is not None

    def _sync_job(self) -> None:
        """Job function for a scheduled pass."""
        try:
            self.run_once()
        except Exception:
            self._log.exception("Error during scheduled sync pass")
        finally:
            self._schedule_next()

    def _schedule_next(self) -> None:
        if self._scheduler is None:
            return  # Stopped during the pass

        next_run = datetime.now() + self._interval
        self._scheduler.add_job(
            self._sync_job,
            trigger=DateTrigger(run_date=next_run),
            id=JOB_ID,
            name="Sync pass",
            replace_existing=True,
            misfire_grace_time=None,
        )
        self._log.info("Next check at %s", next_run.strftime(FORMAT_NEXT_CHECK))

    def run_once(self) -> list[ActionOutcome]:
        """Run a pass immediately (manual trigger).

        Returns:
            Outcomes of the executed actions.
        """
        return run_pass(self._checker, self._executor, self._log)

    def start(self) -> None:
        """Start the scheduler. Blocks until stop() is called."""
        if self._scheduler is not None:
            return  # Already running

        self._scheduler = BlockingScheduler()
        self._scheduler.add_job(
            self._sync_job,
            trigger=DateTrigger(run_date=datetime.now()),
            id=JOB_ID,
            name="Sync pass",
            replace_existing=True,
            misfire_grace_time=None,
        )
        self._log.info("Monitoring")
        self._scheduler.start()

    def stop(self) -> None:
        """Stop the scheduler."""
        if self._scheduler is not None:
            scheduler = self._scheduler
            self._scheduler = None
            if scheduler.running:
                scheduler.shutdown(wait=False)
            self._log.info("Sync scheduler stopped")

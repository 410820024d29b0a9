"""Reconciliation between the remote Vault and the local archive."""

import logging
import threading
from typing import Protocol

from schemas.issue import DailyIssue
from silent_architect.archive import ArchiveStore

from .adapter import VaultAdapter
from .outcome import GenerationResult, ReconcileReport, VaultOutcome

logger = logging.getLogger(__name__)


class IssueSource(Protocol):
    """Anything that can produce a new issue, or None on failure."""

    def generate(self) -> DailyIssue | None: ...


class Reconciler:
    """Drives pull-merge cycles and publishes new issues.

    The reconciler is the only component touching both the Vault and the
    archive. It runs:
    - ``background_sync`` once at start-up (failures are logged only);
    - ``reconcile`` whenever the archive is opened;
    - ``publish`` after each successful generation (push, no pull).

    Example:
        reconciler = Reconciler(VaultAdapter(client), ArchiveStore(storage))
        report = reconciler.reconcile()
    """

    def __init__(self, adapter: VaultAdapter, store: ArchiveStore):
        self.adapter = adapter
        self.store = store
        self._cycle_lock = threading.Lock()

    def reconcile(self) -> ReconcileReport:
        """Pull every issue from the Vault and merge it into the archive.

        Issues are saved one by one in pull order; there is no rollback if
        some saves fail.
        """
        with self._cycle_lock:
            outcome = self.adapter.pull_outcome()
            report = ReconcileReport(
                pulled=len(outcome.issues),
                success=outcome.success,
                reason=outcome.reason,
            )

            for issue in outcome.issues:
                if self.store.save(issue):
                    report.saved += 1

        if report.pulled:
            logger.info(
                f"Reconcile complete: {report.saved}/{report.pulled} issues merged"
            )
        return report

    def background_sync(self) -> ReconcileReport | None:
        """Best-effort reconcile that never raises."""
        logger.info("Starting background Vault synchronization")
        try:
            return self.reconcile()
        except Exception as e:
            logger.warning(f"Background sync failed: {e}")
            return None

    def publish(self, issue: DailyIssue) -> VaultOutcome:
        """Store a new issue locally, then push it to the Vault."""
        self.store.save(issue)
        return self.adapter.push([issue])

    def generate(self, source: IssueSource) -> GenerationResult:
        """Generate a new issue and publish it.

        Returns:
            A result with status "error" if nothing was generated,
            otherwise "success" with the issue and its push outcome
        """
        issue = source.generate()
        if issue is None:
            logger.error("Generation produced no issue")
            return GenerationResult(status="error")

        push = self.publish(issue)
        return GenerationResult(status="success", issue=issue, push=push)

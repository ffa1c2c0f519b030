"""One complete fetch/diff/submit cycle."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from resolver_updater.domain.types import CycleReport

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from .reconciler import Reconciler
    from .submitter import BatchSubmitter

log = getLogger(__name__)


@dataclass(slots=True)
class ReconciliationCycle:
    """Run the reconciler over the current tracked names and drain the diff."""

    names: Callable[[], Sequence[str]]
    reconciler: Reconciler
    submitter: BatchSubmitter
    dry_run: bool = False

    async def __call__(self) -> CycleReport:
        names = tuple(self.names())
        log.info("Checking %d names...", len(names))

        result = await self.reconciler.reconcile(names)
        report = CycleReport(
            checked=len(names),
            without_truth=result.without_truth,
            diff=list(result.diff),
            dry_run=self.dry_run,
        )

        if report.up_to_date:
            log.info("All names up to date.")
            return report

        if self.dry_run:
            log.info("Dry run: %d name(s) would be updated", len(report.diff))
            return report

        report.outcomes = await self.submitter.submit(report.diff)
        failed = report.failed_entries
        if failed:
            log.warning(
                "%d of %d update(s) failed and will be retried next cycle: %s",
                len(failed),
                len(report.diff),
                ", ".join(entry.name for entry in failed),
            )
        return report

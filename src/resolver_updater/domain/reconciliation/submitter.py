"""Commit a diff set to the resolver in size-bounded transactions."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from resolver_updater.domain.types import BatchOutcome, SubmissionBatch

from .reconciler import partition

if TYPE_CHECKING:
    from collections.abc import Sequence

    from resolver_updater.domain.ports import ResolverStore
    from resolver_updater.domain.retry import RetryGovernor
    from resolver_updater.domain.types import DiffEntry, SubmissionReceipt

log = getLogger(__name__)

DEFAULT_BATCH_SIZE = 5


def build_batches(diff: Sequence[DiffEntry], batch_size: int) -> list[SubmissionBatch]:
    """Split ``diff`` in discovery order into batches of at most ``batch_size``."""

    return [SubmissionBatch(entries=tuple(chunk)) for chunk in partition(diff, batch_size)]


@dataclass(slots=True)
class BatchSubmitter:
    """Send each batch, wait for inclusion, and record the outcome.

    A failed batch is logged and left for the next cycle to re-detect; the
    remaining batches are still attempted.

    Sends go through ``governor`` and its per-call timeout. Receipt waits go
    through ``receipt_governor``, which defaults to ``governor`` without a
    timeout since the store bounds the wait itself.
    """

    store: ResolverStore
    governor: RetryGovernor
    batch_size: int = DEFAULT_BATCH_SIZE
    receipt_governor: RetryGovernor | None = None

    async def submit(self, diff: Sequence[DiffEntry]) -> list[BatchOutcome]:
        batches = build_batches(diff, self.batch_size)
        log.info("Updating %d name(s) in %d transaction(s)", len(diff), len(batches))
        outcomes: list[BatchOutcome] = []
        for batch in batches:
            outcomes.append(await self.submit_batch(batch))
        return outcomes

    async def submit_batch(self, batch: SubmissionBatch) -> BatchOutcome:
        label = _describe(batch)
        try:
            transaction_hash = await self._send(batch, label)
            log.info("Sent %s: %s", label, transaction_hash)
            receipt_governor = self.receipt_governor or dataclasses.replace(
                self.governor, timeout=None
            )
            receipt: SubmissionReceipt = await receipt_governor.run(
                lambda: self.store.wait_for_receipt(transaction_hash),
                f"receipt {transaction_hash}",
            )
        except Exception as exc:  # noqa: BLE001
            log.error("Transaction failed for %s: %s", label, exc)  # noqa: TRY400
            return BatchOutcome(batch=batch, error=str(exc) or type(exc).__name__)

        log.info(
            "Confirmed %s in block %d (%s)",
            label,
            receipt.block_number,
            receipt.transaction_hash,
        )
        return BatchOutcome(batch=batch, receipt=receipt)

    async def _send(self, batch: SubmissionBatch, label: str) -> str:
        # Any one-entry batch, including a trailing one, takes the single update path.
        if len(batch) == 1:
            entry = batch.entries[0]
            return await self.governor.run(
                lambda: self.store.send_update(entry.name, entry.desired_owner),
                label,
            )
        return await self.governor.run(
            lambda: self.store.send_update_batch(batch.names, batch.owners),
            label,
        )


def _describe(batch: SubmissionBatch) -> str:
    names = ", ".join(f'"{name}"' for name in batch.names)
    if len(batch) == 1:
        return f"update({names})"
    return f"updateBatch({names})"

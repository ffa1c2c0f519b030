"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
import dataclasses
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from resolver_updater.adapters.ethscriptions import EthscriptionsOwnerSource
from resolver_updater.adapters.resolver import Web3ResolverStore
from resolver_updater.config import (
    IndexerConfig,
    PollConfig,
    ResolverConfig,
    TrackedNamesFile,
    get_indexer_config,
    get_poll_config,
    get_resolver_config,
)
from resolver_updater.domain.reconciliation import (
    BatchSubmitter,
    CacheReader,
    ReconciliationCycle,
    Reconciler,
)
from resolver_updater.domain.retry import RetryGovernor
from resolver_updater.domain.scheduler import PollScheduler

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from pathlib import Path

    from resolver_updater.domain.ports import OwnerSource, ResolverStore
    from resolver_updater.domain.retry import Sleep
    from resolver_updater.domain.types import CycleReport

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class UpdaterSettings:
    indexer: IndexerConfig
    resolver: ResolverConfig
    poll: PollConfig


def load_settings(
    *,
    names_file: Path | None = None,
    interval_seconds: float | None = None,
) -> UpdaterSettings:
    """Read settings from the environment, applying command-line overrides."""

    poll = get_poll_config()
    if names_file is not None:
        poll = dataclasses.replace(poll, names_file=names_file)
    if interval_seconds is not None:
        poll = dataclasses.replace(poll, interval_seconds=interval_seconds)
    return UpdaterSettings(
        indexer=get_indexer_config(),
        resolver=get_resolver_config(),
        poll=poll,
    )


def build_cycle(
    *,
    names: Callable[[], Sequence[str]],
    source: OwnerSource,
    store: ResolverStore,
    resolver_config: ResolverConfig,
    poll_config: PollConfig,
    dry_run: bool = False,
    sleep: Sleep = asyncio.sleep,
) -> ReconciliationCycle:
    """Wire one reconciliation cycle around explicit source and store handles."""

    governor = RetryGovernor(
        max_retries=resolver_config.max_retries,
        base_delay=resolver_config.retry_delay_seconds,
        timeout=resolver_config.request_timeout_seconds,
        sleep=sleep,
    )
    reconciler = Reconciler(
        source=source,
        cache=CacheReader(store=store, governor=governor),
        group_size=resolver_config.batch_size,
        group_delay=poll_config.group_delay_seconds,
        sleep=sleep,
    )
    submitter = BatchSubmitter(
        store=store,
        governor=governor,
        batch_size=resolver_config.batch_size,
        # The store bounds receipt waits by RECEIPT_TIMEOUT.
        receipt_governor=dataclasses.replace(governor, timeout=None),
    )
    return ReconciliationCycle(
        names=names,
        reconciler=reconciler,
        submitter=submitter,
        dry_run=dry_run,
    )


async def run_updater(
    settings: UpdaterSettings,
    *,
    once: bool = False,
    dry_run: bool = False,
) -> CycleReport | None:
    """Poll the indexer and keep the resolver in sync until stopped."""

    names = TrackedNamesFile(settings.poll.names_file)

    log.info("ChainHost resolver updater")
    log.info("  Contract: %s", settings.resolver.contract_address)
    log.info("  RPC:      %s", settings.resolver.rpc_url)
    log.info("  Interval: %ss", f"{settings.poll.interval_seconds:g}")
    log.info("  Names:    %s (%d tracked)", settings.poll.names_file, len(names.names))
    if dry_run:
        log.info("  Dry run:  no transactions will be sent")

    async with (
        EthscriptionsOwnerSource.from_config(settings.indexer) as source,
        Web3ResolverStore.from_config(settings.resolver) as store,
    ):
        cycle = build_cycle(
            names=names,
            source=source,
            store=store,
            resolver_config=settings.resolver,
            poll_config=settings.poll,
            dry_run=dry_run,
        )
        scheduler = PollScheduler(cycle=cycle, interval=settings.poll.interval_seconds)
        return await scheduler.run(max_cycles=1 if once else None)


def run_resolver_updater(
    settings: UpdaterSettings,
    *,
    once: bool = False,
    dry_run: bool = False,
) -> CycleReport | None:
    return asyncio.run(run_updater(settings, once=once, dry_run=dry_run))

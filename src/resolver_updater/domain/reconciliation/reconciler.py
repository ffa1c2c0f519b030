"""Read phase of a reconciliation cycle: compare truth with the cache."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, TypeVar

from resolver_updater.domain.identifiers import derive_content_identifier
from resolver_updater.domain.types import (
    DiffEntry,
    OwnerRecord,
    TrackedName,
    addresses_equal,
    normalize_address,
    short_address,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from resolver_updater.domain.ports import OwnerSource
    from resolver_updater.domain.retry import Sleep

    from .cache_reader import CacheReader

T = TypeVar("T")

log = getLogger(__name__)

DEFAULT_GROUP_SIZE = 5
DEFAULT_GROUP_DELAY_SECONDS = 0.05


@dataclass(slots=True, frozen=True)
class NameObservation:
    """Truth and cache records gathered for one name in one cycle."""

    name: TrackedName
    truth: OwnerRecord
    cached: OwnerRecord | None = None

    def diff_entry(self) -> DiffEntry | None:
        # Absent truth means the desired owner is unknown, never "unset".
        if self.truth.owner is None or self.cached is None or self.cached.owner is None:
            return None
        if addresses_equal(self.truth.owner, self.cached.owner):
            return None
        return DiffEntry(
            name=self.name,
            desired_owner=self.truth.owner,
            cached_owner=self.cached.owner,
        )


@dataclass(slots=True)
class ReconcileResult:
    observations: list[NameObservation] = field(default_factory=list)
    diff: list[DiffEntry] = field(default_factory=list)

    @property
    def without_truth(self) -> list[TrackedName]:
        return [obs.name for obs in self.observations if not obs.truth.present]


def compute_diff(observations: Sequence[NameObservation]) -> list[DiffEntry]:
    """Return the diff entries for ``observations`` in the order given."""

    return [entry for obs in observations if (entry := obs.diff_entry()) is not None]


def partition(items: Sequence[T], size: int) -> list[Sequence[T]]:
    if size < 1:
        raise ValueError("Partition size must be at least 1")
    return [items[start : start + size] for start in range(0, len(items), size)]


@dataclass(slots=True)
class Reconciler:
    """Gather truth and cache owners for tracked names with bounded fan-out.

    Names are processed in groups of ``group_size`` (the RPC's batch ceiling),
    each group concurrently, with ``group_delay`` seconds between groups to
    smooth the request rate.
    """

    source: OwnerSource
    cache: CacheReader
    group_size: int = DEFAULT_GROUP_SIZE
    group_delay: float = DEFAULT_GROUP_DELAY_SECONDS
    sleep: Sleep = field(default=asyncio.sleep)

    async def reconcile(self, names: Sequence[str]) -> ReconcileResult:
        result = ReconcileResult()
        for index, group in enumerate(partition(names, self.group_size)):
            if index > 0 and self.group_delay > 0:
                await self.sleep(self.group_delay)
            observations = await asyncio.gather(*(self.observe(name) for name in group))
            result.observations.extend(observations)

        result.diff = compute_diff(result.observations)
        for entry in result.diff:
            log.info(
                '"%s": %s -> %s',
                entry.name,
                short_address(entry.cached_owner),
                short_address(entry.desired_owner),
            )
        return result

    async def observe(self, name: str) -> NameObservation:
        tracked = TrackedName(name)
        identifier = derive_content_identifier(name)
        truth_owner = await self.source.fetch_owner(name)
        truth = OwnerRecord(
            identifier=identifier,
            owner=normalize_address(truth_owner) if truth_owner is not None else None,
        )
        if truth.owner is None:
            log.debug('No indexer owner for "%s" (%s), skipping', name, identifier)
            return NameObservation(name=tracked, truth=truth)

        cached_owner = await self.cache.read_cached_owner(name)
        return NameObservation(
            name=tracked,
            truth=truth,
            cached=OwnerRecord(identifier=identifier, owner=cached_owner),
        )

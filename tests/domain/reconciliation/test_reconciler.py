from __future__ import annotations

import asyncio

import pytest

from resolver_updater.domain.reconciliation import CacheReader, Reconciler, partition
from resolver_updater.domain.retry import RetryGovernor
from resolver_updater.domain.types import ZERO_ADDRESS, DiffEntry
from tests.helpers.fakes import (
    ALICE_OWNER,
    BOB_OWNER,
    FakeOwnerSource,
    FakeResolverStore,
    RateLimitError,
    RecordingSleep,
    owner_address,
)


def _reconciler(
    source: FakeOwnerSource,
    store: FakeResolverStore,
    *,
    group_size: int = 5,
    sleep: RecordingSleep | None = None,
) -> Reconciler:
    recorder = sleep or RecordingSleep()
    governor = RetryGovernor(max_retries=1, base_delay=0.0, sleep=recorder)
    return Reconciler(
        source=source,
        cache=CacheReader(store=store, governor=governor),
        group_size=group_size,
        group_delay=0.05,
        sleep=recorder,
    )


def test_alice_differs_and_bob_without_truth_is_excluded() -> None:
    source = FakeOwnerSource({"alice": ALICE_OWNER, "bob": None})
    store = FakeResolverStore()

    result = asyncio.run(_reconciler(source, store).reconcile(["alice", "bob"]))

    assert result.diff == [DiffEntry(name="alice", desired_owner=ALICE_OWNER)]
    assert result.without_truth == ["bob"]
    assert store.resolve_calls == ["alice"]


def test_absent_truth_never_produces_a_diff_whatever_the_cache_holds() -> None:
    source = FakeOwnerSource({"bob": None})
    store = FakeResolverStore({"bob": BOB_OWNER})

    result = asyncio.run(_reconciler(source, store).reconcile(["bob", "unknown"]))

    assert result.diff == []
    assert result.without_truth == ["bob", "unknown"]


def test_matching_owners_differing_only_in_case_are_in_sync() -> None:
    checksummed = "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"
    source = FakeOwnerSource({"alice": checksummed.lower()})
    store = FakeResolverStore({"alice": checksummed})

    result = asyncio.run(_reconciler(source, store).reconcile(["alice"]))

    assert result.diff == []


def test_diff_entries_carry_normalized_owners_in_tracked_order() -> None:
    names = [f"name-{index}" for index in range(7)]
    source = FakeOwnerSource(
        {name: owner_address(i + 1).upper().replace("0X", "0x") for i, name in enumerate(names)}
    )
    store = FakeResolverStore({"name-3": owner_address(4)})

    result = asyncio.run(_reconciler(source, store).reconcile(names))

    assert [entry.name for entry in result.diff] == [n for n in names if n != "name-3"]
    assert all(entry.desired_owner == entry.desired_owner.lower() for entry in result.diff)
    assert all(entry.cached_owner == ZERO_ADDRESS for entry in result.diff)


def test_groups_are_bounded_and_separated_by_delay() -> None:
    names = [f"name-{index}" for index in range(12)]
    in_flight = 0
    peak = 0

    class _SlowSource(FakeOwnerSource):
        async def fetch_owner(self, name: str) -> str | None:
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0)
            in_flight -= 1
            return await super().fetch_owner(name)

    source = _SlowSource({name: ALICE_OWNER for name in names})
    sleep = RecordingSleep()

    reconciler = _reconciler(source, FakeResolverStore(), group_size=5, sleep=sleep)
    asyncio.run(reconciler.reconcile(names))

    assert peak == 5
    assert sleep.delays == [0.05, 0.05]
    assert sorted(source.calls) == sorted(names)


def test_unreadable_cache_is_treated_as_unset_and_reasserted() -> None:
    source = FakeOwnerSource({"alice": ALICE_OWNER})
    store = FakeResolverStore({"alice": ALICE_OWNER})
    store.resolve_failures["alice"] = [RateLimitError(), RateLimitError()]

    result = asyncio.run(_reconciler(source, store).reconcile(["alice"]))

    # Redundant but idempotent: the owner already matches on chain.
    assert result.diff == [DiffEntry(name="alice", desired_owner=ALICE_OWNER)]


def test_empty_tracked_set_yields_empty_diff() -> None:
    result = asyncio.run(_reconciler(FakeOwnerSource(), FakeResolverStore()).reconcile([]))

    assert result.diff == []
    assert result.observations == []


def test_partition_rejects_non_positive_size() -> None:
    with pytest.raises(ValueError, match="at least 1"):
        partition([1, 2], 0)

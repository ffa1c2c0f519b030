from __future__ import annotations

import asyncio

import pytest

from resolver_updater.domain.scheduler import PollScheduler, SchedulerState
from resolver_updater.domain.types import CycleReport
from tests.helpers.fakes import RecordingSleep


class _Cycle:
    def __init__(self, scheduler_ref: list[PollScheduler]) -> None:
        self.scheduler_ref = scheduler_ref
        self.events: list[str] = []

    async def __call__(self) -> CycleReport:
        scheduler = self.scheduler_ref[0]
        assert scheduler.state is SchedulerState.RUNNING_CYCLE
        self.events.append(f"cycle-{scheduler.completed + 1}")
        return CycleReport(checked=scheduler.completed + 1)


def _scheduler(interval: float = 30.0) -> tuple[PollScheduler, _Cycle, RecordingSleep]:
    ref: list[PollScheduler] = []
    cycle = _Cycle(ref)
    sleep = RecordingSleep()
    scheduler = PollScheduler(cycle=cycle, interval=interval, sleep=sleep)
    ref.append(scheduler)
    return scheduler, cycle, sleep


def test_first_cycle_runs_immediately_and_once_mode_never_sleeps() -> None:
    scheduler, cycle, sleep = _scheduler()

    report = asyncio.run(scheduler.run(max_cycles=1))

    assert cycle.events == ["cycle-1"]
    assert sleep.delays == []
    assert report is not None
    assert report.checked == 1
    assert scheduler.state is SchedulerState.IDLE


def test_waits_interval_between_sequential_cycles() -> None:
    scheduler, cycle, sleep = _scheduler(interval=12.5)

    report = asyncio.run(scheduler.run(max_cycles=3))

    assert cycle.events == ["cycle-1", "cycle-2", "cycle-3"]
    assert sleep.delays == [12.5, 12.5]
    assert report is not None
    assert report.checked == 3


def test_rejects_overlapping_cycles() -> None:
    scheduler, _cycle, _sleep = _scheduler()
    scheduler.state = SchedulerState.RUNNING_CYCLE

    with pytest.raises(RuntimeError, match="already running"):
        asyncio.run(scheduler.run_cycle())


def test_returns_to_idle_when_cycle_raises() -> None:
    async def broken_cycle() -> CycleReport:
        raise KeyError("programming error")

    scheduler = PollScheduler(cycle=broken_cycle, interval=1.0, sleep=RecordingSleep())

    with pytest.raises(KeyError):
        asyncio.run(scheduler.run())

    assert scheduler.state is SchedulerState.IDLE
    assert scheduler.completed == 0

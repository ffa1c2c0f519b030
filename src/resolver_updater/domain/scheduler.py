"""Fixed-cadence driver for reconciliation cycles."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from .retry import Sleep
    from .types import CycleReport

log = getLogger(__name__)


class SchedulerState(StrEnum):
    IDLE = "idle"
    RUNNING_CYCLE = "running-cycle"


@dataclass(slots=True)
class PollScheduler:
    """Run ``cycle`` immediately, then again ``interval`` seconds after each completes.

    The wait starts only once a cycle has finished, so two cycles never touch
    the resolver at the same time. ``max_cycles`` bounds the loop for single-shot
    runs; ``None`` polls until the process is stopped.
    """

    cycle: Callable[[], Awaitable[CycleReport]]
    interval: float
    sleep: Sleep = field(default=asyncio.sleep)
    state: SchedulerState = SchedulerState.IDLE
    completed: int = 0

    async def run(self, *, max_cycles: int | None = None) -> CycleReport | None:
        last: CycleReport | None = None
        while max_cycles is None or self.completed < max_cycles:
            last = await self.run_cycle()
            if max_cycles is not None and self.completed >= max_cycles:
                break
            log.debug("Next cycle in %.1fs", self.interval)
            await self.sleep(self.interval)
        return last

    async def run_cycle(self) -> CycleReport:
        if self.state is SchedulerState.RUNNING_CYCLE:
            raise RuntimeError("A reconciliation cycle is already running")
        self.state = SchedulerState.RUNNING_CYCLE
        try:
            report = await self.cycle()
        finally:
            self.state = SchedulerState.IDLE
        self.completed += 1
        return report

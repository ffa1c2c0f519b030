"""Bounded exponential backoff for rate-limited RPC calls.

Both the cache reader and the batch submitter route every remote call through
one :class:`RetryGovernor`, so the backoff policy lives in a single place:

- rate-limit and timeout failures are transient and retried after
  ``base_delay * 2**attempt`` seconds, at most ``max_retries`` times
- every other failure is fatal and re-raised immediately
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from logging import getLogger
from typing import TypeVar

T = TypeVar("T")

log = getLogger(__name__)

DEFAULT_MAX_RETRIES = 4
DEFAULT_BASE_DELAY = 2.0

RATE_LIMIT_MARKERS: tuple[str, ...] = ("429", "too many requests", "rate limit", "rate-limit")
TRANSIENT_EXCEPTIONS: tuple[type[BaseException], ...] = (TimeoutError,)

Sleep = Callable[[float], Awaitable[None]]


def _status_code(error: BaseException) -> int | None:
    for attribute in ("status", "status_code", "code"):
        value = getattr(error, attribute, None)
        if isinstance(value, int):
            return value
    response = getattr(error, "response", None)
    status = getattr(response, "status_code", None)
    return status if isinstance(status, int) else None


def is_transient_error(error: BaseException) -> bool:
    """Return True when ``error`` signals rate limiting or a timeout."""

    if isinstance(error, TRANSIENT_EXCEPTIONS):
        return True
    if _status_code(error) == 429:
        return True
    text = str(error).lower()
    return any(marker in text for marker in RATE_LIMIT_MARKERS)


@dataclass(slots=True)
class RetryState:
    attempt: int = 0
    next_delay: float = 0.0


@dataclass(slots=True)
class RetryGovernor:
    max_retries: int = DEFAULT_MAX_RETRIES
    base_delay: float = DEFAULT_BASE_DELAY
    timeout: float | None = None
    classify: Callable[[BaseException], bool] = is_transient_error
    sleep: Sleep = field(default=asyncio.sleep)

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ValueError("max_retries must be non-negative")
        if self.base_delay < 0:
            raise ValueError("base_delay must be non-negative")

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1

    def delay_for(self, attempt: int) -> float:
        return self.base_delay * 2**attempt

    async def run(self, operation: Callable[[], Awaitable[T]], label: str) -> T:
        """Run ``operation`` until it succeeds, fails fatally, or retries run out.

        ``operation`` is called afresh for every attempt, so it must be a factory
        returning a new awaitable each time.
        """

        state = RetryState()
        while True:
            try:
                return await self._attempt(operation)
            except Exception as exc:
                if not self.classify(exc):
                    raise
                if state.attempt >= self.max_retries:
                    log.warning(
                        "Giving up on %s after %d attempts: %s",
                        label,
                        state.attempt + 1,
                        exc,
                    )
                    raise
                state.next_delay = self.delay_for(state.attempt)
                log.warning(
                    "Rate limited on %s, retrying in %.1fs (attempt %d/%d): %s",
                    label,
                    state.next_delay,
                    state.attempt + 1,
                    self.max_attempts,
                    exc,
                )
                await self.sleep(state.next_delay)
                state.attempt += 1

    async def _attempt(self, operation: Callable[[], Awaitable[T]]) -> T:
        if self.timeout is None:
            return await operation()
        return await asyncio.wait_for(operation(), timeout=self.timeout)

"""Read-through access to owners cached in the on-chain resolver."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from resolver_updater.domain.types import ZERO_ADDRESS, OwnerAddress, normalize_address

if TYPE_CHECKING:
    from resolver_updater.domain.ports import ResolverStore
    from resolver_updater.domain.retry import RetryGovernor

log = getLogger(__name__)


@dataclass(slots=True)
class CacheReader:
    """Resolve cached owners, degrading to "no owner" when the chain is unreadable.

    Falling back to :data:`ZERO_ADDRESS` makes any known owner look divergent,
    so an unreadable name gets re-asserted. The write is redundant at worst and
    applying it twice is harmless.
    """

    store: ResolverStore
    governor: RetryGovernor

    async def read_cached_owner(self, name: str) -> OwnerAddress:
        try:
            owner = await self.governor.run(
                lambda: self.store.resolve(name),
                f'resolve("{name}")',
            )
        except Exception as exc:  # noqa: BLE001
            log.warning(
                'Cache read failed for "%s", treating it as unset: %s',
                name,
                exc,
            )
            return ZERO_ADDRESS
        return normalize_address(owner)

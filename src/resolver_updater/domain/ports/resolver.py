"""Port for the on-chain name resolver."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from resolver_updater.domain.types import SubmissionReceipt


@runtime_checkable
class ResolverStore(Protocol):
    """Read and write access to the on-chain name -> owner mapping.

    Each method performs exactly one remote call so callers can govern retries
    per call. Write methods return the transaction hash without waiting.
    """

    async def resolve(self, name: str) -> str: ...

    async def send_update(self, name: str, owner: str) -> str: ...

    async def send_update_batch(self, names: Sequence[str], owners: Sequence[str]) -> str: ...

    async def wait_for_receipt(self, transaction_hash: str) -> SubmissionReceipt: ...


__all__ = ["ResolverStore"]

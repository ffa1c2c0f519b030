"""Ports for reading ownership truth from an external provider."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class OwnerSource(Protocol):
    """Authoritative source for the current owner of a tracked name.

    Implementations return ``None`` when the record does not exist or could not
    be read; they never raise for per-name failures.
    """

    async def fetch_owner(self, name: str) -> str | None: ...


__all__ = ["OwnerSource"]

"""Ports the reconciliation engine depends on."""

from __future__ import annotations

from .fetching import OwnerSource
from .resolver import ResolverStore

__all__ = ["OwnerSource", "ResolverStore"]

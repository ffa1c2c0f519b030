"""Public interface for the resolver contract adapter."""

from __future__ import annotations

from .abi import RESOLVER_ABI
from .contract import TransactionRevertedError, Web3ResolverStore

__all__ = ["RESOLVER_ABI", "TransactionRevertedError", "Web3ResolverStore"]

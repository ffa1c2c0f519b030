"""Public interface for the ethscriptions indexer adapter."""

from __future__ import annotations

from .client import EthscriptionsOwnerSource, IndexerAPIError
from .schema import EthscriptionPayload, ExistsResponse, ExistsResult

__all__ = [
    "EthscriptionPayload",
    "EthscriptionsOwnerSource",
    "ExistsResponse",
    "ExistsResult",
    "IndexerAPIError",
]

"""HTTP client for the ethscriptions indexer."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from resolver_updater.adapters.http_resilience import ResilientClient
from resolver_updater.domain.identifiers import derive_content_identifier

from .schema import ExistsResponse

if TYPE_CHECKING:
    from types import TracebackType

    from resolver_updater.config.indexer import IndexerConfig

log = getLogger(__name__)


class IndexerAPIError(RuntimeError):
    """Raised when the indexer returns a payload we cannot interpret."""


class EthscriptionsOwnerSource:
    """Look up the current owner of a name's ethscription.

    Every failure is contained per name: it is logged and reported as ``None``
    so one bad lookup never blocks the rest of the cycle.
    """

    def __init__(self, client: ResilientClient) -> None:
        self._client = client

    @classmethod
    def from_config(cls, config: IndexerConfig) -> EthscriptionsOwnerSource:
        return cls(ResilientClient(config.resilience))

    async def __aenter__(self) -> EthscriptionsOwnerSource:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def fetch_owner(self, name: str) -> str | None:
        try:
            return await self.lookup(name)
        except (httpx.HTTPError, IndexerAPIError) as exc:
            log.error('API error for "%s": %s', name, exc)  # noqa: TRY400
            return None

    async def lookup(self, name: str) -> str | None:
        """Return the owner of ``name``, ``None`` if absent; raise on bad responses."""

        identifier = derive_content_identifier(name)
        response = await self._client.get(f"exists/{identifier}")
        response.raise_for_status()

        try:
            payload = ExistsResponse.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise IndexerAPIError(f"Unexpected indexer payload for {identifier}: {exc}") from exc

        result = payload.result
        if not result.exists:
            return None
        if result.ethscription is None:
            raise IndexerAPIError(f"Indexer reported {identifier} as existing without an owner")
        return result.ethscription.current_owner

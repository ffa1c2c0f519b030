"""Ethscriptions indexer configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

DEFAULT_ETHSCRIPTIONS_API = "https://api.ethscriptions.com/v2/ethscriptions"
INDEXER_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True, slots=True)
class IndexerConfig:
    """Holds the indexer endpoint and its HTTP resilience settings."""

    resilience: ResilienceConfig


def get_indexer_config(*, resilience: ResilienceConfig | None = None) -> IndexerConfig:
    base_url = optional_env_var("ETHSCRIPTIONS_API", DEFAULT_ETHSCRIPTIONS_API).rstrip("/")
    return IndexerConfig(
        resilience=resilience
        or ResilienceConfig(
            base_url=base_url,
            timeout_seconds=INDEXER_TIMEOUT_SECONDS,
            retry=RetryPolicy(total=2),
            ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
            default_headers={"Accept": "application/json"},
        ),
    )

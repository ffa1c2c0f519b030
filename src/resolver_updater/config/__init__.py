"""Application configuration helpers."""

from __future__ import annotations

from .env import env_float, env_int, optional_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .indexer import DEFAULT_ETHSCRIPTIONS_API, IndexerConfig, get_indexer_config
from .logging import configure_logging
from .names import TrackedNamesFile, load_tracked_names
from .poll import PollConfig, get_poll_config
from .resolver import DEFAULT_APPCHAIN_RPC, ResolverConfig, get_resolver_config

__all__ = [
    "DEFAULT_APPCHAIN_RPC",
    "DEFAULT_ETHSCRIPTIONS_API",
    "ConfigurationError",
    "IndexerConfig",
    "MissingConfigurationError",
    "PollConfig",
    "RateLimit",
    "ResilienceConfig",
    "ResolverConfig",
    "RetryPolicy",
    "TrackedNamesFile",
    "configure_logging",
    "env_float",
    "env_int",
    "get_indexer_config",
    "get_poll_config",
    "get_resolver_config",
    "load_tracked_names",
    "optional_env_var",
    "require_env_vars",
]

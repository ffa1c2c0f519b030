"""AppChain RPC and resolver contract configuration values."""

from __future__ import annotations

from dataclasses import dataclass, field

from .env import env_float, env_int, optional_env_var, require_env_vars

DEFAULT_APPCHAIN_RPC = "http://localhost:8545"
# The AppChain RPC rejects JSON-RPC batches with more than five calls.
MAX_RPC_BATCH_SIZE = 5
DEFAULT_RPC_BATCH_SIZE = MAX_RPC_BATCH_SIZE
DEFAULT_RPC_MAX_RETRIES = 4
DEFAULT_RPC_RETRY_DELAY_SECONDS = 2.0
DEFAULT_RPC_TIMEOUT_SECONDS = 30.0
DEFAULT_RECEIPT_TIMEOUT_SECONDS = 120.0


@dataclass(frozen=True, slots=True)
class ResolverConfig:
    """Connection and credential settings for the on-chain resolver."""

    rpc_url: str
    contract_address: str
    private_key: str = field(repr=False)
    batch_size: int = DEFAULT_RPC_BATCH_SIZE
    max_retries: int = DEFAULT_RPC_MAX_RETRIES
    retry_delay_seconds: float = DEFAULT_RPC_RETRY_DELAY_SECONDS
    request_timeout_seconds: float = DEFAULT_RPC_TIMEOUT_SECONDS
    receipt_timeout_seconds: float = DEFAULT_RECEIPT_TIMEOUT_SECONDS


def get_resolver_config() -> ResolverConfig:
    values = require_env_vars(("RESOLVER_ADDRESS", "PRIVATE_KEY"))
    return ResolverConfig(
        rpc_url=optional_env_var("APPCHAIN_RPC", DEFAULT_APPCHAIN_RPC),
        contract_address=values["RESOLVER_ADDRESS"],
        private_key=values["PRIVATE_KEY"],
        batch_size=env_int(
            "RPC_BATCH_SIZE", DEFAULT_RPC_BATCH_SIZE, maximum=MAX_RPC_BATCH_SIZE
        ),
        max_retries=env_int("RPC_MAX_RETRIES", DEFAULT_RPC_MAX_RETRIES, minimum=0),
        retry_delay_seconds=env_float("RPC_RETRY_DELAY", DEFAULT_RPC_RETRY_DELAY_SECONDS),
        request_timeout_seconds=env_float(
            "RPC_TIMEOUT", DEFAULT_RPC_TIMEOUT_SECONDS, minimum=0.1
        ),
        receipt_timeout_seconds=env_float(
            "RECEIPT_TIMEOUT", DEFAULT_RECEIPT_TIMEOUT_SECONDS, minimum=0.1
        ),
    )

"""web3 adapter for the on-chain resolver contract."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Any

from eth_account import Account
from web3 import AsyncHTTPProvider, AsyncWeb3, Web3
from web3.exceptions import TimeExhausted
from web3.middleware import SignAndSendRawMiddlewareBuilder

from resolver_updater.config.errors import ConfigurationError
from resolver_updater.domain.types import SubmissionReceipt

from .abi import RESOLVER_ABI

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import TracebackType

    from web3.contract import AsyncContract

    from resolver_updater.config.resolver import ResolverConfig

log = getLogger(__name__)


class TransactionRevertedError(RuntimeError):
    """Raised when a mined transaction reports a failed status."""

    def __init__(self, transaction_hash: str, *, block_number: int | None = None) -> None:
        super().__init__(f"Transaction {transaction_hash} reverted (block {block_number})")
        self.transaction_hash = transaction_hash
        self.block_number = block_number


def _checksum(address: str) -> str:
    return Web3.to_checksum_address(address)


class Web3ResolverStore:
    """Resolver access over JSON-RPC with locally signed transactions.

    Each method issues a single RPC interaction so the retry governor can wrap
    it; the provider's own retry loop is disabled for the same reason.
    """

    def __init__(
        self,
        *,
        web3: AsyncWeb3,
        contract: AsyncContract,
        sender: str,
        receipt_timeout: float = 120.0,
    ) -> None:
        self._web3 = web3
        self._contract = contract
        self._sender = sender
        self._receipt_timeout = receipt_timeout

    @classmethod
    def from_config(cls, config: ResolverConfig) -> Web3ResolverStore:
        try:
            account = Account.from_key(config.private_key)
        except Exception:  # noqa: BLE001
            raise ConfigurationError("PRIVATE_KEY is not a valid private key") from None
        if not Web3.is_address(config.contract_address):
            raise ConfigurationError(
                f"RESOLVER_ADDRESS is not a valid address: {config.contract_address!r}"
            )

        provider = AsyncHTTPProvider(
            config.rpc_url,
            request_kwargs={"timeout": config.request_timeout_seconds},
            exception_retry_configuration=None,
        )
        web3 = AsyncWeb3(provider)
        web3.middleware_onion.inject(SignAndSendRawMiddlewareBuilder.build(account), layer=0)
        web3.eth.default_account = account.address
        contract = web3.eth.contract(address=_checksum(config.contract_address), abi=RESOLVER_ABI)
        log.debug("Resolver store ready for sender %s", account.address)
        return cls(
            web3=web3,
            contract=contract,
            sender=account.address,
            receipt_timeout=config.receipt_timeout_seconds,
        )

    @property
    def sender(self) -> str:
        return self._sender

    async def __aenter__(self) -> Web3ResolverStore:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        disconnect = getattr(self._web3.provider, "disconnect", None)
        if disconnect is not None:
            await disconnect()

    async def resolve(self, name: str) -> str:
        return await self._contract.functions.resolve(name).call()

    async def send_update(self, name: str, owner: str) -> str:
        tx_hash = await self._contract.functions.update(name, _checksum(owner)).transact(
            self._tx_params()
        )
        return Web3.to_hex(tx_hash)

    async def send_update_batch(self, names: Sequence[str], owners: Sequence[str]) -> str:
        if len(names) != len(owners):
            raise ValueError(
                f"updateBatch requires parallel arrays, got {len(names)} names "
                f"and {len(owners)} owners"
            )
        tx_hash = await self._contract.functions.updateBatch(
            list(names), [_checksum(owner) for owner in owners]
        ).transact(self._tx_params())
        return Web3.to_hex(tx_hash)

    async def wait_for_receipt(self, transaction_hash: str) -> SubmissionReceipt:
        try:
            receipt = await self._web3.eth.wait_for_transaction_receipt(
                transaction_hash,
                timeout=self._receipt_timeout,
            )
        except TimeExhausted as exc:
            raise TimeoutError(str(exc)) from exc

        block_number = int(receipt["blockNumber"])
        if receipt["status"] != 1:
            raise TransactionRevertedError(transaction_hash, block_number=block_number)
        return SubmissionReceipt(transaction_hash=transaction_hash, block_number=block_number)

    def _tx_params(self) -> dict[str, Any]:
        return {"from": self._sender}

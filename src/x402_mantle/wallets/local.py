"""
LocalAccountWallet - custodial wallet backed by a private key and web3.py
"""

import logging
from typing import Any, Callable

from x402_mantle.config import NetworkRegistry, get_chain_id, get_rpc_url
from x402_mantle.exceptions import (
    InvalidParamsError,
    ProviderRpcError,
    TransactionFailedError,
    UnrecognizedChainError,
)
from x402_mantle.types import AddEthereumChainParameter, TransactionRequest
from x402_mantle.wallets.eip1193 import normalize_wallet_error

logger = logging.getLogger(__name__)

Web3Factory = Callable[[str], Any]


def _default_web3_factory(rpc_url: str) -> Any:
    from web3 import AsyncHTTPProvider, AsyncWeb3
    from web3.middleware import ExtraDataToPOAMiddleware

    w3 = AsyncWeb3(AsyncHTTPProvider(rpc_url))
    w3.middleware_onion.inject(ExtraDataToPOAMiddleware, layer=0)
    return w3


def _rpc_error_code(error: Exception) -> int | None:
    # web3 keeps the node's JSON-RPC error object on Web3RPCError.rpc_response
    response = getattr(error, "rpc_response", None)
    if isinstance(response, dict):
        rpc_error = response.get("error")
        if isinstance(rpc_error, dict) and isinstance(rpc_error.get("code"), int):
            return rpc_error["code"]
    return None


class LocalAccountWallet:
    """
    Wallet provider that signs locally and submits raw transactions.

    There is no user to prompt: connect() simply returns the key's address,
    and switching chains re-points the wallet at the RPC endpoint the
    network registry (or a prior add_network call) knows for that chain.
    """

    def __init__(
        self,
        private_key: str,
        network: str = NetworkRegistry.MANTLE,
        rpc_url: str | None = None,
        web3_factory: Web3Factory | None = None,
    ) -> None:
        if not private_key.startswith("0x"):
            private_key = "0x" + private_key
        self._private_key = private_key
        self._address = self._derive_address(private_key)
        self._web3_factory = web3_factory or _default_web3_factory
        self._chain_id = get_chain_id(network)
        self._rpc_urls: dict[int, str] = {self._chain_id: get_rpc_url(network, rpc_url)}
        self._web3_clients: dict[int, Any] = {}
        logger.debug(f"LocalAccountWallet initialized: address={self._address}, network={network}")

    @classmethod
    def from_private_key(
        cls, private_key: str, network: str = NetworkRegistry.MANTLE
    ) -> "LocalAccountWallet":
        """Create wallet from private key."""
        return cls(private_key, network)

    @staticmethod
    def _derive_address(private_key: str) -> str:
        """Derive EVM address from private key"""
        from eth_account import Account

        return Account.from_key(private_key).address

    @property
    def address(self) -> str:
        return self._address

    def is_available(self) -> bool:
        return True

    async def connect(self) -> str:
        logger.info(f"Wallet connected: {self._address}")
        return self._address

    async def get_account(self) -> str | None:
        return self._address

    async def get_chain_id(self) -> int | None:
        return self._chain_id

    def _web3(self) -> Any:
        """Lazy initialize web3 client for the current chain"""
        if self._chain_id not in self._web3_clients:
            self._web3_clients[self._chain_id] = self._web3_factory(self._rpc_urls[self._chain_id])
        return self._web3_clients[self._chain_id]

    async def switch_network(self, chain_id: int) -> None:
        if chain_id not in self._rpc_urls:
            found = NetworkRegistry.find_by_chain_id(chain_id)
            if found is None:
                raise UnrecognizedChainError(chain_id)
            network, _ = found
            self._rpc_urls[chain_id] = get_rpc_url(network)

        if chain_id != self._chain_id:
            logger.info(f"Switching wallet to chain {chain_id}")
        self._chain_id = chain_id

    async def add_network(self, params: AddEthereumChainParameter) -> None:
        if not params.rpc_urls:
            raise InvalidParamsError("wallet_addEthereumChain requires at least one RPC URL")
        chain_id = int(params.chain_id, 16)
        self._rpc_urls.setdefault(chain_id, params.rpc_urls[0])
        await self.switch_network(chain_id)

    async def send_transaction(self, tx: TransactionRequest) -> str:
        if tx.from_ is not None and tx.from_.lower() != self._address.lower():
            raise InvalidParamsError(
                f"Cannot send from {tx.from_}: wallet controls {self._address}"
            )

        from eth_account import Account
        from web3 import Web3

        w3 = self._web3()
        try:
            fields: dict[str, Any] = {
                "from": self._address,
                "to": Web3.to_checksum_address(tx.to),
                "value": int(tx.value, 16) if tx.value else 0,
                "chainId": self._chain_id,
            }
            if tx.data:
                fields["data"] = tx.data
            fields["nonce"] = await w3.eth.get_transaction_count(self._address)
            fields["gas"] = (
                int(tx.gas_limit, 16) if tx.gas_limit else await w3.eth.estimate_gas(fields)
            )
            fields["gasPrice"] = int(tx.gas_price, 16) if tx.gas_price else await w3.eth.gas_price

            signed = Account.sign_transaction(fields, self._private_key)
            tx_hash = Web3.to_hex(await w3.eth.send_raw_transaction(signed.raw_transaction))
        except Exception as e:
            rpc_error = ProviderRpcError(_rpc_error_code(e), str(e))
            raise normalize_wallet_error(rpc_error, default=TransactionFailedError) from e

        logger.info(f"Transaction submitted: {tx_hash}")
        return tx_hash

    async def sign_message(self, message: str) -> str:
        """Sign a text message (EIP-191 personal_sign)"""
        from eth_account import Account
        from eth_account.messages import encode_defunct

        signed = Account.sign_message(encode_defunct(text=message), private_key=self._private_key)
        return "0x" + signed.signature.hex().removeprefix("0x")

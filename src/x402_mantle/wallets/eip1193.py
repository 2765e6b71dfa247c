"""
Eip1193Wallet - reference wallet backed by an EIP-1193 style provider
"""

import logging
from typing import Any, Protocol, Sequence

from x402_mantle.exceptions import (
    InsufficientFundsError,
    InvalidParamsError,
    ProviderRpcError,
    TransactionFailedError,
    UnrecognizedChainError,
    UserRejectedError,
    WalletConnectionError,
    WalletError,
)
from x402_mantle.types import AddEthereumChainParameter, TransactionRequest

logger = logging.getLogger(__name__)

# EIP-1193 / EIP-1474 / EIP-3326 error codes
USER_REJECTED_REQUEST = 4001
UNAUTHORIZED = 4100
DISCONNECTED = 4900
CHAIN_DISCONNECTED = 4901
UNRECOGNIZED_CHAIN = 4902
INVALID_PARAMS = -32602

_CONNECTION_CODES = {UNAUTHORIZED, DISCONNECTED, CHAIN_DISCONNECTED}
_INSUFFICIENT_FUNDS_MARKERS = ("insufficient funds", "insufficient balance")


class EIP1193Provider(Protocol):
    """Anything exposing the EIP-1193 ``request`` method"""

    async def request(self, method: str, params: Sequence[Any] | None = None) -> Any: ...


def _error_code(error: ProviderRpcError) -> int | None:
    # Some wallets wrap the real code, e.g. {"originalError": {"code": 4902}}
    if isinstance(error.data, dict):
        original = error.data.get("originalError")
        if isinstance(original, dict) and isinstance(original.get("code"), int):
            return original["code"]
    return error.code


def normalize_wallet_error(
    error: ProviderRpcError,
    *,
    chain_id: int | None = None,
    default: type[WalletError] = WalletError,
) -> WalletError:
    """Map a raw provider error onto the wallet error taxonomy by its code"""
    code = _error_code(error)
    message = str(error)

    if code == USER_REJECTED_REQUEST:
        return UserRejectedError(message or "Request rejected by user", code=code, data=error.data)
    if code == UNRECOGNIZED_CHAIN and chain_id is not None:
        return UnrecognizedChainError(chain_id, code=code)
    if code == INVALID_PARAMS:
        return InvalidParamsError(message or "Invalid parameters", code=code, data=error.data)
    if code in _CONNECTION_CODES:
        return WalletConnectionError(message, code=code, data=error.data)
    if any(marker in message.lower() for marker in _INSUFFICIENT_FUNDS_MARKERS):
        return InsufficientFundsError(
            "Insufficient funds for this transaction", code=code, data=error.data
        )
    return default(message or f"Wallet request failed: {code}", code=code, data=error.data)


def _to_int(value: Any) -> int:
    if isinstance(value, int):
        return value
    text = str(value)
    return int(text, 16) if text.lower().startswith("0x") else int(text)


class Eip1193Wallet:
    """Wallet provider speaking the EIP-1193 JSON-RPC method set"""

    def __init__(self, provider: EIP1193Provider | None) -> None:
        self._provider = provider

    def is_available(self) -> bool:
        return self._provider is not None

    async def _request(self, method: str, params: Sequence[Any] | None = None) -> Any:
        if self._provider is None:
            raise WalletConnectionError("Wallet provider is not available")
        logger.debug(f"Wallet request: {method}")
        return await self._provider.request(method, params)

    async def connect(self) -> str:
        try:
            accounts = await self._request("eth_requestAccounts")
        except ProviderRpcError as e:
            raise WalletConnectionError(
                f"Wallet connection failed: {e}", code=e.code, data=e.data
            ) from e

        if not accounts:
            raise WalletConnectionError("No accounts found")
        logger.info(f"Wallet connected: {accounts[0]}")
        return accounts[0]

    async def get_account(self) -> str | None:
        if self._provider is None:
            return None
        try:
            accounts = await self._request("eth_accounts")
        except Exception as e:
            logger.debug(f"eth_accounts failed: {e}")
            return None
        return accounts[0] if accounts else None

    async def get_chain_id(self) -> int | None:
        if self._provider is None:
            return None
        try:
            return _to_int(await self._request("eth_chainId"))
        except Exception as e:
            logger.debug(f"eth_chainId failed: {e}")
            return None

    async def switch_network(self, chain_id: int) -> None:
        try:
            await self._request("wallet_switchEthereumChain", [{"chainId": hex(chain_id)}])
        except ProviderRpcError as e:
            raise normalize_wallet_error(e, chain_id=chain_id) from e

    async def add_network(self, params: AddEthereumChainParameter) -> None:
        try:
            await self._request("wallet_addEthereumChain", [params.to_rpc_params()])
        except ProviderRpcError as e:
            raise normalize_wallet_error(e, chain_id=_to_int(params.chain_id)) from e

    async def send_transaction(self, tx: TransactionRequest) -> str:
        if tx.from_ is None:
            account = await self.get_account()
            if not account:
                raise WalletConnectionError(
                    "No account connected. Please connect your wallet first."
                )
            tx = tx.model_copy(update={"from_": account})

        try:
            tx_hash = await self._request("eth_sendTransaction", [tx.to_rpc_params()])
        except ProviderRpcError as e:
            raise normalize_wallet_error(e, default=TransactionFailedError) from e

        logger.info(f"Transaction submitted: {tx_hash}")
        return tx_hash

    async def sign_message(self, message: str) -> str:
        account = await self.get_account()
        if not account:
            raise WalletConnectionError("No account connected")
        try:
            return await self._request("personal_sign", [message, account])
        except ProviderRpcError as e:
            raise normalize_wallet_error(e) from e

"""
Wallet provider interface
"""

from typing import Protocol, runtime_checkable

from x402_mantle.types import AddEthereumChainParameter, TransactionRequest


@runtime_checkable
class WalletProvider(Protocol):
    """
    Capability set every wallet backend must offer.

    No base class is required: browser-style EIP-1193 wallets, custodial
    signers and test doubles all satisfy this protocol structurally.
    """

    def is_available(self) -> bool:
        """Whether the backend can be used at all (e.g. a provider is present)"""
        ...

    async def connect(self) -> str:
        """
        Ask the user to connect and return the active address.

        Raises:
            WalletConnectionError: No provider, no account, or the user refused
        """
        ...

    async def get_account(self) -> str | None:
        """Return the active address, or None when not connected. Never raises."""
        ...

    async def get_chain_id(self) -> int | None:
        """Return the current chain ID, or None when unknown. Never raises."""
        ...

    async def switch_network(self, chain_id: int) -> None:
        """
        Switch the wallet to another chain.

        Raises:
            UnrecognizedChainError: The wallet does not know the chain
            UserRejectedError: The user declined the switch
        """
        ...

    async def add_network(self, params: AddEthereumChainParameter) -> None:
        """Add (and switch to) a chain. Adding a known chain is not an error."""
        ...

    async def send_transaction(self, tx: TransactionRequest) -> str:
        """
        Submit a transaction from the active account and return its hash.

        Raises:
            UserRejectedError: The user rejected the transaction
            InvalidParamsError: The wallet rejected the parameters
            InsufficientFundsError: The account cannot pay value plus gas
            TransactionFailedError: Any other failure
        """
        ...


@runtime_checkable
class MessageSigner(Protocol):
    """Optional capability: EIP-191 personal message signing"""

    async def sign_message(self, message: str) -> str: ...

"""
Wallet detection - pick the first usable wallet provider
"""

import logging
import os
from typing import Callable, Sequence

from x402_mantle.exceptions import WalletConnectionError
from x402_mantle.wallets.base import WalletProvider
from x402_mantle.wallets.local import LocalAccountWallet

logger = logging.getLogger(__name__)

PRIVATE_KEY_ENV = "X402_PRIVATE_KEY"
NETWORK_ENV = "X402_NETWORK"

WalletFactory = Callable[[], WalletProvider | None]


def local_account_from_env() -> WalletProvider | None:
    """Build a LocalAccountWallet from X402_PRIVATE_KEY (and X402_NETWORK), if set"""
    private_key = os.environ.get(PRIVATE_KEY_ENV)
    if not private_key:
        return None
    network = os.environ.get(NETWORK_ENV)
    if network:
        return LocalAccountWallet(private_key, network)
    return LocalAccountWallet(private_key)


DEFAULT_WALLET_FACTORIES: tuple[WalletFactory, ...] = (local_account_from_env,)


def detect_wallet_provider(
    factories: Sequence[WalletFactory] | None = None,
) -> WalletProvider | None:
    """Return the first provider from factories that is available, or None"""
    for factory in factories if factories is not None else DEFAULT_WALLET_FACTORIES:
        provider = factory()
        if provider is not None and provider.is_available():
            logger.debug(f"Detected wallet provider: {type(provider).__name__}")
            return provider
    return None


async def connect_wallet(provider: WalletProvider | None = None) -> str:
    """
    Connect a wallet and return the active address.

    Detects a provider when none is given.

    Raises:
        WalletConnectionError: No provider found, or the connection was refused
    """
    wallet = provider or detect_wallet_provider()
    if wallet is None:
        raise WalletConnectionError(
            f"No wallet provider found. Set {PRIVATE_KEY_ENV} or pass a wallet explicitly."
        )
    return await wallet.connect()

"""
Wallet providers for x402 payments
"""

from x402_mantle.wallets.base import MessageSigner, WalletProvider
from x402_mantle.wallets.detection import connect_wallet, detect_wallet_provider
from x402_mantle.wallets.eip1193 import EIP1193Provider, Eip1193Wallet, normalize_wallet_error
from x402_mantle.wallets.jsonrpc import JsonRpcProvider
from x402_mantle.wallets.local import LocalAccountWallet
from x402_mantle.wallets.network import ensure_network, get_add_network_params

__all__ = [
    "EIP1193Provider",
    "Eip1193Wallet",
    "JsonRpcProvider",
    "LocalAccountWallet",
    "MessageSigner",
    "WalletProvider",
    "connect_wallet",
    "detect_wallet_provider",
    "ensure_network",
    "get_add_network_params",
    "normalize_wallet_error",
]

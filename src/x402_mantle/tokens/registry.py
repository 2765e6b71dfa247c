"""
Token registry - Centralized management of token configurations for all networks
"""

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from x402_mantle.config import NetworkRegistry
from x402_mantle.exceptions import UnknownTokenError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TokenConfig:
    """ERC-20 token information"""

    address: str
    decimals: int
    symbol: str | None = None


class TokenRegistry:
    """Token registry"""

    _tokens: dict[str, dict[str, TokenConfig]] = {
        "mantle": {
            "USDC": TokenConfig(
                address="0x09Bc4E0D864854c6aFB6eB9A9cdF58aC190D0dF9",
                decimals=6,
                symbol="USDC",
            ),
            "USDT": TokenConfig(
                address="0x201EBa5CC46D216Ce6DC03F6a759e8E766e956aE",
                decimals=6,
                symbol="USDT",
            ),
            "METH": TokenConfig(
                address="0xcDA86A272531e8640cD7F1a92c01839911B90bb0",
                decimals=18,
                symbol="mETH",
            ),
            "WMNT": TokenConfig(
                address="0x78c1b0C915c4FAA5FffA6CAbf0219DA63d7f4cb8",
                decimals=18,
                symbol="WMNT",
            ),
        },
        "mantle-sepolia": {
            "USDC": TokenConfig(
                address="0x09Bc4E0D864854c6aFB6eB9A9cdF58aC190D0dF9",
                decimals=6,
                symbol="USDC",
            ),
            "METH": TokenConfig(
                address="0xdEAddEaDdeadDEadDEADDEAddEADDEAddead1111",
                decimals=18,
                symbol="mETH",
            ),
            "WMNT": TokenConfig(
                address="0x78c1b0C915c4FAA5FffA6CAbf0219DA63d7f4cb8",
                decimals=18,
                symbol="WMNT",
            ),
        },
        "mantle-testnet": {
            "USDC": TokenConfig(
                address="0x09Bc4E0D864854c6aFB6eB9A9cdF58aC190D0dF9",
                decimals=6,
                symbol="USDC",
            ),
            "METH": TokenConfig(
                address="0xdEAddEaDdeadDEadDEADDEAddEADDEAddead1111",
                decimals=18,
                symbol="mETH",
            ),
            "WMNT": TokenConfig(
                address="0x78c1b0C915c4FAA5FffA6CAbf0219DA63d7f4cb8",
                decimals=18,
                symbol="WMNT",
            ),
        },
    }

    # Caller-registered tokens, checked before the built-ins
    _custom: dict[str, dict[str, TokenConfig]] = {}

    @classmethod
    def register_token(cls, network: str, symbol: str, token: TokenConfig) -> None:
        """Register a custom token for specified network

        Args:
            network: Network identifier (e.g. "mantle")
            symbol: Token symbol, matched case-insensitively
            token: TokenConfig to register
        """
        key = symbol.upper()
        if token.symbol is None:
            token = TokenConfig(address=token.address, decimals=token.decimals, symbol=key)
        cls._custom.setdefault(network.lower(), {})[key] = token

    @classmethod
    def find_token(cls, network: str, symbol: str) -> TokenConfig | None:
        """Resolve a token symbol on a network

        Returns None when the symbol should be paid in the network's
        native currency: it is the native symbol, or it is not registered.
        """
        network_key = network.lower()
        symbol_key = symbol.upper()

        custom = cls._custom.get(network_key, {}).get(symbol_key)
        if custom is not None:
            return custom

        if cls.is_native_symbol(network, symbol):
            return None

        return cls._tokens.get(network_key, {}).get(symbol_key)

    @classmethod
    def get_token(cls, network: str, symbol: str) -> TokenConfig:
        """Get token information for specified network and symbol

        Raises:
            UnknownTokenError: If token does not exist
        """
        token = cls.find_token(network, symbol)
        if token is None:
            raise UnknownTokenError(f"Unknown token {symbol} on network {network}")
        return token

    @classmethod
    def is_native_symbol(cls, network: str, symbol: str) -> bool:
        """Whether symbol names the native currency of a known network"""
        config = NetworkRegistry.find_network(network)
        if config is None:
            return False
        return config.native_currency.symbol.upper() == symbol.upper()

    @classmethod
    def find_by_address(cls, network: str, address: str) -> TokenConfig | None:
        """Find token information by contract address (case-insensitive)"""
        lower = address.lower()
        network_key = network.lower()
        for tokens in (cls._custom.get(network_key, {}), cls._tokens.get(network_key, {})):
            for info in tokens.values():
                if info.address.lower() == lower:
                    return info
        return None

    @classmethod
    def get_network_tokens(cls, network: str) -> dict[str, TokenConfig]:
        """Get all tokens for specified network, custom entries shadowing built-ins"""
        network_key = network.lower()
        tokens = dict(cls._tokens.get(network_key, {}))
        tokens.update(cls._custom.get(network_key, {}))
        return tokens


def get_token_config(symbol: str, network: str) -> TokenConfig | None:
    """Get token configuration; None means "treat as native currency" """
    return TokenRegistry.find_token(network, symbol)


def register_custom_tokens(
    network: str,
    tokens: Mapping[str, TokenConfig | Mapping[str, Any]],
) -> None:
    """Register custom tokens for a network

    Example::

        register_custom_tokens("mantle", {"MYTOKEN": {"address": "0x...", "decimals": 18}})
    """
    for symbol, config in tokens.items():
        if not isinstance(config, TokenConfig):
            config = TokenConfig(
                address=str(config["address"]),
                decimals=int(config["decimals"]),
                symbol=symbol.upper(),
            )
        TokenRegistry.register_token(network, symbol, config)
        logger.debug(f"Registered custom token {symbol.upper()} on {network}")

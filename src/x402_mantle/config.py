"""
X402 Network Configuration
Centralized configuration for chain IDs, RPC endpoints and explorers
"""

import os
from dataclasses import dataclass, field
from typing import Dict, Literal

from x402_mantle.exceptions import UnknownNetworkError

NetworkEnvironment = Literal["mainnet", "testnet"]


@dataclass(frozen=True)
class NativeCurrency:
    """Native currency of a network"""

    name: str
    symbol: str
    decimals: int = 18


@dataclass(frozen=True)
class NetworkConfig:
    """Network registry entry"""

    chain_id: int
    name: str
    rpc_url: str
    native_currency: NativeCurrency = field(
        default_factory=lambda: NativeCurrency(name="Native", symbol="ETH", decimals=18)
    )
    block_explorer: str | None = None
    environment: NetworkEnvironment = "testnet"


_MANTLE_CURRENCY = NativeCurrency(name="Mantle", symbol="MNT", decimals=18)


class NetworkRegistry:
    """Built-in networks plus a process-wide overlay of caller-registered ones"""

    # Default networks
    MANTLE = "mantle"
    MANTLE_SEPOLIA = "mantle-sepolia"
    MANTLE_TESTNET = "mantle-testnet"

    _networks: Dict[str, NetworkConfig] = {
        "mantle": NetworkConfig(
            chain_id=5000,
            name="Mantle",
            rpc_url="https://rpc.mantle.xyz",
            native_currency=_MANTLE_CURRENCY,
            block_explorer="https://explorer.mantle.xyz",
            environment="mainnet",
        ),
        "mantle-sepolia": NetworkConfig(
            chain_id=5003,
            name="Mantle Sepolia",
            rpc_url="https://rpc.sepolia.mantle.xyz",
            native_currency=_MANTLE_CURRENCY,
            block_explorer="https://explorer.sepolia.mantle.xyz",
            environment="testnet",
        ),
        "mantle-testnet": NetworkConfig(
            chain_id=5003,
            name="Mantle Testnet",
            rpc_url="https://rpc.sepolia.mantle.xyz",
            native_currency=_MANTLE_CURRENCY,
            block_explorer="https://explorer.sepolia.mantle.xyz",
            environment="testnet",
        ),
    }

    # Caller-registered networks, checked before the built-ins
    _custom: Dict[str, NetworkConfig] = {}

    @classmethod
    def register_network(cls, network: str, config: NetworkConfig) -> None:
        """Register a custom network, shadowing any built-in with the same identifier

        Args:
            network: Network identifier (e.g. "my-network")
            config: NetworkConfig to register
        """
        cls._custom[network.lower()] = config

    @classmethod
    def find_network(cls, network: str) -> NetworkConfig | None:
        """Look up a network, returning None when it is unknown"""
        key = network.lower()
        custom = cls._custom.get(key)
        if custom is not None:
            return custom
        return cls._networks.get(key)

    @classmethod
    def get_network(cls, network: str) -> NetworkConfig:
        """Get network configuration

        Args:
            network: Network identifier (e.g., "mantle", "mantle-sepolia")

        Returns:
            NetworkConfig for the network

        Raises:
            UnknownNetworkError: If network is neither registered nor built in
        """
        config = cls.find_network(network)
        if config is None:
            raise UnknownNetworkError(f"Unknown network: {network}")
        return config

    @classmethod
    def find_by_chain_id(cls, chain_id: int) -> tuple[str, NetworkConfig] | None:
        """Find the first network with the given chain ID, custom networks first"""
        for networks in (cls._custom, cls._networks):
            for key, config in networks.items():
                if config.chain_id == chain_id:
                    return key, config
        return None

    @classmethod
    def available_networks(cls) -> list[str]:
        """Built-in identifiers followed by custom ones, without duplicates"""
        names = list(cls._networks)
        names.extend(key for key in cls._custom if key not in cls._networks)
        return names


def get_network_config(network: str) -> NetworkConfig:
    """Get network configuration (custom registrations first, then built-ins)"""
    return NetworkRegistry.get_network(network)


def get_chain_id(network: str) -> int:
    """Get chain ID for network"""
    return NetworkRegistry.get_network(network).chain_id


def is_testnet(network: str) -> bool:
    return NetworkRegistry.get_network(network).environment == "testnet"


def is_mainnet(network: str) -> bool:
    return NetworkRegistry.get_network(network).environment == "mainnet"


def register_custom_network(network: str, config: NetworkConfig) -> None:
    """Register a custom network for the lifetime of the process

    Example::

        register_custom_network(
            "my-network",
            NetworkConfig(chain_id=12345, name="My Network", rpc_url="https://rpc.example.com"),
        )
    """
    NetworkRegistry.register_network(network, config)


def get_available_networks() -> list[str]:
    """Get all available networks (built-in + custom)"""
    return NetworkRegistry.available_networks()


def get_networks_by_environment(environment: NetworkEnvironment) -> list[str]:
    return [
        network
        for network in get_available_networks()
        if NetworkRegistry.get_network(network).environment == environment
    ]


def get_network_by_chain_id(chain_id: int) -> tuple[str, NetworkConfig] | None:
    return NetworkRegistry.find_by_chain_id(chain_id)


def get_rpc_url(network: str, custom_rpc_url: str | None = None) -> str:
    """Resolve the RPC URL for a network

    Checks in order:
    1. An explicit custom URL
    2. X402_RPC_URL_<NETWORK> (dashes become underscores), then X402_RPC_URL
    3. The registry entry
    """
    if custom_rpc_url:
        return custom_rpc_url

    env_key = "X402_RPC_URL_" + network.upper().replace("-", "_")
    env_rpc = os.environ.get(env_key) or os.environ.get("X402_RPC_URL")
    if env_rpc:
        return env_rpc

    return NetworkRegistry.get_network(network).rpc_url

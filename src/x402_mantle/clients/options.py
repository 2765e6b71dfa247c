"""
Client options, optionally loaded from the environment / a .env file
"""

import os
from dataclasses import dataclass, field, replace
from typing import Any, Awaitable, Callable, Mapping

from dotenv import load_dotenv

from x402_mantle.config import NetworkConfig, NetworkRegistry
from x402_mantle.exceptions import ConfigurationError
from x402_mantle.tokens import TokenConfig
from x402_mantle.types import PaymentRequest, PaymentResponse
from x402_mantle.wallets.base import WalletProvider

PaymentHandler = Callable[[PaymentRequest], Awaitable[PaymentResponse | None]]

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"Invalid boolean for {name}: {value!r}")


@dataclass
class ClientOptions:
    """Options for X402Client / X402HttpClient"""

    wallet: WalletProvider | None = None
    # Confirmation strategy; None uses the headless WalletPaymentHandler
    payment_handler: PaymentHandler | None = None
    network: str | None = None
    testnet: bool = False
    # (identifier, config) registered on initialize()
    custom_network: tuple[str, NetworkConfig] | None = None
    # Registered on default_network() on initialize()
    custom_tokens: Mapping[str, TokenConfig | Mapping[str, Any]] = field(default_factory=dict)
    auto_retry: bool = True
    auto_switch_network: bool = True
    strict_tokens: bool = False

    def default_network(self) -> str:
        """Network used for custom tokens when none is named explicitly"""
        if self.network:
            return self.network
        if self.custom_network is not None:
            return self.custom_network[0]
        return NetworkRegistry.MANTLE_SEPOLIA if self.testnet else NetworkRegistry.MANTLE

    @classmethod
    def from_env(
        cls,
        env_file: str | os.PathLike[str] | None = ".env",
        **overrides: Any,
    ) -> "ClientOptions":
        """
        Build options from X402_* environment variables.

        The .env file, when present, fills in variables that are not already
        set in the process environment. Keyword overrides win over both.

        Raises:
            ConfigurationError: A boolean variable has an unrecognized value
        """
        if env_file is not None:
            load_dotenv(env_file)

        options = cls()
        network = os.getenv("X402_NETWORK")
        if network:
            options.network = network

        for attr, name in (
            ("testnet", "X402_TESTNET"),
            ("auto_retry", "X402_AUTO_RETRY"),
            ("auto_switch_network", "X402_AUTO_SWITCH_NETWORK"),
            ("strict_tokens", "X402_STRICT_TOKENS"),
        ):
            value = os.getenv(name)
            if value is not None:
                setattr(options, attr, _parse_bool(name, value))

        return replace(options, **overrides)

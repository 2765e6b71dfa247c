"""
x402-mantle - x402 payment-protocol client for Mantle

Detects HTTP 402 challenges, pays them through a wallet and replays the
request with proof of payment.
"""

__version__ = "0.1.0"

from x402_mantle.clients import (
    ClientOptions,
    PaymentFlow,
    PaymentFlowState,
    WalletPaymentHandler,
    X402Client,
    X402HttpClient,
    get_payment_flow,
    x402_fetch,
)
from x402_mantle.config import (
    NativeCurrency,
    NetworkConfig,
    NetworkRegistry,
    get_chain_id,
    get_network_config,
    get_rpc_url,
    is_mainnet,
    is_testnet,
    register_custom_network,
)
from x402_mantle.encoding import (
    X402Header,
    amount_to_smallest_unit,
    encode_erc20_transfer,
    encode_payment_headers,
    parse_402,
)
from x402_mantle.exceptions import (
    ConfigurationError,
    InsufficientFundsError,
    InvalidAmountError,
    InvalidParamsError,
    InvalidPaymentAmountError,
    InvalidPaymentRequestError,
    ProviderRpcError,
    TransactionFailedError,
    UnknownNetworkError,
    UnknownTokenError,
    UnrecognizedChainError,
    UserRejectedError,
    ValidationError,
    WalletConnectionError,
    WalletError,
    X402Error,
)
from x402_mantle.payment import build_payment_transaction, process_payment
from x402_mantle.tokens import TokenConfig, TokenRegistry, get_token_config, register_custom_tokens
from x402_mantle.types import (
    AddEthereumChainParameter,
    PaymentRequest,
    PaymentResponse,
    TransactionRequest,
)
from x402_mantle.wallets import (
    Eip1193Wallet,
    JsonRpcProvider,
    LocalAccountWallet,
    WalletProvider,
    connect_wallet,
    detect_wallet_provider,
    ensure_network,
)

__all__ = [
    "__version__",
    # Types
    "PaymentRequest",
    "PaymentResponse",
    "TransactionRequest",
    "AddEthereumChainParameter",
    # Exceptions
    "X402Error",
    "ValidationError",
    "InvalidPaymentRequestError",
    "InvalidAmountError",
    "InvalidPaymentAmountError",
    "ConfigurationError",
    "UnknownNetworkError",
    "UnknownTokenError",
    "ProviderRpcError",
    "WalletError",
    "WalletConnectionError",
    "UserRejectedError",
    "UnrecognizedChainError",
    "InvalidParamsError",
    "InsufficientFundsError",
    "TransactionFailedError",
    # Registry
    "NativeCurrency",
    "NetworkConfig",
    "NetworkRegistry",
    "TokenConfig",
    "TokenRegistry",
    "get_network_config",
    "get_chain_id",
    "get_rpc_url",
    "is_testnet",
    "is_mainnet",
    "register_custom_network",
    "get_token_config",
    "register_custom_tokens",
    # Codec
    "X402Header",
    "parse_402",
    "encode_payment_headers",
    "amount_to_smallest_unit",
    "encode_erc20_transfer",
    # Wallets
    "WalletProvider",
    "Eip1193Wallet",
    "JsonRpcProvider",
    "LocalAccountWallet",
    "detect_wallet_provider",
    "connect_wallet",
    "ensure_network",
    # Payment
    "build_payment_transaction",
    "process_payment",
    # Clients
    "ClientOptions",
    "PaymentFlow",
    "PaymentFlowState",
    "WalletPaymentHandler",
    "X402Client",
    "X402HttpClient",
    "get_payment_flow",
    "x402_fetch",
]

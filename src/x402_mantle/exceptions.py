"""
x402 custom exception hierarchy
"""

from typing import Any


class X402Error(Exception):
    """x402 base exception"""

    pass


class ValidationError(X402Error):
    """Validation-related error"""

    pass


class InvalidPaymentRequestError(ValidationError):
    """Payment request is missing required fields or carries malformed values"""

    pass


class InvalidAmountError(ValidationError):
    """Amount is not a valid non-negative decimal or converts to zero"""

    def __init__(self, amount: str, message: str | None = None):
        self.amount = amount
        super().__init__(message or f"Invalid amount: {amount!r}")


class InvalidPaymentAmountError(InvalidAmountError):
    """Payment amount must be greater than zero in the token's smallest unit"""

    pass


class ConfigurationError(X402Error):
    """Configuration-related error"""

    pass


class UnknownNetworkError(ConfigurationError):
    """Network identifier is neither built in nor registered"""

    pass


class UnknownTokenError(ConfigurationError):
    """Unknown token"""

    pass


class ProviderRpcError(X402Error):
    """Raw error reported by an EIP-1193 provider"""

    def __init__(self, code: int | None, message: str, data: Any = None):
        self.code = code
        self.data = data
        super().__init__(message)


class WalletError(X402Error):
    """Wallet interaction failed"""

    def __init__(self, message: str, code: int | None = None, data: Any = None):
        self.code = code
        self.data = data
        super().__init__(message)


class WalletConnectionError(WalletError):
    """No wallet available, or the user refused to connect it"""

    pass


class UserRejectedError(WalletError):
    """User rejected the request in the wallet"""

    pass


class UnrecognizedChainError(WalletError):
    """Wallet does not know the requested chain"""

    def __init__(self, chain_id: int, message: str | None = None, code: int | None = 4902):
        self.chain_id = chain_id
        super().__init__(
            message or f"Network with chainId {chain_id} not found. Use add_network() first.",
            code=code,
        )


class InvalidParamsError(WalletError):
    """Wallet rejected the request parameters"""

    pass


class InsufficientFundsError(WalletError):
    """Account cannot cover value plus gas"""

    pass


class TransactionFailedError(WalletError):
    """Transaction execution failed"""

    pass

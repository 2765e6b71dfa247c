"""
x402 Client SDK
"""

from x402_mantle.clients.handler import WalletPaymentHandler
from x402_mantle.clients.options import ClientOptions, PaymentHandler
from x402_mantle.clients.x402_client import X402Client
from x402_mantle.clients.x402_http_client import (
    PaymentFlow,
    PaymentFlowState,
    X402HttpClient,
    get_payment_flow,
    x402_fetch,
)

__all__ = [
    "ClientOptions",
    "PaymentFlow",
    "PaymentFlowState",
    "PaymentHandler",
    "WalletPaymentHandler",
    "X402Client",
    "X402HttpClient",
    "get_payment_flow",
    "x402_fetch",
]

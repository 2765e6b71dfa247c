"""
Payment execution - turn a payment request into a signed on-chain transfer
"""

import logging
from datetime import datetime, timezone

from x402_mantle.encoding import (
    amount_to_smallest_unit,
    encode_erc20_transfer,
    normalize_address,
    to_hex_quantity,
)
from x402_mantle.exceptions import (
    InvalidAmountError,
    InvalidPaymentAmountError,
    InvalidPaymentRequestError,
    UnknownTokenError,
)
from x402_mantle.tokens import TokenRegistry, get_token_config
from x402_mantle.types import PaymentRequest, PaymentResponse, TransactionRequest
from x402_mantle.wallets.base import WalletProvider

logger = logging.getLogger(__name__)

DEFAULT_DECIMALS = 18


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_payment_transaction(
    request: PaymentRequest,
    *,
    strict_tokens: bool = False,
) -> TransactionRequest:
    """
    Build the transfer transaction for a payment request.

    A registered token yields an ERC-20 ``transfer`` to the token contract for
    the full amount. Anything else is paid in the network's native currency
    straight to the recipient.

    Args:
        request: Payment request parsed from a 402 response
        strict_tokens: Reject token symbols that are neither registered nor
            the network's native currency instead of paying natively

    Raises:
        InvalidPaymentRequestError: amount, recipient or network is missing,
            or the recipient is not an EVM address
        InvalidPaymentAmountError: amount is malformed, zero in smallest units
            or outside the uint256 range
        UnknownTokenError: strict_tokens is set and the token is unknown
    """
    if not request.amount or not request.recipient or not request.network:
        raise InvalidPaymentRequestError("Invalid payment request: missing required fields")

    token = get_token_config(request.token, request.network)
    if token is None and not TokenRegistry.is_native_symbol(request.network, request.token):
        if strict_tokens:
            raise UnknownTokenError(f"Unknown token {request.token} on network {request.network}")
        logger.warning(
            f"Token {request.token} is not registered on {request.network}, "
            f"paying in native currency"
        )

    decimals = token.decimals if token is not None else DEFAULT_DECIMALS
    try:
        amount = amount_to_smallest_unit(request.amount, decimals)
        if token is not None:
            data = encode_erc20_transfer(request.recipient, amount)
        else:
            recipient = normalize_address(request.recipient, "recipient")
            value = to_hex_quantity(amount)
    except InvalidAmountError as e:
        raise InvalidPaymentAmountError(request.amount, str(e)) from e

    if token is not None:
        logger.debug(f"ERC-20 transfer of {amount} {request.token} via {token.address}")
        return TransactionRequest(to=token.address, data=data)

    logger.debug(f"Native transfer of {amount} wei to {recipient}")
    return TransactionRequest(to=recipient, value=value)


async def process_payment(
    request: PaymentRequest,
    wallet: WalletProvider,
    *,
    strict_tokens: bool = False,
) -> PaymentResponse:
    """
    Execute a payment and return its proof.

    The request is validated and the transaction built before the wallet is
    contacted. Wallet errors propagate unchanged.
    """
    tx = build_payment_transaction(request, strict_tokens=strict_tokens)
    logger.info(
        f"Sending payment: {request.amount} {request.token} on {request.network} "
        f"to {request.recipient}"
    )
    tx_hash = await wallet.send_transaction(tx)
    logger.info(f"Payment submitted: {tx_hash}")
    return PaymentResponse(transaction_hash=tx_hash, timestamp=_utc_timestamp())

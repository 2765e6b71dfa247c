"""
Encoding utilities for x402 protocol

Covers the three wire formats the client touches: the 402 challenge headers,
the payment-proof headers attached to the retried request, and ERC-20
transfer calldata.
"""

import logging
import re
from enum import Enum
from typing import Mapping

import httpx
from eth_abi import decode, encode
from eth_utils import is_hex_address, to_checksum_address

from x402_mantle.abi import ERC20_TRANSFER_SELECTOR
from x402_mantle.exceptions import InvalidAmountError, InvalidPaymentRequestError
from x402_mantle.types import PaymentRequest, PaymentResponse

logger = logging.getLogger(__name__)

X402_PROTOCOL_VERSION = 1

PAYMENT_REQUIRED_STATUS = 402


class X402Header(str, Enum):
    """Closed set of x402 header names (protocol version 1)"""

    # Challenge, sent by the server with status 402
    AMOUNT = "X-402-Amount"
    TOKEN = "X-402-Token"
    NETWORK = "X-402-Network"
    RECIPIENT = "X-402-Recipient"
    CHAIN_ID = "X-402-Chain-Id"
    DESCRIPTION = "X-402-Description"
    ENDPOINT = "X-402-Endpoint"

    # Proof, sent by the client on the retried request
    TRANSACTION_HASH = "X-402-Transaction-Hash"
    TIMESTAMP = "X-402-Timestamp"


REQUIRED_CHALLENGE_HEADERS = (
    X402Header.AMOUNT,
    X402Header.TOKEN,
    X402Header.NETWORK,
    X402Header.RECIPIENT,
)

_DECIMAL_LITERAL = re.compile(r"([0-9]*)(?:\.([0-9]*))?")

UINT256_MAX = 2**256 - 1

# Decimal digits of UINT256_MAX
_UINT256_DIGITS = 78


def _header(headers: Mapping[str, str], name: X402Header) -> str | None:
    # httpx.Headers lookups are case-insensitive
    value = headers.get(name.value)
    if value is None:
        return None
    value = value.strip()
    return value or None


def parse_402(response: httpx.Response) -> PaymentRequest | None:
    """Parse a payment request from an HTTP 402 response.

    Returns None for any response that is not a well-formed x402 challenge:
    a status other than 402, or a 402 missing one of the required headers.
    Never raises.
    """
    if response.status_code != PAYMENT_REQUIRED_STATUS:
        return None

    headers = response.headers
    values = {name: _header(headers, name) for name in REQUIRED_CHALLENGE_HEADERS}
    missing = [name.value for name, value in values.items() if value is None]
    if missing:
        logger.debug(f"402 response is not an x402 challenge, missing headers: {missing}")
        return None

    chain_id: int | None = None
    raw_chain_id = _header(headers, X402Header.CHAIN_ID)
    if raw_chain_id is not None:
        try:
            if raw_chain_id.lower().startswith("0x"):
                chain_id = int(raw_chain_id, 16)
            else:
                chain_id = int(raw_chain_id)
        except ValueError:
            logger.warning(f"Ignoring malformed {X402Header.CHAIN_ID.value}: {raw_chain_id!r}")

    return PaymentRequest(
        amount=values[X402Header.AMOUNT],
        token=values[X402Header.TOKEN],
        network=values[X402Header.NETWORK],
        recipient=values[X402Header.RECIPIENT],
        chain_id=chain_id,
        description=_header(headers, X402Header.DESCRIPTION),
        endpoint=_header(headers, X402Header.ENDPOINT),
    )


def encode_payment_headers(
    payment: PaymentResponse,
    headers: httpx.Headers | Mapping[str, str] | None = None,
) -> httpx.Headers:
    """Attach payment proof to a copy of the caller's headers.

    The transaction hash header is always set; the timestamp header only
    when the payment carries one. Caller-supplied headers are preserved.
    """
    merged = httpx.Headers(headers)
    merged[X402Header.TRANSACTION_HASH.value] = payment.transaction_hash
    if payment.timestamp:
        merged[X402Header.TIMESTAMP.value] = payment.timestamp
    return merged


def decode_payment_headers(headers: httpx.Headers | Mapping[str, str]) -> PaymentResponse | None:
    """Read payment proof from request headers (the server-side counterpart)"""
    headers = httpx.Headers(headers)
    tx_hash = _header(headers, X402Header.TRANSACTION_HASH)
    if tx_hash is None:
        return None
    return PaymentResponse(
        transaction_hash=tx_hash,
        timestamp=_header(headers, X402Header.TIMESTAMP),
    )


def amount_to_smallest_unit(amount: str, decimals: int) -> int:
    """Convert a human-readable decimal amount to the token's smallest unit.

    Excess fractional digits are truncated, not rounded:
    ``amount_to_smallest_unit("1.5", 6) == 1_500_000``.

    Raises:
        InvalidAmountError: The literal is not a non-negative ASCII decimal,
            the converted amount is zero, or it does not fit in a uint256
    """
    if decimals < 0:
        raise InvalidAmountError(amount, f"Invalid decimals: {decimals}")

    literal = amount.strip()
    match = _DECIMAL_LITERAL.fullmatch(literal)
    if match is None or not (match.group(1) or match.group(2)):
        raise InvalidAmountError(amount)

    whole = (match.group(1) or "").lstrip("0")
    fraction = (match.group(2) or "").ljust(decimals, "0")[:decimals].lstrip("0")
    if len(whole) > _UINT256_DIGITS or len(fraction) > _UINT256_DIGITS:
        raise InvalidAmountError(amount, "Amount out of uint256 range")

    value = int(whole or "0") * 10**decimals + int(fraction or "0")
    if value == 0:
        raise InvalidAmountError(amount, f"Amount {amount!r} is zero in smallest units")
    if value > UINT256_MAX:
        raise InvalidAmountError(amount, "Amount out of uint256 range")
    return value


def to_hex_quantity(value: int) -> str:
    """Encode an integer as an Ethereum JSON-RPC quantity ("0x" + minimal hex)"""
    if value < 0:
        raise ValueError(f"Quantity must be non-negative: {value}")
    return hex(value)


def normalize_address(address: str, field_name: str = "address") -> str:
    """Validate an EVM address and return it checksummed"""
    value = address.strip()
    if not value.startswith("0x"):
        value = "0x" + value
    if not is_hex_address(value):
        raise InvalidPaymentRequestError(f"{field_name} is not a valid EVM address: {address!r}")
    return to_checksum_address(value)


def encode_erc20_transfer(to: str, amount: int) -> str:
    """Encode ERC-20 ``transfer(address,uint256)`` calldata"""
    if amount < 0 or amount > UINT256_MAX:
        raise InvalidAmountError(str(amount), f"Amount out of uint256 range: {amount}")
    recipient = normalize_address(to, "recipient")
    args = encode(["address", "uint256"], [recipient, amount])
    return ERC20_TRANSFER_SELECTOR + args.hex()


def decode_erc20_transfer(data: str) -> tuple[str, int]:
    """Decode ERC-20 transfer calldata into (recipient, amount)"""
    raw = data[2:] if data.startswith("0x") else data
    if not raw.lower().startswith(ERC20_TRANSFER_SELECTOR[2:]):
        raise ValueError("Calldata is not an ERC-20 transfer")
    to, amount = decode(["address", "uint256"], bytes.fromhex(raw[8:]))
    return to_checksum_address(to), amount

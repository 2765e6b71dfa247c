"""
Tests for x402 header codec and transfer encoding
"""

import httpx
import pytest
from eth_utils import function_signature_to_4byte_selector

from x402_mantle.abi import ERC20_TRANSFER_SELECTOR, ERC20_TRANSFER_SIGNATURE
from x402_mantle.encoding import (
    X402Header,
    amount_to_smallest_unit,
    decode_erc20_transfer,
    decode_payment_headers,
    encode_erc20_transfer,
    encode_payment_headers,
    parse_402,
    to_hex_quantity,
)
from x402_mantle.exceptions import InvalidAmountError, InvalidPaymentRequestError
from x402_mantle.types import PaymentResponse

RECIPIENT = "0x2222222222222222222222222222222222222222"

CHALLENGE_HEADERS = {
    "X-402-Amount": "1.5",
    "X-402-Token": "USDC",
    "X-402-Network": "mantle",
    "X-402-Recipient": RECIPIENT,
}


def test_parse_402_ignores_non_402():
    """Any status other than 402 is passed through"""
    response = httpx.Response(200, headers=CHALLENGE_HEADERS)
    assert parse_402(response) is None


def test_parse_402_reads_required_headers():
    """Test parsing a well-formed challenge"""
    request = parse_402(httpx.Response(402, headers=CHALLENGE_HEADERS))

    assert request is not None
    assert request.amount == "1.5"
    assert request.token == "USDC"
    assert request.network == "mantle"
    assert request.recipient == RECIPIENT
    assert request.chain_id is None


def test_parse_402_is_case_insensitive():
    """Header names are matched regardless of case"""
    headers = {name.lower(): value for name, value in CHALLENGE_HEADERS.items()}
    request = parse_402(httpx.Response(402, headers=headers))

    assert request is not None
    assert request.amount == "1.5"


@pytest.mark.parametrize("missing", list(CHALLENGE_HEADERS))
def test_parse_402_missing_header_returns_none(missing):
    """A 402 without every required header is not an x402 challenge"""
    headers = {k: v for k, v in CHALLENGE_HEADERS.items() if k != missing}
    assert parse_402(httpx.Response(402, headers=headers)) is None


def test_parse_402_blank_header_returns_none():
    """Blank values count as missing"""
    headers = {**CHALLENGE_HEADERS, "X-402-Amount": "   "}
    assert parse_402(httpx.Response(402, headers=headers)) is None


def test_parse_402_optional_headers():
    """Test chain ID, description and endpoint headers"""
    headers = {
        **CHALLENGE_HEADERS,
        "X-402-Chain-Id": "5000",
        "X-402-Description": "Premium weather data",
        "X-402-Endpoint": "/api/weather",
        "X-Unrelated": "ignored",
    }
    request = parse_402(httpx.Response(402, headers=headers))

    assert request.chain_id == 5000
    assert request.description == "Premium weather data"
    assert request.endpoint == "/api/weather"


def test_parse_402_hex_chain_id():
    """Test hex-encoded chain ID"""
    headers = {**CHALLENGE_HEADERS, "X-402-Chain-Id": "0x138b"}
    assert parse_402(httpx.Response(402, headers=headers)).chain_id == 5003


def test_parse_402_malformed_chain_id_is_ignored():
    """A malformed chain ID does not invalidate the challenge"""
    headers = {**CHALLENGE_HEADERS, "X-402-Chain-Id": "mantle"}
    request = parse_402(httpx.Response(402, headers=headers))

    assert request is not None
    assert request.chain_id is None


def test_encode_payment_headers_preserves_caller_headers():
    """Proof headers are added next to the caller's headers"""
    payment = PaymentResponse(transaction_hash="0xabc", timestamp="2024-01-01T00:00:00.000Z")
    headers = encode_payment_headers(
        payment, {"Authorization": "Bearer token", "Accept": "application/json"}
    )

    assert headers["Authorization"] == "Bearer token"
    assert headers["Accept"] == "application/json"
    assert headers[X402Header.TRANSACTION_HASH.value] == "0xabc"
    assert headers[X402Header.TIMESTAMP.value] == "2024-01-01T00:00:00.000Z"


def test_encode_payment_headers_without_timestamp():
    """Timestamp header is only set when present"""
    headers = encode_payment_headers(PaymentResponse(transaction_hash="0xabc"))

    assert headers["x-402-transaction-hash"] == "0xabc"
    assert "x-402-timestamp" not in headers


def test_encode_payment_headers_does_not_mutate_input():
    """The caller's header mapping is left untouched"""
    original = {"Authorization": "Bearer token"}
    encode_payment_headers(PaymentResponse(transaction_hash="0xabc"), original)
    assert original == {"Authorization": "Bearer token"}


def test_decode_payment_headers():
    """Test reading payment proof back from request headers"""
    proof = decode_payment_headers(
        {"x-402-transaction-hash": "0xabc", "x-402-timestamp": "2024-01-01T00:00:00.000Z"}
    )

    assert proof.transaction_hash == "0xabc"
    assert proof.timestamp == "2024-01-01T00:00:00.000Z"
    assert decode_payment_headers({"Authorization": "Bearer token"}) is None


@pytest.mark.parametrize(
    "amount,decimals,expected",
    [
        ("1.5", 6, 1_500_000),
        ("1", 18, 1_000_000_000_000_000_000),
        ("0.01", 18, 10_000_000_000_000_000),
        (".5", 2, 50),
        ("2.", 2, 200),
        ("1.2345678", 6, 1_234_567),
        ("100", 0, 100),
    ],
)
def test_amount_to_smallest_unit(amount, decimals, expected):
    """Test decimal to smallest-unit conversion (truncating excess precision)"""
    assert amount_to_smallest_unit(amount, decimals) == expected


@pytest.mark.parametrize(
    "amount", ["0.0000001", "0", "0.000", "-1", "1e6", "abc", "", ".", "1.2.3"]
)
def test_amount_to_smallest_unit_rejects(amount):
    """Zero results and non-decimal literals raise InvalidAmountError"""
    with pytest.raises(InvalidAmountError):
        amount_to_smallest_unit(amount, 6)


@pytest.mark.parametrize("amount", ["１", "١.5", "1.٥", "১"])
def test_amount_to_smallest_unit_rejects_non_ascii_digits(amount):
    """Only ASCII 0-9 count as digits"""
    with pytest.raises(InvalidAmountError):
        amount_to_smallest_unit(amount, 6)


def test_amount_to_smallest_unit_uint256_bounds():
    """The largest uint256 converts; anything above it is rejected"""
    assert amount_to_smallest_unit(str(2**256 - 1), 0) == 2**256 - 1
    assert amount_to_smallest_unit("000" + "0" * 5000 + "7", 0) == 7

    with pytest.raises(InvalidAmountError):
        amount_to_smallest_unit(str(2**256), 0)
    with pytest.raises(InvalidAmountError):
        amount_to_smallest_unit("1" * 78, 18)


@pytest.mark.parametrize("amount", ["1" * 5000, "0." + "1" * 5000, "9" * 5000 + ".9"])
def test_amount_to_smallest_unit_rejects_oversized_literals(amount):
    """Huge literals fail as InvalidAmountError, never as int() ValueError"""
    with pytest.raises(InvalidAmountError):
        amount_to_smallest_unit(amount, 5000)


def test_to_hex_quantity():
    """Test JSON-RPC quantity encoding"""
    assert to_hex_quantity(0) == "0x0"
    assert to_hex_quantity(1_500_000) == "0x16e360"
    with pytest.raises(ValueError):
        to_hex_quantity(-1)


def test_encode_erc20_transfer():
    """Test canonical transfer(address,uint256) calldata"""
    data = encode_erc20_transfer(RECIPIENT, 1_500_000)

    assert data == (
        "0xa9059cbb"
        + "000000000000000000000000" + RECIPIENT[2:]
        + "000000000000000000000000000000000000000000000000000000000016e360"
    )
    assert decode_erc20_transfer(data) == (RECIPIENT, 1_500_000)


def test_encode_erc20_transfer_rejects_bad_recipient():
    """Test invalid recipient address"""
    with pytest.raises(InvalidPaymentRequestError):
        encode_erc20_transfer("0xnot-an-address", 1)


def test_decode_erc20_transfer_rejects_other_calldata():
    """Test decoding calldata for a different function"""
    with pytest.raises(ValueError):
        decode_erc20_transfer("0x095ea7b3" + "00" * 64)


def test_transfer_selector_matches_signature():
    """The hardcoded selector is the keccak prefix of the transfer signature"""
    selector = function_signature_to_4byte_selector(ERC20_TRANSFER_SIGNATURE)
    assert "0x" + selector.hex() == ERC20_TRANSFER_SELECTOR

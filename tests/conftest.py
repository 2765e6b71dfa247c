"""
Pytest configuration and fixtures
"""

import os
from unittest.mock import AsyncMock, MagicMock

import pytest

from x402_mantle.config import NetworkRegistry
from x402_mantle.tokens import TokenRegistry
from x402_mantle.types import PaymentRequest

TEST_ACCOUNT = "0x1111111111111111111111111111111111111111"
TEST_RECIPIENT = "0x2222222222222222222222222222222222222222"
TEST_TX_HASH = "0x" + "ab" * 32


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture(autouse=True)
def isolated_registries():
    """Snapshot the custom network/token overlays and restore them after each test"""
    networks = dict(NetworkRegistry._custom)
    tokens = {network: dict(entries) for network, entries in TokenRegistry._custom.items()}
    yield
    NetworkRegistry._custom.clear()
    NetworkRegistry._custom.update(networks)
    TokenRegistry._custom.clear()
    TokenRegistry._custom.update(tokens)


@pytest.fixture(autouse=True)
def clean_x402_env(monkeypatch):
    """Hide X402_* variables from tests, including ones a .env file loads"""
    for name in list(os.environ):
        if name.startswith("X402_"):
            monkeypatch.delenv(name)
    yield
    for name in list(os.environ):
        if name.startswith("X402_"):
            del os.environ[name]


@pytest.fixture
def mock_evm_private_key():
    """Mock EVM private key for testing"""
    return "0x0123456789abcdef0123456789abcdef0123456789abcdef0123456789abcdef"


@pytest.fixture
def usdc_payment_request():
    """1.5 USDC on Mantle mainnet"""
    return PaymentRequest(
        amount="1.5",
        token="USDC",
        network="mantle",
        recipient=TEST_RECIPIENT,
    )


@pytest.fixture
def mnt_payment_request():
    """0.01 MNT on Mantle Sepolia"""
    return PaymentRequest(
        amount="0.01",
        token="MNT",
        network="mantle-sepolia",
        recipient=TEST_RECIPIENT,
    )


@pytest.fixture
def mock_wallet():
    """Connected wallet double on Mantle mainnet"""
    wallet = MagicMock()
    wallet.is_available.return_value = True
    wallet.connect = AsyncMock(return_value=TEST_ACCOUNT)
    wallet.get_account = AsyncMock(return_value=TEST_ACCOUNT)
    wallet.get_chain_id = AsyncMock(return_value=5000)
    wallet.switch_network = AsyncMock()
    wallet.add_network = AsyncMock()
    wallet.send_transaction = AsyncMock(return_value=TEST_TX_HASH)
    return wallet

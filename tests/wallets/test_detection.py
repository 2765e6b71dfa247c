"""
Tests for wallet detection
"""

from unittest.mock import MagicMock

import pytest

from x402_mantle.exceptions import WalletConnectionError
from x402_mantle.wallets import LocalAccountWallet, connect_wallet, detect_wallet_provider


def make_provider(available: bool):
    provider = MagicMock()
    provider.is_available.return_value = available
    return provider


def test_detect_picks_first_available():
    """Factories are tried in order; None and unavailable providers are skipped"""
    unavailable = make_provider(False)
    available = make_provider(True)
    later = make_provider(True)

    detected = detect_wallet_provider(
        [lambda: None, lambda: unavailable, lambda: available, lambda: later]
    )
    assert detected is available


def test_detect_nothing_available():
    """Test detection with no usable provider"""
    assert detect_wallet_provider([lambda: None, lambda: make_provider(False)]) is None
    assert detect_wallet_provider() is None


def test_detect_private_key_from_env(monkeypatch, mock_evm_private_key):
    """X402_PRIVATE_KEY yields a LocalAccountWallet"""
    monkeypatch.setenv("X402_PRIVATE_KEY", mock_evm_private_key)

    assert isinstance(detect_wallet_provider(), LocalAccountWallet)


@pytest.mark.anyio
async def test_detect_private_key_network_from_env(monkeypatch, mock_evm_private_key):
    """X402_NETWORK selects the wallet's initial chain"""
    monkeypatch.setenv("X402_PRIVATE_KEY", mock_evm_private_key)
    monkeypatch.setenv("X402_NETWORK", "mantle-sepolia")

    assert await detect_wallet_provider().get_chain_id() == 5003


@pytest.mark.anyio
async def test_connect_wallet_without_provider():
    """Test connecting when nothing is detected"""
    with pytest.raises(WalletConnectionError):
        await connect_wallet()


@pytest.mark.anyio
async def test_connect_wallet_with_provider(mock_wallet):
    """Test connecting an explicit provider"""
    assert await connect_wallet(mock_wallet) == "0x1111111111111111111111111111111111111111"
    mock_wallet.connect.assert_awaited_once()

"""
Tests for client options
"""

import pytest

from x402_mantle.clients import ClientOptions
from x402_mantle.config import NetworkConfig
from x402_mantle.exceptions import ConfigurationError


def test_defaults():
    """Test default options"""
    options = ClientOptions()

    assert options.wallet is None
    assert options.payment_handler is None
    assert options.auto_retry is True
    assert options.auto_switch_network is True
    assert options.strict_tokens is False
    assert options.default_network() == "mantle"


def test_default_network():
    """Explicit network, then custom network, then testnet flag"""
    devnet = NetworkConfig(chain_id=1337, name="Devnet", rpc_url="http://localhost:8545")
    custom = ("devnet", devnet)

    assert ClientOptions(testnet=True).default_network() == "mantle-sepolia"
    assert ClientOptions(custom_network=custom, testnet=True).default_network() == "devnet"
    assert ClientOptions(network="mantle-testnet", custom_network=custom).default_network() == (
        "mantle-testnet"
    )


def test_from_env(monkeypatch):
    """Test reading X402_* variables"""
    monkeypatch.setenv("X402_NETWORK", "mantle-sepolia")
    monkeypatch.setenv("X402_AUTO_RETRY", "false")
    monkeypatch.setenv("X402_STRICT_TOKENS", "1")

    options = ClientOptions.from_env(env_file=None)

    assert options.network == "mantle-sepolia"
    assert options.auto_retry is False
    assert options.strict_tokens is True
    assert options.auto_switch_network is True


def test_from_env_file(tmp_path):
    """Test loading a .env file"""
    env_file = tmp_path / ".env"
    env_file.write_text("X402_TESTNET=yes\nX402_AUTO_SWITCH_NETWORK=off\n")

    options = ClientOptions.from_env(env_file)

    assert options.testnet is True
    assert options.auto_switch_network is False
    assert options.default_network() == "mantle-sepolia"


def test_process_env_wins_over_env_file(tmp_path, monkeypatch):
    """Variables already set are not overridden by the .env file"""
    env_file = tmp_path / ".env"
    env_file.write_text("X402_NETWORK=mantle-testnet\n")
    monkeypatch.setenv("X402_NETWORK", "mantle")

    assert ClientOptions.from_env(env_file).network == "mantle"


def test_overrides_win(monkeypatch, mock_wallet):
    """Keyword overrides take precedence over the environment"""
    monkeypatch.setenv("X402_AUTO_RETRY", "true")

    options = ClientOptions.from_env(env_file=None, auto_retry=False, wallet=mock_wallet)

    assert options.auto_retry is False
    assert options.wallet is mock_wallet


def test_invalid_boolean(monkeypatch):
    """Test unparseable boolean values"""
    monkeypatch.setenv("X402_TESTNET", "maybe")

    with pytest.raises(ConfigurationError):
        ClientOptions.from_env(env_file=None)

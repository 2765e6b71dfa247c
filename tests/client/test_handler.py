"""
Tests for the default wallet payment strategy
"""

import logging

import pytest

from x402_mantle.clients import WalletPaymentHandler
from x402_mantle.exceptions import (
    InsufficientFundsError,
    InvalidParamsError,
    InvalidPaymentRequestError,
    TransactionFailedError,
    UnknownNetworkError,
    UnrecognizedChainError,
    UserRejectedError,
    WalletConnectionError,
)


@pytest.mark.anyio
async def test_pays_with_wallet(usdc_payment_request, mock_wallet):
    """Test the happy path"""
    payment = await WalletPaymentHandler(mock_wallet)(usdc_payment_request)

    assert payment.transaction_hash == "0x" + "ab" * 32
    mock_wallet.connect.assert_not_awaited()
    mock_wallet.switch_network.assert_not_awaited()


@pytest.mark.anyio
async def test_no_wallet_resolves_to_none(usdc_payment_request):
    """Without a wallet the payment cannot happen"""
    assert await WalletPaymentHandler(None)(usdc_payment_request) is None


@pytest.mark.anyio
async def test_confirm_declined(usdc_payment_request, mock_wallet):
    """A False confirmation cancels before the wallet is used"""
    handler = WalletPaymentHandler(mock_wallet, confirm=lambda request: False)

    assert await handler(usdc_payment_request) is None
    mock_wallet.send_transaction.assert_not_awaited()


@pytest.mark.anyio
async def test_async_confirm(usdc_payment_request, mock_wallet):
    """Async confirmation callbacks are awaited"""
    seen = []

    async def confirm(request):
        seen.append(request)
        return True

    payment = await WalletPaymentHandler(mock_wallet, confirm=confirm)(usdc_payment_request)

    assert payment is not None
    assert seen == [usdc_payment_request]


@pytest.mark.anyio
async def test_connects_when_no_account(usdc_payment_request, mock_wallet):
    """Test connecting a disconnected wallet first"""
    mock_wallet.get_account.return_value = None

    await WalletPaymentHandler(mock_wallet)(usdc_payment_request)

    mock_wallet.connect.assert_awaited_once()


@pytest.mark.anyio
async def test_switches_network(mnt_payment_request, mock_wallet):
    """The wallet is moved to the payment's chain"""
    await WalletPaymentHandler(mock_wallet)(mnt_payment_request)

    mock_wallet.switch_network.assert_awaited_once_with(5003)


@pytest.mark.anyio
async def test_adds_unknown_network(mnt_payment_request, mock_wallet):
    """Test adding a chain the wallet does not know"""
    mock_wallet.switch_network.side_effect = UnrecognizedChainError(5003)

    payment = await WalletPaymentHandler(mock_wallet)(mnt_payment_request)

    assert payment is not None
    mock_wallet.add_network.assert_awaited_once()


@pytest.mark.anyio
async def test_auto_switch_disabled(mnt_payment_request, mock_wallet):
    """Network enforcement can be turned off"""
    await WalletPaymentHandler(mock_wallet, auto_switch_network=False)(mnt_payment_request)

    mock_wallet.switch_network.assert_not_awaited()
    mock_wallet.send_transaction.assert_awaited_once()


@pytest.mark.anyio
async def test_chain_id_mismatch(usdc_payment_request, mock_wallet):
    """A challenge whose chain ID disagrees with its network is rejected"""
    request = usdc_payment_request.model_copy(update={"chain_id": 5003})

    with pytest.raises(InvalidPaymentRequestError):
        await WalletPaymentHandler(mock_wallet)(request)
    mock_wallet.send_transaction.assert_not_awaited()


@pytest.mark.anyio
async def test_matching_chain_id(usdc_payment_request, mock_wallet):
    """Test a consistent chain ID"""
    request = usdc_payment_request.model_copy(update={"chain_id": 5000})

    assert await WalletPaymentHandler(mock_wallet)(request) is not None


@pytest.mark.anyio
async def test_user_rejection_resolves_to_none(usdc_payment_request, mock_wallet):
    """Declining in the wallet is a cancellation, not an error"""
    mock_wallet.send_transaction.side_effect = UserRejectedError("rejected", code=4001)

    assert await WalletPaymentHandler(mock_wallet)(usdc_payment_request) is None


@pytest.mark.anyio
@pytest.mark.parametrize(
    "error",
    [
        InsufficientFundsError("Insufficient funds"),
        TransactionFailedError("execution reverted"),
        InvalidParamsError("bad params", code=-32602),
    ],
)
async def test_wallet_failures_resolve_to_none(usdc_payment_request, mock_wallet, caplog, error):
    """A payment that fails in the wallet resolves to None with a warning"""
    mock_wallet.send_transaction.side_effect = error

    with caplog.at_level(logging.WARNING):
        assert await WalletPaymentHandler(mock_wallet)(usdc_payment_request) is None
    assert type(error).__name__ in caplog.text


@pytest.mark.anyio
async def test_connection_failure_resolves_to_none(usdc_payment_request, mock_wallet):
    """A wallet that cannot connect means no payment"""
    mock_wallet.get_account.return_value = None
    mock_wallet.connect.side_effect = WalletConnectionError("no accounts")

    assert await WalletPaymentHandler(mock_wallet)(usdc_payment_request) is None
    mock_wallet.send_transaction.assert_not_awaited()


@pytest.mark.anyio
async def test_unknown_network_propagates(usdc_payment_request, mock_wallet):
    """Configuration errors are not payment failures"""
    request = usdc_payment_request.model_copy(update={"network": "nowhere"})

    with pytest.raises(UnknownNetworkError):
        await WalletPaymentHandler(mock_wallet)(request)
    mock_wallet.send_transaction.assert_not_awaited()

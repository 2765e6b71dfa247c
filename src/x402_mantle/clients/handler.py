"""
WalletPaymentHandler - headless confirmation strategy that pays with a wallet
"""

import inspect
import logging
from typing import Awaitable, Callable

from x402_mantle.config import NetworkRegistry
from x402_mantle.exceptions import InvalidPaymentRequestError, UserRejectedError, WalletError
from x402_mantle.payment import process_payment
from x402_mantle.types import PaymentRequest, PaymentResponse
from x402_mantle.wallets.base import WalletProvider
from x402_mantle.wallets.network import ensure_network

logger = logging.getLogger(__name__)

ConfirmCallback = Callable[[PaymentRequest], bool | Awaitable[bool]]


class WalletPaymentHandler:
    """
    Default payment strategy: confirm, connect, switch network, pay.

    Instances are awaitable callables with the collaborator signature
    ``async (PaymentRequest) -> PaymentResponse | None``. None means the
    payment did not happen, including any WalletError raised while paying.
    Request validation and configuration errors propagate.
    """

    def __init__(
        self,
        wallet: WalletProvider | None,
        *,
        confirm: ConfirmCallback | None = None,
        auto_switch_network: bool = True,
        strict_tokens: bool = False,
    ) -> None:
        """
        Args:
            wallet: Wallet that pays; None makes every payment resolve to None
            confirm: Optional gate, sync or async; returning False cancels
            auto_switch_network: Switch (or add) the target chain before paying
            strict_tokens: Reject unknown token symbols instead of paying natively
        """
        self._wallet = wallet
        self._confirm = confirm
        self._auto_switch_network = auto_switch_network
        self._strict_tokens = strict_tokens

    async def _confirmed(self, request: PaymentRequest) -> bool:
        if self._confirm is None:
            return True
        result = self._confirm(request)
        if inspect.isawaitable(result):
            result = await result
        return bool(result)

    def _check_chain_id(self, request: PaymentRequest) -> None:
        if request.chain_id is None:
            return
        expected = NetworkRegistry.get_network(request.network).chain_id
        if request.chain_id != expected:
            raise InvalidPaymentRequestError(
                f"Chain ID {request.chain_id} does not match network "
                f"{request.network} (chain {expected})"
            )

    async def __call__(self, request: PaymentRequest) -> PaymentResponse | None:
        if self._wallet is None:
            logger.warning("No wallet available, cannot pay for request")
            return None

        if not await self._confirmed(request):
            logger.info("Payment declined")
            return None

        self._check_chain_id(request)

        try:
            if not await self._wallet.get_account():
                await self._wallet.connect()
            if self._auto_switch_network:
                await ensure_network(self._wallet, request.network)
            return await process_payment(request, self._wallet, strict_tokens=self._strict_tokens)
        except UserRejectedError as e:
            logger.info(f"Payment rejected in wallet: {e}")
            return None
        except WalletError as e:
            logger.warning(f"Payment failed in wallet: {type(e).__name__}: {e}")
            return None

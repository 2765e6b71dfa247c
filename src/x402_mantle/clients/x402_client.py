"""
X402Client - Core payment client for x402 protocol
"""

import logging

from x402_mantle.clients.handler import WalletPaymentHandler
from x402_mantle.clients.options import ClientOptions, PaymentHandler
from x402_mantle.config import register_custom_network
from x402_mantle.tokens import register_custom_tokens
from x402_mantle.types import PaymentRequest, PaymentResponse
from x402_mantle.wallets.base import WalletProvider
from x402_mantle.wallets.detection import detect_wallet_provider

logger = logging.getLogger(__name__)


class X402Client:
    """
    Core payment client for x402 protocol.

    Resolves the wallet, applies custom network/token registrations and
    runs the confirmation strategy for each payment request.
    """

    def __init__(self, options: ClientOptions | None = None) -> None:
        """
        Initialize X402Client.

        Args:
            options: Client options. If None, defaults are used and the wallet
                     is detected on initialize().
        """
        self._options = options or ClientOptions()
        self._wallet: WalletProvider | None = None
        self._handler: PaymentHandler | None = None
        self._initialized = False

    @property
    def options(self) -> ClientOptions:
        return self._options

    @property
    def wallet(self) -> WalletProvider | None:
        return self._wallet

    def initialize(self) -> "X402Client":
        """
        Resolve the wallet and register custom networks and tokens.

        Safe to call more than once; only the first call has an effect.

        Returns:
            self for method chaining
        """
        if self._initialized:
            return self

        options = self._options
        if options.custom_network is not None:
            network_id, network_config = options.custom_network
            register_custom_network(network_id, network_config)
            logger.info(f"Registered custom network {network_id} (chain {network_config.chain_id})")

        if options.custom_tokens:
            register_custom_tokens(options.default_network(), options.custom_tokens)

        self._wallet = options.wallet or detect_wallet_provider()
        if self._wallet is None:
            logger.warning("No wallet provider configured or detected")

        if options.payment_handler is not None:
            self._handler = options.payment_handler
        else:
            self._handler = WalletPaymentHandler(
                self._wallet,
                auto_switch_network=options.auto_switch_network,
                strict_tokens=options.strict_tokens,
            )

        self._initialized = True
        return self

    async def handle_payment(self, request: PaymentRequest) -> PaymentResponse | None:
        """
        Obtain payment proof for a request.

        Returns:
            PaymentResponse, or None if the payment was cancelled or could not be made
        """
        self.initialize()
        logger.info(
            f"Handling payment request: {request.amount} {request.token} "
            f"on {request.network} to {request.recipient}"
        )
        return await self._handler(request)

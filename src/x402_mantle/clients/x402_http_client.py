"""
X402HttpClient - HTTP client adapter with automatic 402 payment handling
"""

import logging
from enum import Enum
from typing import Any

import httpx

from x402_mantle.clients.options import ClientOptions
from x402_mantle.clients.x402_client import X402Client
from x402_mantle.encoding import encode_payment_headers, parse_402
from x402_mantle.types import PaymentRequest, PaymentResponse

logger = logging.getLogger(__name__)


class PaymentFlowState(str, Enum):
    """States of a single request_with_payment call"""

    IDLE = "idle"
    REQUEST_SENT = "request_sent"
    PASSED_THROUGH = "passed_through"
    CHALLENGE_PARSED = "challenge_parsed"
    AWAITING_CONFIRMATION = "awaiting_confirmation"
    CANCELLED = "cancelled"
    RETRYING_WITH_PROOF = "retrying_with_proof"
    COMPLETED = "completed"


# Key under which the returned httpx.Response carries its PaymentFlow
PAYMENT_FLOW_EXTENSION = "x402_payment_flow"


class PaymentFlow:
    """State of one request_with_payment call, owned by that call only"""

    def __init__(self, method: str, url: str) -> None:
        self.method = method
        self.url = url
        self.state = PaymentFlowState.IDLE
        self.history = [PaymentFlowState.IDLE]
        self.payment_request: PaymentRequest | None = None
        self.payment: PaymentResponse | None = None

    def transition(self, state: PaymentFlowState) -> None:
        logger.debug(
            f"Payment flow {self.method} {self.url}: {self.state.value} -> {state.value}"
        )
        self.state = state
        self.history.append(state)

    def finish(self, state: PaymentFlowState, response: httpx.Response) -> httpx.Response:
        self.transition(state)
        response.extensions[PAYMENT_FLOW_EXTENSION] = self
        return response


def get_payment_flow(response: httpx.Response) -> PaymentFlow | None:
    """Return the payment flow record of a response from X402HttpClient"""
    return response.extensions.get(PAYMENT_FLOW_EXTENSION)


class X402HttpClient:
    """
    HTTP client adapter with automatic 402 payment handling.

    Wraps httpx.AsyncClient to automatically handle 402 Payment Required responses.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        x402_client: X402Client | None = None,
        *,
        auto_retry: bool | None = None,
    ) -> None:
        """
        Initialize HTTP client adapter.

        Args:
            http_client: httpx.AsyncClient instance
            x402_client: X402Client instance (optional, defaults to one with default options)
            auto_retry: Override the client's auto_retry option (optional)
        """
        self._http_client = http_client
        self._x402_client = x402_client or X402Client()
        if auto_retry is None:
            auto_retry = self._x402_client.options.auto_retry
        self._auto_retry = auto_retry

    async def request_with_payment(
        self,
        method: str,
        url: str,
        **kwargs: Any,
    ) -> httpx.Response:
        """
        Make HTTP request with automatic 402 payment handling.

        Args:
            method: HTTP method (GET, POST, etc.)
            url: Request URL
            **kwargs: Additional httpx request parameters

        Returns:
            httpx.Response; its PaymentFlow is available via get_payment_flow()

        Flow:
            1. Send original request
            2. If not an x402 challenge, return the response unchanged
            3. Obtain payment proof from the client's payment strategy
            4. Retry once with X-402-Transaction-Hash / X-402-Timestamp headers
        """
        flow = PaymentFlow(method, url)
        logger.info(f"Making {method} request to {url}")
        response = await self._http_client.request(method, url, **kwargs)
        flow.transition(PaymentFlowState.REQUEST_SENT)
        logger.info(f"Received response: status={response.status_code}")

        payment_request = parse_402(response)
        if payment_request is None:
            return flow.finish(PaymentFlowState.PASSED_THROUGH, response)

        flow.payment_request = payment_request
        flow.transition(PaymentFlowState.CHALLENGE_PARSED)
        logger.info(
            f"Received 402 Payment Required: {payment_request.amount} {payment_request.token} "
            f"on {payment_request.network}"
        )

        flow.transition(PaymentFlowState.AWAITING_CONFIRMATION)
        payment = await self._x402_client.handle_payment(payment_request)
        if payment is None:
            logger.info("Payment cancelled, returning original 402 response")
            return flow.finish(PaymentFlowState.CANCELLED, response)

        flow.payment = payment
        if not self._auto_retry:
            logger.info("Auto-retry disabled, returning payment proof")
            proof = httpx.Response(
                200,
                json=payment.model_dump(by_alias=True, exclude_none=True),
                request=response.request,
            )
            return flow.finish(PaymentFlowState.COMPLETED, proof)

        flow.transition(PaymentFlowState.RETRYING_WITH_PROOF)
        retry_response = await self._retry_with_payment(method, url, payment, kwargs)
        return flow.finish(PaymentFlowState.COMPLETED, retry_response)

    async def fetch(self, url: str, method: str = "GET", **kwargs: Any) -> httpx.Response:
        """fetch-style entry point; same as request_with_payment"""
        return await self.request_with_payment(method, url, **kwargs)

    async def get(self, url: str, **kwargs: Any) -> httpx.Response:
        """GET request with payment handling"""
        return await self.request_with_payment("GET", url, **kwargs)

    async def post(self, url: str, **kwargs: Any) -> httpx.Response:
        """POST request with payment handling"""
        return await self.request_with_payment("POST", url, **kwargs)

    async def put(self, url: str, **kwargs: Any) -> httpx.Response:
        """PUT request with payment handling"""
        return await self.request_with_payment("PUT", url, **kwargs)

    async def patch(self, url: str, **kwargs: Any) -> httpx.Response:
        """PATCH request with payment handling"""
        return await self.request_with_payment("PATCH", url, **kwargs)

    async def delete(self, url: str, **kwargs: Any) -> httpx.Response:
        """DELETE request with payment handling"""
        return await self.request_with_payment("DELETE", url, **kwargs)

    async def _retry_with_payment(
        self,
        method: str,
        url: str,
        payment: PaymentResponse,
        kwargs: dict[str, Any],
    ) -> httpx.Response:
        """Retry request once with payment proof headers"""
        logger.info(f"Retrying request with payment proof {payment.transaction_hash}")
        retry_kwargs = dict(kwargs)
        retry_kwargs["headers"] = encode_payment_headers(payment, kwargs.get("headers"))
        logger.debug(f"Retry headers: {dict(retry_kwargs['headers'])}")

        response = await self._http_client.request(method, url, **retry_kwargs)
        logger.info(f"Payment retry response: status={response.status_code}")
        if response.status_code == 402:
            logger.warning("Server still requires payment after retry")
        return response


async def x402_fetch(
    url: str,
    method: str = "GET",
    options: ClientOptions | None = None,
    **kwargs: Any,
) -> httpx.Response:
    """
    One-shot request with automatic 402 handling.

    Example::

        response = await x402_fetch("https://api.example.com/premium")
    """
    x402_client = X402Client(options).initialize()
    async with httpx.AsyncClient() as http_client:
        client = X402HttpClient(http_client, x402_client)
        return await client.request_with_payment(method, url, **kwargs)

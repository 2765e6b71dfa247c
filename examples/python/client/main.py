import asyncio
import logging
import os
from pathlib import Path

import httpx
from dotenv import load_dotenv

from x402_mantle.clients import (
    ClientOptions,
    WalletPaymentHandler,
    X402Client,
    X402HttpClient,
)
from x402_mantle.logging_config import setup_logging
from x402_mantle.wallets import LocalAccountWallet

# Detailed x402_mantle logging on stdout
setup_logging(logging.DEBUG)

ENV_FILE = Path(__file__).parent.parent.parent.parent / ".env"
load_dotenv(ENV_FILE)

PRIVATE_KEY = os.getenv("X402_PRIVATE_KEY", "")
NETWORK = os.getenv("X402_NETWORK", "mantle-sepolia")
RESOURCE_SERVER_URL = os.getenv("RESOURCE_SERVER_URL", "http://localhost:8000")
ENDPOINT_PATH = "/api/premium"
RESOURCE_URL = RESOURCE_SERVER_URL + ENDPOINT_PATH

if not PRIVATE_KEY:
    print("\n❌ Error: X402_PRIVATE_KEY not set in .env file")
    print("\nPlease add your Mantle private key to .env file\n")
    exit(1)


def confirm(request):
    print("\n💳 Payment required:")
    print(f"  Amount: {request.amount} {request.token}")
    print(f"  Network: {request.network}")
    print(f"  Recipient: {request.recipient}")
    if request.description:
        print(f"  Description: {request.description}")
    return input("Pay? [y/N] ").strip().lower() == "y"


async def main():
    print("Initializing x402 client...")
    print(f"  Network: {NETWORK}")
    print(f"  Resource: {RESOURCE_URL}")

    wallet = LocalAccountWallet(PRIVATE_KEY, NETWORK)
    print(f"  Client Address: {wallet.address}")

    # Environment settings (X402_AUTO_RETRY, X402_STRICT_TOKENS, ...) plus an interactive confirm
    options = ClientOptions.from_env(ENV_FILE, wallet=wallet, network=NETWORK)
    options.payment_handler = WalletPaymentHandler(
        wallet,
        confirm=confirm,
        auto_switch_network=options.auto_switch_network,
        strict_tokens=options.strict_tokens,
    )
    x402_client = X402Client(options).initialize()

    async with httpx.AsyncClient(timeout=60.0) as http_client:
        client = X402HttpClient(http_client, x402_client)

        print(f"\nRequesting: {RESOURCE_URL}")
        try:
            response = await client.get(RESOURCE_URL)
            print(f"\nStatus: {response.status_code}")
            print(f"Content-Type: {response.headers.get('content-type')}")

            if response.status_code == 402:
                print("\n⚠️  Payment was not made, server still requires payment")
            elif "application/json" in response.headers.get("content-type", ""):
                print(f"\nResponse: {response.json()}")
            else:
                print(f"\nResponse (first 200 chars): {response.text[:200]}")
        except Exception as e:
            print(f"\n❌ Error: {e}")
            import traceback

            traceback.print_exc()


if __name__ == "__main__":
    asyncio.run(main())

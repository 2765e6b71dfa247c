"""
Network enforcement - make sure the wallet is on the chain a payment targets
"""

import logging

from x402_mantle.config import get_chain_id, get_network_config
from x402_mantle.exceptions import UnrecognizedChainError
from x402_mantle.types import AddEthereumChainParameter, NativeCurrencyParameter
from x402_mantle.wallets.base import WalletProvider

logger = logging.getLogger(__name__)


def get_add_network_params(network: str) -> AddEthereumChainParameter:
    """Build the wallet_addEthereumChain payload for a registered network"""
    config = get_network_config(network)
    return AddEthereumChainParameter(
        chain_id=hex(config.chain_id),
        chain_name=config.name,
        native_currency=NativeCurrencyParameter(
            name=config.native_currency.name,
            symbol=config.native_currency.symbol,
            decimals=config.native_currency.decimals,
        ),
        rpc_urls=[config.rpc_url],
        block_explorer_urls=[config.block_explorer] if config.block_explorer else None,
    )


async def ensure_network(wallet: WalletProvider, network: str, auto_add: bool = True) -> None:
    """
    Switch the wallet to the network's chain if it is not already there.

    When the wallet does not know the chain and auto_add is set, the chain is
    added instead. wallet_addEthereumChain also switches, so no second switch
    is attempted.

    Raises:
        UnknownNetworkError: The network is not in the registry
        UnrecognizedChainError: The wallet does not know the chain and auto_add is off
        WalletError: Any other wallet failure, unchanged
    """
    target = get_chain_id(network)
    current = await wallet.get_chain_id()
    if current == target:
        logger.debug(f"Wallet already on {network} (chain {target})")
        return

    logger.info(f"Switching wallet from chain {current} to {network} (chain {target})")
    try:
        await wallet.switch_network(target)
    except UnrecognizedChainError:
        if not auto_add:
            raise
        logger.info(f"Wallet does not know {network}, adding it")
        await wallet.add_network(get_add_network_params(network))

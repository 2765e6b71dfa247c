"""
Type definitions for x402 protocol
"""

from typing import Any, Optional

from pydantic import BaseModel, Field


class PaymentRequest(BaseModel):
    """Payment request derived from a 402 response"""

    amount: str
    token: str
    network: str
    recipient: str
    chain_id: Optional[int] = Field(None, alias="chainId")
    description: Optional[str] = None
    endpoint: Optional[str] = None

    class Config:
        populate_by_name = True


class PaymentResponse(BaseModel):
    """Completed payment, created once the wallet returns a transaction hash"""

    transaction_hash: str = Field(alias="transactionHash")
    timestamp: Optional[str] = None

    class Config:
        populate_by_name = True


class TransactionRequest(BaseModel):
    """Transaction handed to a wallet provider"""

    to: str
    value: Optional[str] = None
    data: Optional[str] = None
    from_: Optional[str] = Field(None, alias="from")
    gas_limit: Optional[str] = Field(None, alias="gasLimit")
    gas_price: Optional[str] = Field(None, alias="gasPrice")

    class Config:
        populate_by_name = True
        frozen = True

    def to_rpc_params(self) -> dict[str, Any]:
        """Serialize for eth_sendTransaction"""
        return self.model_dump(by_alias=True, exclude_none=True)


class NativeCurrencyParameter(BaseModel):
    """Native currency in wallet_addEthereumChain"""

    name: str
    symbol: str
    decimals: int


class AddEthereumChainParameter(BaseModel):
    """Network parameters for wallet_addEthereumChain"""

    chain_id: str = Field(alias="chainId")
    chain_name: str = Field(alias="chainName")
    native_currency: NativeCurrencyParameter = Field(alias="nativeCurrency")
    rpc_urls: list[str] = Field(alias="rpcUrls")
    block_explorer_urls: Optional[list[str]] = Field(None, alias="blockExplorerUrls")

    class Config:
        populate_by_name = True

    def to_rpc_params(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)

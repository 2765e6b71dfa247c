"""
Shared ABI definitions for smart contracts
"""

# ERC-20 transfer(address,uint256); the selector is keccak256(signature)[:4]
ERC20_TRANSFER_SIGNATURE = "transfer(address,uint256)"
ERC20_TRANSFER_SELECTOR = "0xa9059cbb"

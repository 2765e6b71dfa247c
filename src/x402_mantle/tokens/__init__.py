"""
Token registry
"""

from x402_mantle.tokens.registry import (
    TokenConfig,
    TokenRegistry,
    get_token_config,
    register_custom_tokens,
)

__all__ = ["TokenConfig", "TokenRegistry", "get_token_config", "register_custom_tokens"]

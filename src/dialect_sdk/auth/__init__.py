"""Auth tokens for Dialect Cloud."""

from .signers import Ed25519TokenSigner, SolanaTxTokenSigner, TokenSigner
from .token import Token, TokenBody, TokenHeader
from .token_provider import (
    DEFAULT_TOKEN_LIFETIME,
    DEFAULT_TOKEN_LIFETIME_MINUTES,
    CachedTokenProvider,
    DefaultTokenProvider,
    TokenGenerator,
    TokenProvider,
    create_token_provider,
)
from .token_store import StorageTokenStore, TokenStore

__all__ = [
    "TokenSigner",
    "Ed25519TokenSigner",
    "SolanaTxTokenSigner",
    "Token",
    "TokenHeader",
    "TokenBody",
    "TokenGenerator",
    "TokenProvider",
    "DefaultTokenProvider",
    "CachedTokenProvider",
    "create_token_provider",
    "DEFAULT_TOKEN_LIFETIME",
    "DEFAULT_TOKEN_LIFETIME_MINUTES",
    "TokenStore",
    "StorageTokenStore",
]

"""
Dialect Python SDK

Messaging, dapp notifications and wallet identity over Dialect Cloud and
the Dialect Solana program.
"""

from .backends import DEFAULT_BACKENDS, Backend
from .config import (
    ConfigProps,
    DialectCloudConfigProps,
    IdentityConfigProps,
    ResolvedConfig,
    SdkSettings,
    SolanaConfigProps,
    resolve_config,
)
from .errors import (
    ApiError,
    AuthenticationError,
    BroadcastError,
    DialectSdkError,
    IllegalArgumentError,
    RateLimitError,
    ResourceNotFoundError,
    SolanaRpcError,
    TokenError,
    UnsupportedOperationError,
)
from .identity import Identity, IdentityResolver, create_identity_resolver
from .logging import configure_logging
from .sdk import Dialect, DialectSdk, DialectSdkFactory, DialectSdkInfo
from .wallet_adapter import DialectWalletAdapterWrapper, KeypairWalletAdapter

__version__ = "0.1.0"

__all__ = [
    # Entry points
    "Dialect",
    "DialectSdk",
    "DialectSdkFactory",
    "DialectSdkInfo",
    # Configuration
    "Backend",
    "DEFAULT_BACKENDS",
    "ConfigProps",
    "DialectCloudConfigProps",
    "SolanaConfigProps",
    "IdentityConfigProps",
    "SdkSettings",
    "ResolvedConfig",
    "resolve_config",
    "configure_logging",
    # Wallets
    "DialectWalletAdapterWrapper",
    "KeypairWalletAdapter",
    # Identity
    "Identity",
    "IdentityResolver",
    "create_identity_resolver",
    # Errors
    "DialectSdkError",
    "IllegalArgumentError",
    "UnsupportedOperationError",
    "ResourceNotFoundError",
    "TokenError",
    "BroadcastError",
    "ApiError",
    "AuthenticationError",
    "RateLimitError",
    "SolanaRpcError",
]

"""
Configuration for Dialect SDK.

``ConfigProps`` is the partial, user-supplied configuration.
``resolve_config`` turns it into a fully specified, immutable
``ResolvedConfig`` by folding ordered layers, lowest precedence first:

1. global defaults (production, mainnet-beta, in-memory stores)
2. ``environment`` preset, applied to both Dialect Cloud and Solana
3. ``dialect_cloud.environment`` preset, Dialect Cloud only
4. ``solana.network`` preset, Solana only
5. single-field overrides: ``dialect_cloud.url``,
   ``solana.dialect_program_address``, ``solana.rpc_url``

Each layer only sets the fields it names and ``None`` never overwrites,
so a finer-grained override survives a coarser environment preset.

Resolution is a pure function of its input. Reading ``DIALECT_SDK_*``
environment variables is a separate, explicit step (``ConfigProps.from_env``).

Example:
    ```python
    config = resolve_config(ConfigProps(
        wallet=wallet,
        environment="development",
        dialect_cloud={"environment": "production"},
    ))
    assert config.dialect_cloud.url == "https://dialectapi.to"
    ```
"""
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Literal, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from pydantic_settings import BaseSettings, SettingsConfigDict

from .auth.token_provider import DEFAULT_TOKEN_LIFETIME_MINUTES
from .auth.token_store import TokenStore
from .backends import Backend, resolve_backends
from .encryption.keys_store import EncryptionKeysStore
from .identity.interface import IdentityResolver
from .wallet_adapter import DialectWalletAdapterWrapper

Environment = Literal["production", "development", "local-development"]
SolanaNetworkName = Literal["mainnet-beta", "devnet", "localnet"]

DEFAULT_ENVIRONMENT: Environment = "production"
DEFAULT_IDENTITY_STRATEGY = "first-found"

DIALECT_CLOUD_PRESETS: Dict[str, Dict[str, str]] = {
    "production": {"environment": "production", "url": "https://dialectapi.to"},
    "development": {"environment": "development", "url": "https://dev.dialectapi.to"},
    "local-development": {"environment": "local-development", "url": "http://localhost:8080"},
}

MAINNET_PROGRAM_ADDRESS = "CeNUxGUsSeb5RuAGvaMLNx3tEZrpBwQqA7Gs99vMPCAb"
DEVNET_PROGRAM_ADDRESS = "2YFyZAg8rBtuvzFFiGvXwPHFAQJ2FXZoS7bYCKticpjk"

SOLANA_PRESETS: Dict[str, Dict[str, str]] = {
    "mainnet-beta": {
        "network": "mainnet-beta",
        "dialect_program_address": MAINNET_PROGRAM_ADDRESS,
        "rpc_url": "https://api.mainnet-beta.solana.com",
    },
    "devnet": {
        "network": "devnet",
        "dialect_program_address": DEVNET_PROGRAM_ADDRESS,
        "rpc_url": "https://api.devnet.solana.com",
    },
    "localnet": {
        "network": "localnet",
        "dialect_program_address": DEVNET_PROGRAM_ADDRESS,
        "rpc_url": "http://127.0.0.1:8899",
    },
}

ENVIRONMENT_SOLANA_NETWORKS: Dict[str, str] = {
    "production": "mainnet-beta",
    "development": "devnet",
    "local-development": "localnet",
}


# =============================================================================
# User-supplied configuration
# =============================================================================

class _Props(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        arbitrary_types_allowed=True,
        frozen=True,
        extra="forbid",
    )


class DialectCloudConfigProps(_Props):
    environment: Optional[Environment] = None
    url: Optional[str] = None
    token_store: Optional[Union[TokenStore, str]] = None
    token_lifetime_minutes: Optional[int] = Field(default=None, gt=0)


class SolanaConfigProps(_Props):
    network: Optional[SolanaNetworkName] = None
    dialect_program_address: Optional[str] = None
    rpc_url: Optional[str] = None


class IdentityConfigProps(_Props):
    strategy: Optional[str] = None
    resolvers: Optional[List[IdentityResolver]] = None


class ConfigProps(_Props):
    """Partial SDK configuration; only ``wallet`` is required."""

    environment: Optional[Environment] = None
    wallet: Any
    backends: Optional[List[Union[Backend, str]]] = None
    dialect_cloud: Optional[DialectCloudConfigProps] = None
    solana: Optional[SolanaConfigProps] = None
    encryption_keys_store: Optional[Union[EncryptionKeysStore, str]] = None
    identity: Optional[IdentityConfigProps] = None

    @classmethod
    def from_env(
        cls,
        wallet: Any,
        settings: Optional["SdkSettings"] = None,
        **overrides: Any,
    ) -> "ConfigProps":
        """Build props from ``DIALECT_SDK_*`` variables; keyword overrides win."""
        values = (settings or SdkSettings()).to_props()
        values.update(overrides)
        return cls.model_validate({**values, "wallet": wallet})


class SdkSettings(BaseSettings):
    """Environment variable source for ``ConfigProps``."""

    model_config = SettingsConfigDict(
        env_prefix="DIALECT_SDK_",
        env_file=".env",
        extra="ignore",
    )

    environment: Optional[Environment] = None
    backends: Optional[str] = None
    dialect_cloud_environment: Optional[Environment] = None
    dialect_cloud_url: Optional[str] = None
    token_store: Optional[str] = None
    token_lifetime_minutes: Optional[int] = None
    solana_network: Optional[SolanaNetworkName] = None
    solana_dialect_program_address: Optional[str] = None
    solana_rpc_url: Optional[str] = None
    encryption_keys_store: Optional[str] = None
    identity_strategy: Optional[str] = None

    def to_props(self) -> Dict[str, Any]:
        """Nested props dict with unset values left out."""
        def _compact(values: Dict[str, Any]) -> Dict[str, Any]:
            return {k: v for k, v in values.items() if v is not None}

        props = _compact({
            "environment": self.environment,
            "encryption_keys_store": self.encryption_keys_store,
        })
        if self.backends is not None:
            props["backends"] = [b.strip() for b in self.backends.split(",") if b.strip()]
        dialect_cloud = _compact({
            "environment": self.dialect_cloud_environment,
            "url": self.dialect_cloud_url,
            "token_store": self.token_store,
            "token_lifetime_minutes": self.token_lifetime_minutes,
        })
        if dialect_cloud:
            props["dialect_cloud"] = dialect_cloud
        solana = _compact({
            "network": self.solana_network,
            "dialect_program_address": self.solana_dialect_program_address,
            "rpc_url": self.solana_rpc_url,
        })
        if solana:
            props["solana"] = solana
        if self.identity_strategy:
            props["identity"] = {"strategy": self.identity_strategy}
        return props


# =============================================================================
# Resolved configuration
# =============================================================================

class _Resolved(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


class DialectCloudConfig(_Resolved):
    environment: Environment
    url: str
    token_store: TokenStore
    token_lifetime_minutes: int


class SolanaConfig(_Resolved):
    network: SolanaNetworkName
    dialect_program_address: str
    rpc_url: str


class IdentityConfig(_Resolved):
    strategy: str
    resolvers: Tuple[IdentityResolver, ...] = ()


class ResolvedConfig(_Resolved):
    """Fully specified SDK configuration."""

    environment: Environment
    wallet: DialectWalletAdapterWrapper
    backends: Tuple[Backend, ...]
    dialect_cloud: DialectCloudConfig
    solana: SolanaConfig
    encryption_keys_store: EncryptionKeysStore
    identity: IdentityConfig

    def summary(self) -> Dict[str, Any]:
        """Plain-data view, safe to log and compare."""
        return {
            "environment": self.environment,
            "wallet": {
                "public_key": self.wallet.public_key,
                "supports_encryption": self.wallet.can_encrypt,
            },
            "backends": [backend.value for backend in self.backends],
            "dialect_cloud": {
                "environment": self.dialect_cloud.environment,
                "url": self.dialect_cloud.url,
                "token_store": type(self.dialect_cloud.token_store).__name__,
                "token_lifetime_minutes": self.dialect_cloud.token_lifetime_minutes,
            },
            "solana": {
                "network": self.solana.network,
                "dialect_program": self.solana.dialect_program_address,
                "rpc_url": self.solana.rpc_url,
            },
            "encryption_keys_store": type(self.encryption_keys_store).__name__,
            "identity": {
                "strategy": self.identity.strategy,
                "resolvers": [resolver.type for resolver in self.identity.resolvers],
            },
        }


# =============================================================================
# Resolution
# =============================================================================

def merge_layers(layers: Iterable[Mapping[str, Any]]) -> Dict[str, Any]:
    """Fold layers field by field; later non-None values win."""
    merged: Dict[str, Any] = {}
    for layer in layers:
        merged.update({key: value for key, value in layer.items() if value is not None})
    return merged


def dialect_cloud_layers(props: ConfigProps) -> List[Mapping[str, Any]]:
    cloud = props.dialect_cloud or DialectCloudConfigProps()
    layers: List[Mapping[str, Any]] = [
        {**DIALECT_CLOUD_PRESETS[DEFAULT_ENVIRONMENT],
         "token_lifetime_minutes": DEFAULT_TOKEN_LIFETIME_MINUTES},
    ]
    if props.environment:
        layers.append(DIALECT_CLOUD_PRESETS[props.environment])
    if cloud.environment:
        layers.append(DIALECT_CLOUD_PRESETS[cloud.environment])
    layers.append({
        "url": cloud.url,
        "token_lifetime_minutes": cloud.token_lifetime_minutes,
    })
    return layers


def solana_layers(props: ConfigProps) -> List[Mapping[str, Any]]:
    solana = props.solana or SolanaConfigProps()
    layers: List[Mapping[str, Any]] = [
        SOLANA_PRESETS[ENVIRONMENT_SOLANA_NETWORKS[DEFAULT_ENVIRONMENT]],
    ]
    if props.environment:
        layers.append(SOLANA_PRESETS[ENVIRONMENT_SOLANA_NETWORKS[props.environment]])
    if solana.network:
        layers.append(SOLANA_PRESETS[solana.network])
    layers.append({
        "dialect_program_address": solana.dialect_program_address,
        "rpc_url": solana.rpc_url,
    })
    return layers


def create_token_store(selector: Optional[Union[TokenStore, str]]) -> TokenStore:
    if isinstance(selector, TokenStore):
        return selector
    if selector == "session-storage":
        return TokenStore.create_session_storage()
    if selector == "local-storage":
        return TokenStore.create_local_storage()
    return TokenStore.create_in_memory()


def create_encryption_keys_store(
    selector: Optional[Union[EncryptionKeysStore, str]],
) -> EncryptionKeysStore:
    if isinstance(selector, EncryptionKeysStore):
        return selector
    if selector == "session-storage":
        return EncryptionKeysStore.create_session_storage()
    if selector == "local-storage":
        return EncryptionKeysStore.create_local_storage()
    return EncryptionKeysStore.create_in_memory()


def resolve_identity_config(props: Optional[IdentityConfigProps]) -> IdentityConfig:
    if props is None:
        return IdentityConfig(strategy=DEFAULT_IDENTITY_STRATEGY)
    return IdentityConfig(
        strategy=props.strategy or DEFAULT_IDENTITY_STRATEGY,
        resolvers=tuple(props.resolvers or ()),
    )


def resolve_config(props: Union[ConfigProps, Mapping[str, Any]]) -> ResolvedConfig:
    """Resolve partial props into a complete, immutable configuration."""
    if not isinstance(props, ConfigProps):
        props = ConfigProps.model_validate(props)

    backends = resolve_backends(props.backends)
    wallet = DialectWalletAdapterWrapper.create(props.wallet)
    cloud_props = props.dialect_cloud or DialectCloudConfigProps()

    dialect_cloud = DialectCloudConfig(
        **merge_layers(dialect_cloud_layers(props)),
        token_store=create_token_store(cloud_props.token_store),
    )
    solana = SolanaConfig(**merge_layers(solana_layers(props)))

    return ResolvedConfig(
        environment=props.environment or DEFAULT_ENVIRONMENT,
        wallet=wallet,
        backends=backends,
        dialect_cloud=dialect_cloud,
        solana=solana,
        encryption_keys_store=create_encryption_keys_store(props.encryption_keys_store),
        identity=resolve_identity_config(props.identity),
    )

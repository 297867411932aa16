"""
Tests for configuration resolution.
"""
import pytest
from pydantic import ValidationError

from dialect_sdk.auth.token_store import StorageTokenStore, TokenStore
from dialect_sdk.backends import Backend
from dialect_sdk.config import (
    DEVNET_PROGRAM_ADDRESS,
    MAINNET_PROGRAM_ADDRESS,
    ConfigProps,
    SdkSettings,
    create_encryption_keys_store,
    create_token_store,
    merge_layers,
    resolve_config,
)
from dialect_sdk.encryption.keys_store import EncryptionKeysStore
from dialect_sdk.errors import IllegalArgumentError
from dialect_sdk.storage import InMemoryStorage, LocalStorage, SessionStorage
from dialect_sdk.wallet_adapter import DialectWalletAdapterWrapper

from conftest import FakeIdentityProvider

PRODUCTION_URL = "https://dialectapi.to"
DEVELOPMENT_URL = "https://dev.dialectapi.to"


class TestMergeLayers:
    """Tests for the per-field layer fold."""

    def test_later_layers_win(self):
        """Should let later layers override earlier ones field by field."""
        merged = merge_layers([
            {"url": "a", "network": "x"},
            {"url": "b"},
        ])
        assert merged == {"url": "b", "network": "x"}

    def test_none_never_overwrites(self):
        """Should keep the earlier value when a later layer holds None."""
        merged = merge_layers([{"url": "a"}, {"url": None}])
        assert merged == {"url": "a"}


class TestDefaults:
    """Tests for resolution with only a wallet."""

    def test_production_defaults(self, keypair_wallet):
        """Should resolve to production settings."""
        config = resolve_config(ConfigProps(wallet=keypair_wallet))

        assert config.environment == "production"
        assert config.backends == (Backend.DIALECT_CLOUD, Backend.SOLANA)
        assert config.dialect_cloud.environment == "production"
        assert config.dialect_cloud.url == PRODUCTION_URL
        assert config.dialect_cloud.token_lifetime_minutes == 60
        assert config.solana.network == "mainnet-beta"
        assert config.solana.dialect_program_address == MAINNET_PROGRAM_ADDRESS
        assert config.solana.rpc_url == "https://api.mainnet-beta.solana.com"
        assert config.identity.strategy == "first-found"
        assert config.identity.resolvers == ()

    def test_in_memory_stores_by_default(self, keypair_wallet):
        """Should use in-memory token and encryption key stores."""
        config = resolve_config(ConfigProps(wallet=keypair_wallet))

        assert isinstance(config.dialect_cloud.token_store.storage, InMemoryStorage)
        assert isinstance(config.encryption_keys_store.storage, InMemoryStorage)

    def test_wraps_wallet(self, keypair_wallet):
        """Should wrap the wallet in the adapter wrapper."""
        config = resolve_config(ConfigProps(wallet=keypair_wallet))

        assert isinstance(config.wallet, DialectWalletAdapterWrapper)
        assert config.wallet.public_key == keypair_wallet.public_key

    def test_accepts_plain_mapping(self, keypair_wallet):
        """Should accept a plain dict with camelCase keys."""
        config = resolve_config({
            "wallet": keypair_wallet,
            "dialectCloud": {"environment": "development"},
        })
        assert config.dialect_cloud.url == DEVELOPMENT_URL


class TestPrecedence:
    """Tests for the layering of environment presets and overrides."""

    def test_environment_sets_both_sub_configs(self, keypair_wallet):
        """Should apply the environment preset to Dialect Cloud and Solana."""
        config = resolve_config(ConfigProps(wallet=keypair_wallet, environment="development"))

        assert config.dialect_cloud.url == DEVELOPMENT_URL
        assert config.solana.network == "devnet"
        assert config.solana.dialect_program_address == DEVNET_PROGRAM_ADDRESS
        assert config.solana.rpc_url == "https://api.devnet.solana.com"

    def test_local_development_preset(self, keypair_wallet):
        """Should point both backends at local services."""
        config = resolve_config(
            ConfigProps(wallet=keypair_wallet, environment="local-development")
        )

        assert config.dialect_cloud.url == "http://localhost:8080"
        assert config.solana.network == "localnet"
        assert config.solana.rpc_url == "http://127.0.0.1:8899"

    def test_cloud_environment_beats_environment(self, keypair_wallet):
        """Should let the Dialect Cloud environment override the top-level one."""
        config = resolve_config(ConfigProps(
            wallet=keypair_wallet,
            environment="development",
            dialect_cloud={"environment": "production"},
        ))

        assert config.dialect_cloud.url == PRODUCTION_URL
        assert config.dialect_cloud.environment == "production"
        # Solana keeps the top-level preset
        assert config.solana.network == "devnet"

    def test_solana_network_beats_environment(self, keypair_wallet):
        """Should let an explicit Solana network override the top-level preset."""
        config = resolve_config(ConfigProps(
            wallet=keypair_wallet,
            environment="production",
            solana={"network": "devnet"},
        ))

        assert config.solana.dialect_program_address == DEVNET_PROGRAM_ADDRESS
        assert config.solana.rpc_url == "https://api.devnet.solana.com"
        assert config.dialect_cloud.url == PRODUCTION_URL

    @pytest.mark.parametrize("environment", [None, "production", "development", "local-development"])
    @pytest.mark.parametrize("cloud_environment", [None, "production", "development"])
    def test_explicit_url_always_wins(self, keypair_wallet, environment, cloud_environment):
        """Should use an explicit Dialect Cloud URL regardless of environment tags."""
        config = resolve_config(ConfigProps(
            wallet=keypair_wallet,
            environment=environment,
            dialect_cloud={"environment": cloud_environment, "url": "https://custom.example"},
        ))
        assert config.dialect_cloud.url == "https://custom.example"

    def test_field_overrides_keep_other_preset_fields(self, keypair_wallet):
        """Should override single Solana fields and keep the rest of the preset."""
        config = resolve_config(ConfigProps(
            wallet=keypair_wallet,
            environment="development",
            solana={"rpc_url": "https://rpc.example"},
        ))

        assert config.solana.rpc_url == "https://rpc.example"
        assert config.solana.dialect_program_address == DEVNET_PROGRAM_ADDRESS
        assert config.solana.network == "devnet"

    def test_token_lifetime_override(self, keypair_wallet):
        """Should use an explicit token lifetime."""
        config = resolve_config(ConfigProps(
            wallet=keypair_wallet,
            dialect_cloud={"token_lifetime_minutes": 5},
        ))
        assert config.dialect_cloud.token_lifetime_minutes == 5

    def test_rejects_unknown_environment(self, keypair_wallet):
        """Should reject environment tags outside the known presets."""
        with pytest.raises(ValidationError):
            ConfigProps(wallet=keypair_wallet, environment="staging")

    def test_rejects_non_positive_token_lifetime(self, keypair_wallet):
        """Should reject a zero token lifetime."""
        with pytest.raises(ValidationError):
            ConfigProps(wallet=keypair_wallet, dialect_cloud={"token_lifetime_minutes": 0})


class TestBackends:
    """Tests for backend list resolution inside config."""

    def test_empty_backends_rejected(self, keypair_wallet):
        """Should raise IllegalArgumentError for an explicit empty list."""
        with pytest.raises(IllegalArgumentError, match="at least one backend"):
            resolve_config(ConfigProps(wallet=keypair_wallet, backends=[]))

    def test_backend_names_coerced(self, keypair_wallet):
        """Should accept backend names and keep their order."""
        config = resolve_config(
            ConfigProps(wallet=keypair_wallet, backends=["solana", "dialect-cloud"])
        )
        assert config.backends == (Backend.SOLANA, Backend.DIALECT_CLOUD)

    def test_unknown_backend_rejected(self, keypair_wallet):
        """Should raise IllegalArgumentError for an unknown backend name."""
        with pytest.raises(IllegalArgumentError, match="Unknown backend ethereum"):
            resolve_config(ConfigProps(wallet=keypair_wallet, backends=["ethereum"]))


class TestStoreSelectors:
    """Tests for token and encryption key store selection."""

    def test_store_instance_passed_through(self):
        """Should return a pre-built store unchanged."""
        store = TokenStore.create_in_memory()
        assert create_token_store(store) is store

    @pytest.mark.parametrize(
        "selector,storage_type",
        [
            (None, InMemoryStorage),
            ("in-memory", InMemoryStorage),
            ("session-storage", SessionStorage),
            ("local-storage", LocalStorage),
            ("bogus", InMemoryStorage),
        ],
    )
    def test_token_store_selector(self, selector, storage_type):
        """Should map each selector to its storage, unknown to in-memory."""
        store = create_token_store(selector)
        assert isinstance(store, StorageTokenStore)
        assert isinstance(store.storage, storage_type)

    @pytest.mark.parametrize(
        "selector,storage_type",
        [
            (None, InMemoryStorage),
            ("session-storage", SessionStorage),
            ("local-storage", LocalStorage),
            ("bogus", InMemoryStorage),
        ],
    )
    def test_encryption_keys_store_selector(self, selector, storage_type):
        """Should map each selector to its storage, unknown to in-memory."""
        store = create_encryption_keys_store(selector)
        assert isinstance(store.storage, storage_type)

    def test_encryption_keys_store_instance_passed_through(self, keypair_wallet):
        """Should keep a caller-supplied encryption keys store."""
        store = EncryptionKeysStore.create_session_storage()
        config = resolve_config(ConfigProps(wallet=keypair_wallet, encryption_keys_store=store))
        assert config.encryption_keys_store is store

    def test_fresh_stores_per_resolution(self, keypair_wallet):
        """Should build new stores for every resolution."""
        props = ConfigProps(wallet=keypair_wallet)
        first = resolve_config(props)
        second = resolve_config(props)
        assert first.dialect_cloud.token_store is not second.dialect_cloud.token_store


class TestIdentityConfig:
    """Tests for identity config resolution."""

    def test_strategy_and_resolvers_taken_verbatim(self, keypair_wallet):
        """Should keep the supplied strategy and resolver order."""
        a, b = FakeIdentityProvider("a"), FakeIdentityProvider("b")
        config = resolve_config(ConfigProps(
            wallet=keypair_wallet,
            identity={"strategy": "aggregate-sequential", "resolvers": [a, b]},
        ))

        assert config.identity.strategy == "aggregate-sequential"
        assert config.identity.resolvers == (a, b)

    def test_missing_strategy_defaults(self, keypair_wallet):
        """Should default the strategy when only resolvers are given."""
        a = FakeIdentityProvider("a")
        config = resolve_config(ConfigProps(wallet=keypair_wallet, identity={"resolvers": [a]}))

        assert config.identity.strategy == "first-found"
        assert config.identity.resolvers == (a,)


class TestDeterminism:
    """Tests for resolution being a pure function."""

    def test_same_input_same_config(self, keypair_wallet):
        """Should resolve the same props to structurally identical configs."""
        props = ConfigProps(
            wallet=keypair_wallet,
            environment="development",
            backends=["solana"],
            solana={"rpc_url": "https://rpc.example"},
        )
        assert resolve_config(props).summary() == resolve_config(props).summary()


class TestSettings:
    """Tests for environment variable configuration."""

    def test_from_env(self, keypair_wallet, monkeypatch):
        """Should build props from DIALECT_SDK_* variables."""
        monkeypatch.setenv("DIALECT_SDK_ENVIRONMENT", "development")
        monkeypatch.setenv("DIALECT_SDK_BACKENDS", "dialect-cloud, solana")
        monkeypatch.setenv("DIALECT_SDK_DIALECT_CLOUD_URL", "https://cloud.example")
        monkeypatch.setenv("DIALECT_SDK_SOLANA_NETWORK", "localnet")

        config = resolve_config(ConfigProps.from_env(keypair_wallet))

        assert config.environment == "development"
        assert config.backends == (Backend.DIALECT_CLOUD, Backend.SOLANA)
        assert config.dialect_cloud.url == "https://cloud.example"
        assert config.solana.network == "localnet"

    def test_overrides_beat_env(self, keypair_wallet, monkeypatch):
        """Should let keyword overrides win over environment variables."""
        monkeypatch.setenv("DIALECT_SDK_ENVIRONMENT", "development")

        props = ConfigProps.from_env(keypair_wallet, environment="production")

        assert props.environment == "production"

    def test_unset_settings_produce_empty_props(self):
        """Should leave out unset values."""
        assert SdkSettings(_env_file=None).to_props() == {}

"""
Tests for storage backends and the encryption keys stores.
"""
import json

from dialect_sdk.encryption import EncryptionKeysProvider, EncryptionKeysStore
from dialect_sdk.storage import InMemoryStorage, LocalStorage, SessionStorage
from dialect_sdk.wallet_adapter import DialectWalletAdapterWrapper


class TestInMemoryStorage:
    """Tests for InMemoryStorage."""

    def test_instances_are_isolated(self):
        """Should not share values between instances."""
        first, second = InMemoryStorage(), InMemoryStorage()
        first.set_item("k", "v")

        assert first.get_item("k") == "v"
        assert second.get_item("k") is None

    def test_remove_missing_key(self):
        """Should ignore removal of a missing key."""
        InMemoryStorage().remove_item("missing")


class TestSessionStorage:
    """Tests for SessionStorage."""

    def test_shared_between_instances(self):
        """Should share values across instances in the process."""
        SessionStorage().set_item("k", "v")
        assert SessionStorage().get_item("k") == "v"

    def test_clear(self):
        """Should drop every value."""
        SessionStorage().set_item("k", "v")
        SessionStorage.clear()
        assert SessionStorage().get_item("k") is None


class TestLocalStorage:
    """Tests for LocalStorage."""

    def test_lazy_file_creation(self, tmp_path):
        """Should not touch the filesystem until a value is written."""
        path = tmp_path / "nested" / "storage.json"
        storage = LocalStorage(path)

        assert storage.get_item("k") is None
        assert not path.exists()

        storage.set_item("k", "v")
        assert json.loads(path.read_text()) == {"k": "v"}

    def test_remove(self, tmp_path):
        """Should persist removals."""
        path = tmp_path / "storage.json"
        storage = LocalStorage(path)
        storage.set_item("k", "v")
        storage.remove_item("k")

        assert LocalStorage(path).get_item("k") is None

    def test_corrupt_file_ignored(self, tmp_path):
        """Should start empty when the file is not valid JSON."""
        path = tmp_path / "storage.json"
        path.write_text("{not json")

        assert LocalStorage(path).get_item("k") is None


class TestEncryptionKeys:
    """Tests for encryption key caching."""

    async def test_keys_derived_once_and_cached(self, wallet):
        """Should save wallet-derived keys in the store."""
        store = EncryptionKeysStore.create_in_memory()
        provider = EncryptionKeysProvider.create(wallet, store)

        keys = await provider.get(wallet.public_key)

        assert keys is not None
        assert len(keys.public_key) == 32
        assert store.get(wallet.public_key) == keys

    async def test_no_keys_for_other_public_key(self, wallet, other_public_key):
        """Should return None for keys the wallet does not own."""
        provider = EncryptionKeysProvider.create(wallet, EncryptionKeysStore.create_in_memory())
        assert await provider.get(other_public_key) is None

    async def test_no_keys_without_encryption_support(self, tx_only_wallet):
        """Should return None when the wallet cannot encrypt."""
        wrapper = DialectWalletAdapterWrapper.create(tx_only_wallet)
        provider = EncryptionKeysProvider.create(wrapper, EncryptionKeysStore.create_in_memory())
        assert await provider.get(wrapper.public_key) is None

    async def test_local_storage_round_trip(self, wallet, tmp_path):
        """Should read keys back from a durable store."""
        path = tmp_path / "keys.json"
        keys = await wallet.diffie_hellman()
        EncryptionKeysStore.create_local_storage(path).save(wallet.public_key, keys)

        assert EncryptionKeysStore.create_local_storage(path).get(wallet.public_key) == keys

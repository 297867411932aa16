from .keys_provider import (
    CachedEncryptionKeysProvider,
    EncryptionKeysProvider,
    WalletEncryptionKeysProvider,
)
from .keys_store import EncryptionKeysStore, StorageEncryptionKeysStore

__all__ = [
    "EncryptionKeysProvider",
    "WalletEncryptionKeysProvider",
    "CachedEncryptionKeysProvider",
    "EncryptionKeysStore",
    "StorageEncryptionKeysStore",
]

"""Persistence for wallet-derived encryption keys."""
from __future__ import annotations

import base64
import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from ..storage import InMemoryStorage, LocalStorage, SessionStorage, Storage
from ..wallet_adapter import DiffieHellmanKeys


class EncryptionKeysStore(ABC):
    """Abstract interface for encryption key storage, keyed by public key."""

    @abstractmethod
    def get(self, public_key: str) -> Optional[DiffieHellmanKeys]:
        pass

    @abstractmethod
    def save(self, public_key: str, keys: DiffieHellmanKeys) -> DiffieHellmanKeys:
        pass

    @staticmethod
    def create_in_memory() -> "EncryptionKeysStore":
        return StorageEncryptionKeysStore(InMemoryStorage())

    @staticmethod
    def create_session_storage() -> "EncryptionKeysStore":
        return StorageEncryptionKeysStore(SessionStorage())

    @staticmethod
    def create_local_storage(path: Optional[Path] = None) -> "EncryptionKeysStore":
        return StorageEncryptionKeysStore(LocalStorage(path))


class StorageEncryptionKeysStore(EncryptionKeysStore):
    """Keys store over a ``Storage`` backend, values base64 in JSON."""

    KEY_PREFIX = "dialect-encryption-keys"

    def __init__(self, storage: Storage):
        self._storage = storage

    @property
    def storage(self) -> Storage:
        return self._storage

    def _key(self, public_key: str) -> str:
        return f"{self.KEY_PREFIX}-{public_key}"

    def get(self, public_key: str) -> Optional[DiffieHellmanKeys]:
        raw = self._storage.get_item(self._key(public_key))
        if raw is None:
            return None
        data = json.loads(raw)
        return DiffieHellmanKeys(
            public_key=base64.b64decode(data["public_key"]),
            secret_key=base64.b64decode(data["secret_key"]),
        )

    def save(self, public_key: str, keys: DiffieHellmanKeys) -> DiffieHellmanKeys:
        self._storage.set_item(
            self._key(public_key),
            json.dumps({
                "public_key": base64.b64encode(keys.public_key).decode(),
                "secret_key": base64.b64encode(keys.secret_key).decode(),
            }),
        )
        return keys

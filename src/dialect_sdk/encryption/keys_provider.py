"""Access to the connected wallet's encryption keys."""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Optional

from ..errors import UnsupportedOperationError
from ..wallet_adapter import DialectWalletAdapterWrapper, DiffieHellmanKeys
from .keys_store import EncryptionKeysStore

logger = logging.getLogger(__name__)


class EncryptionKeysProvider(ABC):
    """Provides Diffie-Hellman keys for a public key, if available."""

    @abstractmethod
    async def get(self, public_key: str) -> Optional[DiffieHellmanKeys]:
        pass

    async def get_required(self, public_key: str) -> DiffieHellmanKeys:
        keys = await self.get(public_key)
        if keys is None:
            raise UnsupportedOperationError(
                "Encryption keys are not available for this wallet",
                details={"public_key": public_key},
            )
        return keys

    @staticmethod
    def create(
        wallet: DialectWalletAdapterWrapper,
        store: EncryptionKeysStore,
    ) -> "EncryptionKeysProvider":
        return CachedEncryptionKeysProvider(WalletEncryptionKeysProvider(wallet), store)


class WalletEncryptionKeysProvider(EncryptionKeysProvider):
    """Asks the wallet to derive keys; ``None`` when it cannot encrypt."""

    def __init__(self, wallet: DialectWalletAdapterWrapper):
        self._wallet = wallet

    async def get(self, public_key: str) -> Optional[DiffieHellmanKeys]:
        if public_key != self._wallet.public_key or not self._wallet.can_encrypt:
            return None
        return await self._wallet.diffie_hellman()


class CachedEncryptionKeysProvider(EncryptionKeysProvider):
    """Store-first lookup; derived keys are saved for reuse."""

    def __init__(self, delegate: EncryptionKeysProvider, store: EncryptionKeysStore):
        self._delegate = delegate
        self._store = store

    async def get(self, public_key: str) -> Optional[DiffieHellmanKeys]:
        cached = self._store.get(public_key)
        if cached is not None:
            return cached
        keys = await self._delegate.get(public_key)
        if keys is None:
            return None
        logger.debug("Caching encryption keys for %s", public_key)
        return self._store.save(public_key, keys)

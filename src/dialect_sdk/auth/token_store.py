"""Persistence for issued auth tokens."""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from ..errors import TokenError
from ..storage import InMemoryStorage, LocalStorage, SessionStorage, Storage
from .token import Token

logger = logging.getLogger(__name__)


class TokenStore(ABC):
    """Abstract interface for token storage, keyed by subject public key."""

    @abstractmethod
    def get(self, subject: str) -> Optional[Token]:
        """Get the stored token for a subject."""
        pass

    @abstractmethod
    def save(self, token: Token) -> Token:
        """Store a token under its subject."""
        pass

    @abstractmethod
    def delete(self, subject: str) -> None:
        """Forget the token for a subject."""
        pass

    @staticmethod
    def create_in_memory() -> "TokenStore":
        return StorageTokenStore(InMemoryStorage())

    @staticmethod
    def create_session_storage() -> "TokenStore":
        return StorageTokenStore(SessionStorage())

    @staticmethod
    def create_local_storage(path: Optional[Path] = None) -> "TokenStore":
        return StorageTokenStore(LocalStorage(path))


class StorageTokenStore(TokenStore):
    """Token store over a ``Storage`` backend."""

    KEY_PREFIX = "dialect-auth-token"

    def __init__(self, storage: Storage):
        self._storage = storage

    @property
    def storage(self) -> Storage:
        return self._storage

    def _key(self, subject: str) -> str:
        return f"{self.KEY_PREFIX}-{subject}"

    def get(self, subject: str) -> Optional[Token]:
        raw = self._storage.get_item(self._key(subject))
        if raw is None:
            return None
        try:
            return Token.parse(raw)
        except TokenError:
            logger.warning("Discarding malformed stored token for %s", subject)
            self.delete(subject)
            return None

    def save(self, token: Token) -> Token:
        self._storage.set_item(self._key(token.body.sub), token.raw)
        return token

    def delete(self, subject: str) -> None:
        self._storage.remove_item(self._key(subject))

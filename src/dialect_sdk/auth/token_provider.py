"""Issuing and caching auth tokens for Dialect Cloud."""
from __future__ import annotations

import asyncio
import json
import logging
import time
from abc import ABC, abstractmethod
from datetime import timedelta

from .signers import TokenSigner
from .token import Token, b64url_encode
from .token_store import TokenStore

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_LIFETIME_MINUTES = 60
DEFAULT_TOKEN_LIFETIME = timedelta(minutes=DEFAULT_TOKEN_LIFETIME_MINUTES)


class TokenGenerator:
    """Builds and signs fresh tokens."""

    def __init__(self, signer: TokenSigner):
        self._signer = signer

    async def generate(self, lifetime: timedelta) -> Token:
        issued_at = int(time.time())
        header = {"alg": self._signer.alg, "typ": "JWT"}
        body = {
            "sub": self._signer.subject,
            "iat": issued_at,
            "exp": issued_at + int(lifetime.total_seconds()),
        }
        encoded_header = b64url_encode(json.dumps(header, separators=(",", ":")).encode())
        encoded_body = b64url_encode(json.dumps(body, separators=(",", ":")).encode())
        signing_input = f"{encoded_header}.{encoded_body}"
        signature = await self._signer.sign(signing_input.encode("ascii"))
        return Token.parse(f"{signing_input}.{b64url_encode(signature)}")


class TokenProvider(ABC):
    """Hands out a currently valid token."""

    @abstractmethod
    async def get(self) -> Token:
        pass

    def invalidate(self) -> None:
        """Forget any cached token, e.g. after the server rejected it."""


class DefaultTokenProvider(TokenProvider):
    """Signs a new token on every call."""

    def __init__(self, signer: TokenSigner, lifetime: timedelta = DEFAULT_TOKEN_LIFETIME):
        self._generator = TokenGenerator(signer)
        self._lifetime = lifetime

    async def get(self) -> Token:
        return await self._generator.generate(self._lifetime)


class CachedTokenProvider(TokenProvider):
    """Reuses a stored token until it expires or is invalidated.

    Refreshes are serialised so concurrent callers trigger at most one
    wallet signature.
    """

    def __init__(self, delegate: TokenProvider, store: TokenStore, subject: str):
        self._delegate = delegate
        self._store = store
        self._subject = subject
        self._lock = asyncio.Lock()

    def _cached(self) -> Token | None:
        token = self._store.get(self._subject)
        if token is not None and token.is_valid():
            return token
        return None

    async def get(self) -> Token:
        token = self._cached()
        if token is not None:
            return token
        async with self._lock:
            token = self._cached()
            if token is not None:
                return token
            logger.debug("Issuing new auth token for %s", self._subject)
            token = await self._delegate.get()
            return self._store.save(token)

    def invalidate(self) -> None:
        logger.debug("Discarding rejected auth token for %s", self._subject)
        self._store.delete(self._subject)
        self._delegate.invalidate()


def create_token_provider(
    signer: TokenSigner,
    lifetime: timedelta,
    store: TokenStore,
) -> TokenProvider:
    return CachedTokenProvider(DefaultTokenProvider(signer, lifetime), store, signer.subject)

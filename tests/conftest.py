"""
Pytest configuration and fixtures for Dialect SDK tests.
"""
from __future__ import annotations

import asyncio
from typing import Dict, List, Optional

import pytest
from nacl.signing import SigningKey

from dialect_sdk.identity import Identity, IdentityResolver
from dialect_sdk.storage import SessionStorage
from dialect_sdk.wallet_adapter import DialectWalletAdapterWrapper, KeypairWalletAdapter


class TransactionOnlyWallet:
    """Wallet that can sign transactions but not arbitrary messages."""

    def __init__(self):
        self._keypair = KeypairWalletAdapter(SigningKey.generate())

    @property
    def public_key(self) -> str:
        return self._keypair.public_key

    async def sign_transaction(self, payload: bytes) -> bytes:
        return self._keypair.sign_transaction(payload)


class FakeIdentityProvider(IdentityResolver):
    """Identity provider with scripted results, latency and failures."""

    def __init__(
        self,
        name: str,
        identities: Optional[Dict[str, Identity]] = None,
        delay: float = 0.0,
        error: Optional[Exception] = None,
    ):
        self._name = name
        self._identities = identities or {}
        self._delay = delay
        self._error = error
        self.calls: List[str] = []
        self.cancelled = False

    @property
    def type(self) -> str:
        return self._name

    async def _lookup(self, key: str) -> Optional[Identity]:
        self.calls.append(key)
        try:
            if self._delay:
                await asyncio.sleep(self._delay)
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        if self._error is not None:
            raise self._error
        return self._identities.get(key)

    async def resolve(self, public_key: str) -> Optional[Identity]:
        return await self._lookup(public_key)

    async def resolve_reverse(self, domain_name: str) -> Optional[Identity]:
        return await self._lookup(domain_name)


@pytest.fixture(autouse=True)
def clear_session_storage():
    """Session storage is process-wide; isolate tests from each other."""
    SessionStorage.clear()
    yield
    SessionStorage.clear()


@pytest.fixture
def keypair_wallet() -> KeypairWalletAdapter:
    return KeypairWalletAdapter()


@pytest.fixture
def wallet(keypair_wallet) -> DialectWalletAdapterWrapper:
    return DialectWalletAdapterWrapper.create(keypair_wallet)


@pytest.fixture
def tx_only_wallet() -> TransactionOnlyWallet:
    return TransactionOnlyWallet()


@pytest.fixture
def other_public_key() -> str:
    return KeypairWalletAdapter().public_key


def make_identity(name: str, public_key: str, type: str = "fake", **additionals) -> Identity:
    return Identity(name=name, type=type, public_key=public_key, additionals=additionals)

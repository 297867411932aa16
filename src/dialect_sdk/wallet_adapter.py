"""
Wallet adapter wrapper.

The SDK never holds keys itself. It talks to the application's wallet
through a duck-typed adapter exposing:

- ``public_key``: base58 string (or anything whose ``str()`` is one)
- ``sign_message(message: bytes) -> bytes`` (optional)
- ``sign_transaction(payload: bytes) -> bytes`` (optional)
- ``diffie_hellman() -> DiffieHellmanKeys`` (optional)

Adapter methods may be plain or ``async``.
"""
from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Any, Optional

import base58
from nacl import signing
from pydantic import BaseModel, ConfigDict

from .errors import IllegalArgumentError, UnsupportedOperationError


class DiffieHellmanKeys(BaseModel):
    """Curve25519 key pair used for thread encryption."""

    model_config = ConfigDict(frozen=True)

    public_key: bytes
    secret_key: bytes


@dataclass(frozen=True)
class ApiAvailability:
    """What the connected wallet can do."""

    can_sign_message: bool
    can_sign_transaction: bool
    can_encrypt: bool


async def _resolve(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


class DialectWalletAdapterWrapper:
    """Uniform async view over an application wallet."""

    def __init__(self, delegate: Any):
        self._delegate = delegate

    @classmethod
    def create(cls, wallet: Any) -> "DialectWalletAdapterWrapper":
        if isinstance(wallet, DialectWalletAdapterWrapper):
            return wallet
        if wallet is None or not getattr(wallet, "public_key", None):
            raise IllegalArgumentError("Wallet must expose a public key")
        return cls(wallet)

    @property
    def public_key(self) -> str:
        return str(self._delegate.public_key)

    @property
    def public_key_bytes(self) -> bytes:
        return base58.b58decode(self.public_key)

    def can_sign_message(self) -> bool:
        return callable(getattr(self._delegate, "sign_message", None))

    def can_sign_transaction(self) -> bool:
        return callable(getattr(self._delegate, "sign_transaction", None))

    @property
    def can_encrypt(self) -> bool:
        return callable(getattr(self._delegate, "diffie_hellman", None))

    @property
    def api_availability(self) -> ApiAvailability:
        return ApiAvailability(
            can_sign_message=self.can_sign_message(),
            can_sign_transaction=self.can_sign_transaction(),
            can_encrypt=self.can_encrypt,
        )

    async def sign_message(self, message: bytes) -> bytes:
        if not self.can_sign_message():
            raise UnsupportedOperationError("Wallet does not support message signing")
        return await _resolve(self._delegate.sign_message(message))

    async def sign_transaction(self, payload: bytes) -> bytes:
        if not self.can_sign_transaction():
            raise UnsupportedOperationError("Wallet does not support transaction signing")
        return await _resolve(self._delegate.sign_transaction(payload))

    async def diffie_hellman(self) -> DiffieHellmanKeys:
        if not self.can_encrypt:
            raise UnsupportedOperationError("Wallet does not support encryption")
        keys = await _resolve(self._delegate.diffie_hellman())
        if isinstance(keys, DiffieHellmanKeys):
            return keys
        return DiffieHellmanKeys.model_validate(keys)

    def __repr__(self) -> str:
        return f"DialectWalletAdapterWrapper({self.public_key})"


class KeypairWalletAdapter:
    """Local ed25519 keypair wallet, for scripts, bots and tests."""

    def __init__(self, signing_key: Optional[signing.SigningKey] = None):
        self._signing_key = signing_key or signing.SigningKey.generate()

    @classmethod
    def from_secret_key(cls, secret_key: bytes | str) -> "KeypairWalletAdapter":
        """Create from a 32-byte seed or a 64-byte Solana secret key (raw or base58)."""
        raw = base58.b58decode(secret_key) if isinstance(secret_key, str) else secret_key
        if len(raw) not in (32, 64):
            raise IllegalArgumentError("Secret key must be 32 or 64 bytes")
        return cls(signing.SigningKey(raw[:32]))

    @property
    def public_key(self) -> str:
        return base58.b58encode(self._signing_key.verify_key.encode()).decode()

    def sign_message(self, message: bytes) -> bytes:
        return self._signing_key.sign(message).signature

    def sign_transaction(self, payload: bytes) -> bytes:
        # signature || payload, the layout of a single-signer transaction
        return bytes(self._signing_key.sign(payload))

    def diffie_hellman(self) -> DiffieHellmanKeys:
        return DiffieHellmanKeys(
            public_key=bytes(self._signing_key.verify_key.to_curve25519_public_key()),
            secret_key=bytes(self._signing_key.to_curve25519_private_key()),
        )

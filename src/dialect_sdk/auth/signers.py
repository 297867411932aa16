"""Token signers backed by the connected wallet."""
from __future__ import annotations

from abc import ABC, abstractmethod

from ..wallet_adapter import DialectWalletAdapterWrapper


class TokenSigner(ABC):
    """Signs token payloads on behalf of a subject."""

    alg: str

    @property
    @abstractmethod
    def subject(self) -> str:
        """Base58 public key the token is issued for."""
        pass

    @abstractmethod
    async def sign(self, payload: bytes) -> bytes:
        """Sign the ``header.body`` payload."""
        pass


class Ed25519TokenSigner(TokenSigner):
    """Uses the wallet's message signing."""

    alg = "ed25519"

    def __init__(self, wallet: DialectWalletAdapterWrapper):
        self._wallet = wallet

    @property
    def subject(self) -> str:
        return self._wallet.public_key

    async def sign(self, payload: bytes) -> bytes:
        return await self._wallet.sign_message(payload)


class SolanaTxTokenSigner(TokenSigner):
    """Wraps the payload in a transaction for wallets without message signing."""

    alg = "solana-tx"

    def __init__(self, wallet: DialectWalletAdapterWrapper):
        self._wallet = wallet

    @property
    def subject(self) -> str:
        return self._wallet.public_key

    async def sign(self, payload: bytes) -> bytes:
        return await self._wallet.sign_transaction(payload)

"""
Tests for auth tokens, signers and token providers.
"""
import asyncio
import time
from datetime import timedelta

import pytest

from dialect_sdk.auth import (
    CachedTokenProvider,
    DefaultTokenProvider,
    Ed25519TokenSigner,
    SolanaTxTokenSigner,
    StorageTokenStore,
    Token,
    TokenGenerator,
    TokenProvider,
    TokenStore,
    create_token_provider,
)
from dialect_sdk.auth.token import b64url_encode
from dialect_sdk.errors import TokenError
from dialect_sdk.storage import InMemoryStorage
from dialect_sdk.wallet_adapter import DialectWalletAdapterWrapper


class CountingTokenProvider(TokenProvider):

    def __init__(self, delegate: TokenProvider):
        self._delegate = delegate
        self.calls = 0

    async def get(self) -> Token:
        self.calls += 1
        await asyncio.sleep(0.01)
        return await self._delegate.get()


class TestToken:
    """Tests for token generation and parsing."""

    async def test_ed25519_round_trip(self, wallet):
        """Should generate a token whose ed25519 signature verifies."""
        token = await TokenGenerator(Ed25519TokenSigner(wallet)).generate(timedelta(minutes=10))

        parsed = Token.parse(token.raw)

        assert parsed.header.alg == "ed25519"
        assert parsed.body.sub == wallet.public_key
        assert parsed.body.exp - parsed.body.iat == 600
        assert parsed.is_valid()
        assert str(parsed) == token.raw

    async def test_solana_tx_round_trip(self, tx_only_wallet):
        """Should verify tokens signed by transaction-only wallets."""
        wrapper = DialectWalletAdapterWrapper.create(tx_only_wallet)
        token = await TokenGenerator(SolanaTxTokenSigner(wrapper)).generate(timedelta(minutes=1))

        assert token.header.alg == "solana-tx"
        assert token.is_signature_valid()

    async def test_expiry(self, wallet):
        """Should report expiry relative to the given time."""
        token = await TokenGenerator(Ed25519TokenSigner(wallet)).generate(timedelta(minutes=1))

        assert not token.is_expired()
        assert token.is_expired(now=time.time() + 61)
        assert not token.is_valid(now=time.time() + 61)

    async def test_tampered_body_fails_verification(self, wallet, other_public_key):
        """Should reject a token whose body was swapped."""
        token = await TokenGenerator(Ed25519TokenSigner(wallet)).generate(timedelta(minutes=1))
        header, _, signature = token.raw.split(".")
        forged_body = b64url_encode(
            f'{{"sub":"{wallet.public_key}","iat":0,"exp":9999999999}}'.encode()
        )

        forged = Token.parse(f"{header}.{forged_body}.{signature}")

        assert not forged.is_signature_valid()

    @pytest.mark.parametrize("raw", ["", "a.b", "a.b.c", "e30.e30.e30"])
    def test_malformed(self, raw):
        """Should raise TokenError for malformed tokens."""
        with pytest.raises(TokenError):
            Token.parse(raw)


class TestTokenStore:
    """Tests for token persistence."""

    async def test_save_and_get(self, wallet):
        """Should return the saved token for its subject."""
        store = TokenStore.create_in_memory()
        token = await DefaultTokenProvider(Ed25519TokenSigner(wallet)).get()

        store.save(token)

        assert store.get(wallet.public_key) == token
        store.delete(wallet.public_key)
        assert store.get(wallet.public_key) is None

    def test_malformed_stored_token_discarded(self):
        """Should drop a stored value that does not parse."""
        storage = InMemoryStorage()
        storage.set_item("dialect-auth-token-abc", "garbage")
        store = StorageTokenStore(storage)

        assert store.get("abc") is None
        assert storage.get_item("dialect-auth-token-abc") is None

    async def test_session_storage_shared(self, wallet):
        """Should share session storage tokens between stores."""
        token = await DefaultTokenProvider(Ed25519TokenSigner(wallet)).get()
        TokenStore.create_session_storage().save(token)

        assert TokenStore.create_session_storage().get(wallet.public_key) == token

    async def test_local_storage_persists(self, wallet, tmp_path):
        """Should read back tokens written by another store on the same file."""
        path = tmp_path / "storage.json"
        token = await DefaultTokenProvider(Ed25519TokenSigner(wallet)).get()
        TokenStore.create_local_storage(path).save(token)

        assert TokenStore.create_local_storage(path).get(wallet.public_key) == token


class TestCachedTokenProvider:
    """Tests for token caching."""

    async def test_reuses_valid_token(self, wallet):
        """Should sign only once while the token is valid."""
        signer = Ed25519TokenSigner(wallet)
        counting = CountingTokenProvider(DefaultTokenProvider(signer))
        provider = CachedTokenProvider(counting, TokenStore.create_in_memory(), signer.subject)

        first = await provider.get()
        second = await provider.get()

        assert first == second
        assert counting.calls == 1

    async def test_concurrent_callers_share_refresh(self, wallet):
        """Should issue one token for concurrent callers."""
        signer = Ed25519TokenSigner(wallet)
        counting = CountingTokenProvider(DefaultTokenProvider(signer))
        provider = CachedTokenProvider(counting, TokenStore.create_in_memory(), signer.subject)

        tokens = await asyncio.gather(*(provider.get() for _ in range(5)))

        assert len({token.raw for token in tokens}) == 1
        assert counting.calls == 1

    async def test_refreshes_expired_token(self, wallet):
        """Should replace an expired stored token."""
        signer = Ed25519TokenSigner(wallet)
        store = TokenStore.create_in_memory()
        expired = await DefaultTokenProvider(signer, timedelta(seconds=-1)).get()
        store.save(expired)

        token = await create_token_provider(signer, timedelta(minutes=5), store).get()

        assert token.raw != expired.raw
        assert store.get(wallet.public_key) == token

    async def test_invalidate_forces_new_signature(self, wallet):
        """Should forget the stored token and sign again on the next call."""
        signer = Ed25519TokenSigner(wallet)
        store = TokenStore.create_in_memory()
        counting = CountingTokenProvider(DefaultTokenProvider(signer))
        provider = CachedTokenProvider(counting, store, signer.subject)

        await provider.get()
        provider.invalidate()

        assert store.get(wallet.public_key) is None
        await provider.get()
        assert counting.calls == 2
        assert store.get(wallet.public_key) is not None

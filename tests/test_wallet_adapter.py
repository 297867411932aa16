"""
Tests for the wallet adapter wrapper.
"""
import base58
import pytest
from nacl.signing import SigningKey, VerifyKey

from dialect_sdk.errors import IllegalArgumentError, UnsupportedOperationError
from dialect_sdk.wallet_adapter import DialectWalletAdapterWrapper, KeypairWalletAdapter


class TestDialectWalletAdapterWrapper:
    """Tests for DialectWalletAdapterWrapper."""

    def test_create_is_idempotent(self, wallet):
        """Should return an existing wrapper unchanged."""
        assert DialectWalletAdapterWrapper.create(wallet) is wallet

    def test_requires_public_key(self):
        """Should reject wallets without a public key."""
        with pytest.raises(IllegalArgumentError):
            DialectWalletAdapterWrapper.create(object())

    def test_api_availability(self, wallet, tx_only_wallet):
        """Should report what each wallet supports."""
        assert wallet.api_availability.can_sign_message
        assert wallet.api_availability.can_encrypt

        limited = DialectWalletAdapterWrapper.create(tx_only_wallet).api_availability
        assert not limited.can_sign_message
        assert limited.can_sign_transaction
        assert not limited.can_encrypt

    async def test_sign_message(self, wallet):
        """Should produce a detached signature verifiable with the public key."""
        signature = await wallet.sign_message(b"hello")
        VerifyKey(wallet.public_key_bytes).verify(b"hello", signature)

    async def test_unsupported_operations(self, tx_only_wallet):
        """Should raise UnsupportedOperationError for missing capabilities."""
        wrapper = DialectWalletAdapterWrapper.create(tx_only_wallet)

        with pytest.raises(UnsupportedOperationError):
            await wrapper.sign_message(b"hello")
        with pytest.raises(UnsupportedOperationError):
            await wrapper.diffie_hellman()

    async def test_async_delegate(self, tx_only_wallet):
        """Should await async adapter methods."""
        wrapper = DialectWalletAdapterWrapper.create(tx_only_wallet)
        signed = await wrapper.sign_transaction(b"payload")
        assert VerifyKey(wrapper.public_key_bytes).verify(signed) == b"payload"


class TestKeypairWalletAdapter:
    """Tests for KeypairWalletAdapter."""

    def test_from_seed_and_secret_key(self):
        """Should accept a 32-byte seed or a 64-byte secret key."""
        key = SigningKey.generate()
        seed = bytes(key)
        secret = seed + bytes(key.verify_key)

        from_seed = KeypairWalletAdapter.from_secret_key(seed)
        from_secret = KeypairWalletAdapter.from_secret_key(base58.b58encode(secret).decode())

        assert from_seed.public_key == from_secret.public_key
        assert base58.b58decode(from_seed.public_key) == bytes(key.verify_key)

    def test_rejects_bad_length(self):
        """Should reject keys of any other length."""
        with pytest.raises(IllegalArgumentError):
            KeypairWalletAdapter.from_secret_key(b"short")

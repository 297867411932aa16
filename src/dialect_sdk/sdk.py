"""
Dialect SDK assembly.

Example:
    ```python
    from dialect_sdk import Dialect, KeypairWalletAdapter

    async with Dialect.sdk({
        "wallet": KeypairWalletAdapter(),
        "environment": "development",
    }) as sdk:
        threads = await sdk.threads.find_all()
    ```
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Mapping, Union

from .auth.signers import Ed25519TokenSigner, SolanaTxTokenSigner, TokenSigner
from .auth.token_provider import TokenProvider, create_token_provider
from .builders import create_dapps, create_messaging
from .config import ConfigProps, ResolvedConfig, resolve_config
from .dapp.interface import Dapps
from .data_service.api import DataServiceApi
from .encryption.keys_provider import EncryptionKeysProvider
from .identity.interface import IdentityResolver
from .identity.resolvers import create_identity_resolver
from .logging import log_configuration
from .messaging.facade import MessagingFacade
from .solana.program import DialectProgram, create_dialect_program
from .wallet.wallets import (
    DataServiceWallets,
    WalletAddresses,
    WalletDappAddresses,
    WalletMessages,
    WalletNotificationSubscriptions,
    WalletPushNotificationSubscriptions,
)
from .wallet_adapter import ApiAvailability, DialectWalletAdapterWrapper


@dataclass(frozen=True)
class SolanaInfo:
    dialect_program: DialectProgram


@dataclass(frozen=True)
class DialectSdkInfo:
    api_availability: ApiAvailability
    config: ResolvedConfig
    wallet: DialectWalletAdapterWrapper
    solana: SolanaInfo
    token_provider: TokenProvider


@dataclass(frozen=True)
class DialectSdk:
    """The assembled SDK handle.

    Owns the HTTP connections of the Dialect Cloud client and the Solana
    RPC client; ``close()`` releases both.
    """

    info: DialectSdkInfo
    threads: MessagingFacade
    dapps: Dapps
    wallet: DataServiceWallets
    identity: IdentityResolver
    data_service: DataServiceApi

    async def close(self) -> None:
        await self.data_service.close()
        await self.info.solana.dialect_program.close()

    async def __aenter__(self) -> "DialectSdk":
        return self

    async def __aexit__(self, *args) -> None:
        await self.close()


def create_token_signer(wallet: DialectWalletAdapterWrapper) -> TokenSigner:
    if wallet.can_sign_message():
        return Ed25519TokenSigner(wallet)
    return SolanaTxTokenSigner(wallet)


def create_wallets(public_key: str, api: DataServiceApi) -> DataServiceWallets:
    return DataServiceWallets(
        public_key=public_key,
        addresses=WalletAddresses(api.wallet_addresses),
        dapp_addresses=WalletDappAddresses(api.wallet_dapp_addresses),
        messages=WalletMessages(api.wallet_messages),
        notification_subscriptions=WalletNotificationSubscriptions(
            api.wallet_notification_subscriptions
        ),
        push_notification_subscriptions=WalletPushNotificationSubscriptions(
            api.push_notification_subscriptions
        ),
    )


class DialectSdkFactory:

    def __init__(self, props: Union[ConfigProps, Mapping[str, Any]]):
        self._props = props

    def create(self) -> DialectSdk:
        config = resolve_config(self._props)
        log_configuration(config)
        wallet = config.wallet
        identity = create_identity_resolver(
            config.identity.strategy, config.identity.resolvers
        )

        program = create_dialect_program(
            wallet, config.solana.dialect_program_address, config.solana.rpc_url
        )
        encryption_keys_provider = EncryptionKeysProvider.create(
            wallet, config.encryption_keys_store
        )
        token_provider = create_token_provider(
            create_token_signer(wallet),
            timedelta(minutes=config.dialect_cloud.token_lifetime_minutes),
            config.dialect_cloud.token_store,
        )
        api = DataServiceApi.create(config.dialect_cloud.url, token_provider)

        threads = create_messaging(config, encryption_keys_provider, program, api)
        dapps = create_dapps(config, encryption_keys_provider, program, api)
        wallets = create_wallets(wallet.public_key, api)

        info = DialectSdkInfo(
            api_availability=wallet.api_availability,
            config=config,
            wallet=wallet,
            solana=SolanaInfo(dialect_program=program),
            token_provider=token_provider,
        )
        return DialectSdk(
            info=info,
            threads=threads,
            dapps=dapps,
            wallet=wallets,
            identity=identity,
            data_service=api,
        )


class Dialect:

    @staticmethod
    def sdk(props: Union[ConfigProps, Mapping[str, Any]]) -> DialectSdk:
        return DialectSdkFactory(props).create()

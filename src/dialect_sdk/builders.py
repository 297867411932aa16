"""
Per-backend capability builders.

Each builder maps the enabled backends, in order, to one implementation
per backend and wraps them in the aggregating facade. Nothing here does
I/O.
"""
from __future__ import annotations

from typing import List

from .backends import Backend
from .config import ResolvedConfig
from .dapp.dapps import DappsImpl
from .dapp.data_service import (
    DataServiceDappAddresses,
    DataServiceDappMessages,
    DataServiceDappNotificationSubscriptions,
    DataServiceDappNotificationTypes,
)
from .dapp.facades import (
    DappAddressesBackend,
    DappAddressesFacade,
    DappMessagesBackend,
    DappMessagesFacade,
)
from .dapp.interface import Dapps
from .dapp.solana import SolanaDappAddresses, SolanaDappMessages
from .data_service.api import DataServiceApi
from .encryption.keys_provider import EncryptionKeysProvider
from .errors import IllegalArgumentError
from .messaging.data_service import DataServiceMessaging
from .messaging.facade import MessagingBackend, MessagingFacade
from .messaging.solana import SolanaMessaging
from .solana.program import DialectProgram


def create_messaging(
    config: ResolvedConfig,
    encryption_keys_provider: EncryptionKeysProvider,
    program: DialectProgram,
    api: DataServiceApi,
) -> MessagingFacade:
    backends: List[MessagingBackend] = []
    for backend in config.backends:
        if backend == Backend.SOLANA:
            messaging = SolanaMessaging(config.wallet, program, encryption_keys_provider)
        elif backend == Backend.DIALECT_CLOUD:
            messaging = DataServiceMessaging(
                config.wallet.public_key, api.threads, encryption_keys_provider
            )
        else:
            raise IllegalArgumentError(f"Unknown backend {backend}")
        backends.append(MessagingBackend(backend, messaging))
    return MessagingFacade(backends)


def create_dapps(
    config: ResolvedConfig,
    encryption_keys_provider: EncryptionKeysProvider,
    program: DialectProgram,
    api: DataServiceApi,
) -> Dapps:
    dapp_public_key = config.wallet.public_key
    notification_types = DataServiceDappNotificationTypes(
        dapp_public_key, api.dapp_notification_types
    )
    notification_subscriptions = DataServiceDappNotificationSubscriptions(
        dapp_public_key, api.dapp_notification_subscriptions
    )

    addresses: List[DappAddressesBackend] = []
    messages: List[DappMessagesBackend] = []
    for backend in config.backends:
        if backend == Backend.SOLANA:
            solana_addresses = SolanaDappAddresses(program)
            addresses.append(DappAddressesBackend(backend, solana_addresses))
            messages.append(DappMessagesBackend(backend, SolanaDappMessages(
                SolanaMessaging(config.wallet, program, encryption_keys_provider),
                solana_addresses,
                notification_types,
                notification_subscriptions,
            )))
        elif backend == Backend.DIALECT_CLOUD:
            addresses.append(DappAddressesBackend(
                backend, DataServiceDappAddresses(dapp_public_key, api.dapps)
            ))
            messages.append(DappMessagesBackend(
                backend, DataServiceDappMessages(dapp_public_key, api.dapps)
            ))
        else:
            raise IllegalArgumentError(f"Unknown backend {backend}")

    return DappsImpl(
        dapp_public_key,
        DappAddressesFacade(addresses),
        DappMessagesFacade(messages),
        notification_types,
        notification_subscriptions,
        api.dapps,
    )

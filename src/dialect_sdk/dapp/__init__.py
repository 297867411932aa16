from .dapps import DappsImpl
from .data_service import (
    DataServiceDappAddresses,
    DataServiceDappMessages,
    DataServiceDappNotificationSubscriptions,
    DataServiceDappNotificationTypes,
)
from .facades import (
    BroadcastResult,
    DappAddressesBackend,
    DappAddressesFacade,
    DappMessagesBackend,
    DappMessagesFacade,
)
from .interface import (
    Address,
    AddressType,
    BroadcastDappMessageCommand,
    CreateDappCommand,
    CreateNotificationTypeCommand,
    Dapp,
    DappAddress,
    DappAddresses,
    DappInfo,
    DappMessages,
    DappNotificationSubscription,
    DappNotificationSubscriptions,
    DappNotificationTypes,
    Dapps,
    MulticastDappMessageCommand,
    NotificationConfig,
    NotificationSubscription,
    NotificationType,
    SendDappMessageCommand,
    UnicastDappMessageCommand,
    UpdateNotificationTypeCommand,
)
from .solana import SolanaDappAddresses, SolanaDappMessages

__all__ = [
    "Dapps",
    "DappsImpl",
    "Dapp",
    "DappInfo",
    "DappAddresses",
    "DappMessages",
    "DappNotificationTypes",
    "DappNotificationSubscriptions",
    "DappAddressesFacade",
    "DappAddressesBackend",
    "DappMessagesFacade",
    "DappMessagesBackend",
    "BroadcastResult",
    "DataServiceDappAddresses",
    "DataServiceDappMessages",
    "DataServiceDappNotificationTypes",
    "DataServiceDappNotificationSubscriptions",
    "SolanaDappAddresses",
    "SolanaDappMessages",
    "Address",
    "AddressType",
    "DappAddress",
    "NotificationConfig",
    "NotificationType",
    "NotificationSubscription",
    "DappNotificationSubscription",
    "CreateDappCommand",
    "CreateNotificationTypeCommand",
    "UpdateNotificationTypeCommand",
    "BroadcastDappMessageCommand",
    "UnicastDappMessageCommand",
    "MulticastDappMessageCommand",
    "SendDappMessageCommand",
]

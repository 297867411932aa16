from .wallets import (
    DappMessage,
    DataServiceWallets,
    PushNotificationSubscription,
    WalletAddresses,
    WalletDappAddresses,
    WalletMessages,
    WalletNotificationSubscription,
    WalletNotificationSubscriptions,
    WalletPushNotificationSubscriptions,
)

__all__ = [
    "DataServiceWallets",
    "WalletAddresses",
    "WalletDappAddresses",
    "WalletMessages",
    "WalletNotificationSubscriptions",
    "WalletPushNotificationSubscriptions",
    "DappMessage",
    "WalletNotificationSubscription",
    "PushNotificationSubscription",
]

"""Dialect Cloud REST API client."""

from .api import (
    DataServiceApi,
    DataServiceDappNotificationSubscriptionsApi,
    DataServiceDappNotificationTypesApi,
    DataServiceDappsApi,
    DataServiceDialectsApi,
    DataServicePushNotificationSubscriptionsApi,
    DataServiceWalletAddressesApi,
    DataServiceWalletDappAddressesApi,
    DataServiceWalletMessagesApi,
    DataServiceWalletNotificationSubscriptionsApi,
)
from .client import DataServiceClient

__all__ = [
    "DataServiceApi",
    "DataServiceClient",
    "DataServiceDialectsApi",
    "DataServiceDappsApi",
    "DataServiceDappNotificationTypesApi",
    "DataServiceDappNotificationSubscriptionsApi",
    "DataServiceWalletAddressesApi",
    "DataServiceWalletDappAddressesApi",
    "DataServiceWalletMessagesApi",
    "DataServiceWalletNotificationSubscriptionsApi",
    "DataServicePushNotificationSubscriptionsApi",
]

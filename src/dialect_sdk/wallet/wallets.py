"""
Wallet-level management against Dialect Cloud.

The connected wallet registers delivery addresses (email, telegram, sms,
wallet), links them to dapps, reads the messages dapps sent it and
toggles per notification type subscriptions.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from ..dapp.data_service import to_address, to_dapp_address, to_notification_type
from ..dapp.interface import Address, AddressType, DappAddress, NotificationConfig, NotificationType
from ..data_service.api import (
    DataServicePushNotificationSubscriptionsApi,
    DataServiceWalletAddressesApi,
    DataServiceWalletDappAddressesApi,
    DataServiceWalletMessagesApi,
    DataServiceWalletNotificationSubscriptionsApi,
)
from ..data_service.models import (
    CreateAddressCommandDto,
    CreateDappAddressCommandDto,
    NotificationConfigDto,
    PatchAddressCommandDto,
    PatchDappAddressCommandDto,
    UpsertNotificationSubscriptionCommandDto,
    UpsertPushNotificationSubscriptionCommandDto,
    VerifyAddressCommandDto,
    WalletNotificationSubscriptionDto,
)


class _WalletModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class DappMessage(_WalletModel):
    author: str
    timestamp: datetime
    text: str
    title: Optional[str] = None


class WalletNotificationSubscription(_WalletModel):
    notification_type: NotificationType
    config: NotificationConfig


class PushNotificationSubscription(_WalletModel):
    wallet_public_key: str
    physical_id: str
    token: str


def _to_subscription(dto: WalletNotificationSubscriptionDto) -> WalletNotificationSubscription:
    return WalletNotificationSubscription(
        notification_type=to_notification_type(dto.notification_type),
        config=NotificationConfig(enabled=dto.subscription.config.enabled),
    )


class WalletAddresses:
    """Delivery addresses owned by the wallet."""

    def __init__(self, api: DataServiceWalletAddressesApi):
        self._api = api

    async def create(self, type: AddressType, value: str) -> Address:
        dto = await self._api.create(CreateAddressCommandDto(type=AddressType(type).value, value=value))
        return to_address(dto)

    async def find(self, address_id: str) -> Optional[Address]:
        dto = await self._api.find(address_id)
        return to_address(dto) if dto else None

    async def find_all(self) -> List[Address]:
        return [to_address(dto) for dto in await self._api.find_all()]

    async def update(self, address_id: str, value: str) -> Address:
        return to_address(await self._api.patch(address_id, PatchAddressCommandDto(value=value)))

    async def delete(self, address_id: str) -> None:
        await self._api.delete(address_id)

    async def verify(self, address_id: str, code: str) -> Address:
        return to_address(await self._api.verify(address_id, VerifyAddressCommandDto(code=code)))

    async def resend_verification_code(self, address_id: str) -> None:
        await self._api.resend_verification_code(address_id)


class WalletDappAddresses:
    """Links between the wallet's addresses and dapps."""

    def __init__(self, api: DataServiceWalletDappAddressesApi):
        self._api = api

    async def create(self, dapp_public_key: str, address_id: str, enabled: bool = True) -> DappAddress:
        dto = await self._api.create(CreateDappAddressCommandDto(
            dapp_public_key=dapp_public_key, address_id=address_id, enabled=enabled,
        ))
        return to_dapp_address(dto)

    async def find_all(self, dapp_public_key: Optional[str] = None) -> List[DappAddress]:
        return [to_dapp_address(dto) for dto in await self._api.find_all(dapp_public_key)]

    async def update(self, dapp_address_id: str, enabled: bool) -> DappAddress:
        dto = await self._api.patch(dapp_address_id, PatchDappAddressCommandDto(enabled=enabled))
        return to_dapp_address(dto)

    async def delete(self, dapp_address_id: str) -> None:
        await self._api.delete(dapp_address_id)


class WalletMessages:

    def __init__(self, api: DataServiceWalletMessagesApi):
        self._api = api

    async def find_all_from_dapps(self, skip: int = 0, take: int = 50) -> List[DappMessage]:
        dtos = await self._api.find_all_dapp_messages(skip=skip, take=take)
        return [
            DappMessage(author=dto.owner, timestamp=dto.timestamp, text=dto.text, title=dto.title)
            for dto in dtos
        ]


class WalletNotificationSubscriptions:

    def __init__(self, api: DataServiceWalletNotificationSubscriptionsApi):
        self._api = api

    async def find_all(self, dapp_public_key: str) -> List[WalletNotificationSubscription]:
        return [_to_subscription(dto) for dto in await self._api.find_all(dapp_public_key)]

    async def upsert(self, notification_type_id: str, enabled: bool) -> WalletNotificationSubscription:
        dto = await self._api.upsert(UpsertNotificationSubscriptionCommandDto(
            notification_type_id=notification_type_id,
            config=NotificationConfigDto(enabled=enabled),
        ))
        return _to_subscription(dto)


class WalletPushNotificationSubscriptions:

    def __init__(self, api: DataServicePushNotificationSubscriptionsApi):
        self._api = api

    async def find(self, physical_id: str) -> Optional[PushNotificationSubscription]:
        dto = await self._api.find(physical_id)
        return PushNotificationSubscription.model_validate(dto.model_dump()) if dto else None

    async def upsert(self, physical_id: str, token: str) -> PushNotificationSubscription:
        dto = await self._api.upsert(
            UpsertPushNotificationSubscriptionCommandDto(physical_id=physical_id, token=token)
        )
        return PushNotificationSubscription.model_validate(dto.model_dump())

    async def delete(self, physical_id: str) -> None:
        await self._api.delete(physical_id)


@dataclass(frozen=True)
class DataServiceWallets:
    """Everything the connected wallet manages about itself."""

    public_key: str
    addresses: WalletAddresses
    dapp_addresses: WalletDappAddresses
    messages: WalletMessages
    notification_subscriptions: WalletNotificationSubscriptions
    push_notification_subscriptions: WalletPushNotificationSubscriptions

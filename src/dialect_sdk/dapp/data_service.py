"""Dialect Cloud backed dapp capabilities."""
from __future__ import annotations

from typing import List

from ..data_service.api import (
    DataServiceDappNotificationSubscriptionsApi,
    DataServiceDappNotificationTypesApi,
    DataServiceDappsApi,
)
from ..data_service.models import (
    AddressDto,
    BroadcastDappMessageCommandDto,
    CreateNotificationTypeCommandDto,
    DappAddressDto,
    MulticastDappMessageCommandDto,
    NotificationConfigDto,
    NotificationTypeDto,
    PatchNotificationTypeCommandDto,
    UnicastDappMessageCommandDto,
)
from .interface import (
    Address,
    CreateNotificationTypeCommand,
    DappAddress,
    DappAddresses,
    DappMessages,
    DappNotificationSubscription,
    DappNotificationSubscriptions,
    DappNotificationTypes,
    MulticastDappMessageCommand,
    NotificationConfig,
    NotificationSubscription,
    NotificationType,
    SendDappMessageCommand,
    UnicastDappMessageCommand,
    UpdateNotificationTypeCommand,
)


def to_notification_type(dto: NotificationTypeDto) -> NotificationType:
    return NotificationType.model_validate(dto.model_dump())


def to_address(dto: AddressDto) -> Address:
    return Address(
        id=dto.id,
        type=dto.type,
        verified=dto.verified,
        value=dto.value,
        wallet_public_key=dto.wallet.public_key,
    )


def to_dapp_address(dto: DappAddressDto) -> DappAddress:
    return DappAddress(
        id=dto.id,
        enabled=dto.enabled,
        channel_id=dto.channel_id,
        address=to_address(dto.address),
    )


class DataServiceDappAddresses(DappAddresses):

    def __init__(self, dapp_public_key: str, api: DataServiceDappsApi):
        self._dapp_public_key = dapp_public_key
        self._api = api

    async def find_all(self) -> List[DappAddress]:
        dtos = await self._api.find_dapp_addresses(self._dapp_public_key)
        return [to_dapp_address(dto) for dto in dtos]


class DataServiceDappMessages(DappMessages):
    """Delivery is fanned out server side, to every channel of each recipient."""

    def __init__(self, dapp_public_key: str, api: DataServiceDappsApi):
        self._dapp_public_key = dapp_public_key
        self._api = api

    async def send(self, command: SendDappMessageCommand) -> None:
        common = {
            "title": command.title,
            "message": command.message,
            "notification_type_id": command.notification_type_id,
        }
        if isinstance(command, UnicastDappMessageCommand):
            await self._api.unicast(
                self._dapp_public_key,
                UnicastDappMessageCommandDto(**common, recipient_public_key=command.recipient),
            )
        elif isinstance(command, MulticastDappMessageCommand):
            await self._api.multicast(
                self._dapp_public_key,
                MulticastDappMessageCommandDto(**common, recipient_public_keys=command.recipients),
            )
        else:
            await self._api.broadcast(
                self._dapp_public_key, BroadcastDappMessageCommandDto(**common)
            )


class DataServiceDappNotificationTypes(DappNotificationTypes):

    def __init__(self, dapp_public_key: str, api: DataServiceDappNotificationTypesApi):
        self._dapp_public_key = dapp_public_key
        self._api = api

    async def find_all(self) -> List[NotificationType]:
        return [to_notification_type(dto) for dto in await self._api.find_all(self._dapp_public_key)]

    async def create(self, command: CreateNotificationTypeCommand) -> NotificationType:
        dto = await self._api.create(
            self._dapp_public_key,
            CreateNotificationTypeCommandDto(
                **command.model_dump(exclude={"default_config"}),
                default_config=NotificationConfigDto(enabled=command.default_config.enabled),
            ),
        )
        return to_notification_type(dto)

    async def update(
        self, notification_type_id: str, command: UpdateNotificationTypeCommand
    ) -> NotificationType:
        default_config = None
        if command.default_config is not None:
            default_config = NotificationConfigDto(enabled=command.default_config.enabled)
        dto = await self._api.patch(
            self._dapp_public_key,
            notification_type_id,
            PatchNotificationTypeCommandDto(
                **command.model_dump(exclude={"default_config"}),
                default_config=default_config,
            ),
        )
        return to_notification_type(dto)

    async def delete(self, notification_type_id: str) -> None:
        await self._api.delete(self._dapp_public_key, notification_type_id)


class DataServiceDappNotificationSubscriptions(DappNotificationSubscriptions):

    def __init__(self, dapp_public_key: str, api: DataServiceDappNotificationSubscriptionsApi):
        self._dapp_public_key = dapp_public_key
        self._api = api

    async def find_all(self) -> List[DappNotificationSubscription]:
        dtos = await self._api.find_all(self._dapp_public_key)
        return [
            DappNotificationSubscription(
                notification_type=to_notification_type(dto.notification_type),
                subscriptions=[
                    NotificationSubscription(
                        wallet_public_key=sub.wallet.public_key,
                        config=NotificationConfig(enabled=sub.config.enabled),
                    )
                    for sub in dto.subscriptions
                ],
            )
            for dto in dtos
        ]

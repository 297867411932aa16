"""The connected wallet acting as a dapp."""
from __future__ import annotations

from typing import List, Optional

from ..data_service.api import DataServiceDappsApi
from ..data_service.models import CreateDappCommandDto, DappDto
from .interface import (
    CreateDappCommand,
    Dapp,
    DappAddresses,
    DappInfo,
    DappMessages,
    DappNotificationSubscriptions,
    DappNotificationTypes,
    Dapps,
)


def _to_info(dto: DappDto) -> DappInfo:
    return DappInfo.model_validate(dto.model_dump())


class DappsImpl(Dapps):

    def __init__(
        self,
        dapp_public_key: str,
        dapp_addresses: DappAddresses,
        dapp_messages: DappMessages,
        notification_types: DappNotificationTypes,
        notification_subscriptions: DappNotificationSubscriptions,
        api: DataServiceDappsApi,
    ):
        self._dapp_public_key = dapp_public_key
        self._dapp_addresses = dapp_addresses
        self._dapp_messages = dapp_messages
        self._notification_types = notification_types
        self._notification_subscriptions = notification_subscriptions
        self._api = api

    def _to_dapp(self, dto: DappDto) -> Dapp:
        return Dapp(
            info=_to_info(dto),
            dapp_addresses=self._dapp_addresses,
            messages=self._dapp_messages,
            notification_types=self._notification_types,
            notification_subscriptions=self._notification_subscriptions,
        )

    async def create(self, command: CreateDappCommand) -> Dapp:
        dto = await self._api.create(CreateDappCommandDto(**command.model_dump()))
        return self._to_dapp(dto)

    async def find(self) -> Optional[Dapp]:
        dto = await self._api.find(self._dapp_public_key)
        return self._to_dapp(dto) if dto else None

    async def find_all(self, verified: Optional[bool] = None) -> List[DappInfo]:
        return [_to_info(dto) for dto in await self._api.find_all(verified=verified)]

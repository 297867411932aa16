"""
Typed sub-clients for the Dialect Cloud REST API.

Example:
    ```python
    api = DataServiceApi.create("https://dialectapi.to", token_provider)
    threads = await api.threads.list()
    await api.close()
    ```
"""
from __future__ import annotations

from typing import List, Optional

from ..auth.token_provider import TokenProvider
from ..errors import ApiError
from .client import DataServiceClient
from .models import (
    AddressDto,
    BroadcastDappMessageCommandDto,
    CreateAddressCommandDto,
    CreateDappAddressCommandDto,
    CreateDappCommandDto,
    CreateDialectCommandDto,
    CreateNotificationTypeCommandDto,
    DappAddressDto,
    DappDto,
    DappMessageDto,
    DappNotificationSubscriptionDto,
    DialectAccountDto,
    MulticastDappMessageCommandDto,
    NotificationTypeDto,
    PatchAddressCommandDto,
    PatchDappAddressCommandDto,
    PatchNotificationTypeCommandDto,
    PushNotificationSubscriptionDto,
    SendMessageCommandDto,
    UnicastDappMessageCommandDto,
    UpsertNotificationSubscriptionCommandDto,
    UpsertPushNotificationSubscriptionCommandDto,
    VerifyAddressCommandDto,
    WalletNotificationSubscriptionDto,
)

API_PREFIX = "/api/v1"


class _Resource:
    def __init__(self, client: DataServiceClient) -> None:
        self._client = client

    async def _get_or_none(self, path: str, params: Optional[dict] = None):
        try:
            return await self._client.get(path, params=params)
        except ApiError as e:
            if e.status_code == 404:
                return None
            raise


class DataServiceDialectsApi(_Resource):
    """Threads stored in Dialect Cloud."""

    async def create(self, command: CreateDialectCommandDto) -> DialectAccountDto:
        data = await self._client.post(f"{API_PREFIX}/dialects", command.to_payload())
        return DialectAccountDto.model_validate(data)

    async def list(self, member_public_keys: Optional[List[str]] = None) -> List[DialectAccountDto]:
        params = None
        if member_public_keys:
            params = {"memberPublicKeys": ",".join(member_public_keys)}
        data = await self._client.get(f"{API_PREFIX}/dialects", params=params)
        return [DialectAccountDto.model_validate(item) for item in data or []]

    async def get(self, public_key: str) -> Optional[DialectAccountDto]:
        data = await self._get_or_none(f"{API_PREFIX}/dialects/{public_key}")
        return DialectAccountDto.model_validate(data) if data else None

    async def send_message(self, public_key: str, command: SendMessageCommandDto) -> DialectAccountDto:
        data = await self._client.post(
            f"{API_PREFIX}/dialects/{public_key}/messages", command.to_payload()
        )
        return DialectAccountDto.model_validate(data)

    async def delete(self, public_key: str) -> None:
        await self._client.delete(f"{API_PREFIX}/dialects/{public_key}")


class DataServiceDappsApi(_Resource):
    """Dapp registry and dapp-to-wallet messaging."""

    async def create(self, command: CreateDappCommandDto) -> DappDto:
        data = await self._client.post(f"{API_PREFIX}/dapps", command.to_payload())
        return DappDto.model_validate(data)

    async def find(self, dapp_public_key: str) -> Optional[DappDto]:
        data = await self._get_or_none(f"{API_PREFIX}/dapps/{dapp_public_key}")
        return DappDto.model_validate(data) if data else None

    async def find_all(self, verified: Optional[bool] = None) -> List[DappDto]:
        params = {"verified": str(verified).lower()} if verified is not None else None
        data = await self._client.get(f"{API_PREFIX}/dapps", params=params)
        return [DappDto.model_validate(item) for item in data or []]

    async def find_dapp_addresses(self, dapp_public_key: str) -> List[DappAddressDto]:
        data = await self._client.get(f"{API_PREFIX}/dapps/{dapp_public_key}/dappAddresses")
        return [DappAddressDto.model_validate(item) for item in data or []]

    async def broadcast(self, dapp_public_key: str, command: BroadcastDappMessageCommandDto) -> None:
        await self._client.post(
            f"{API_PREFIX}/dapps/{dapp_public_key}/messages/broadcast", command.to_payload()
        )

    async def unicast(self, dapp_public_key: str, command: UnicastDappMessageCommandDto) -> None:
        await self._client.post(
            f"{API_PREFIX}/dapps/{dapp_public_key}/messages/unicast", command.to_payload()
        )

    async def multicast(self, dapp_public_key: str, command: MulticastDappMessageCommandDto) -> None:
        await self._client.post(
            f"{API_PREFIX}/dapps/{dapp_public_key}/messages/multicast", command.to_payload()
        )


class DataServiceDappNotificationTypesApi(_Resource):

    def _path(self, dapp_public_key: str) -> str:
        return f"{API_PREFIX}/dapps/{dapp_public_key}/notificationTypes"

    async def find_all(self, dapp_public_key: str) -> List[NotificationTypeDto]:
        data = await self._client.get(self._path(dapp_public_key))
        return [NotificationTypeDto.model_validate(item) for item in data or []]

    async def create(
        self, dapp_public_key: str, command: CreateNotificationTypeCommandDto
    ) -> NotificationTypeDto:
        data = await self._client.post(self._path(dapp_public_key), command.to_payload())
        return NotificationTypeDto.model_validate(data)

    async def patch(
        self, dapp_public_key: str, notification_type_id: str, command: PatchNotificationTypeCommandDto
    ) -> NotificationTypeDto:
        data = await self._client.patch(
            f"{self._path(dapp_public_key)}/{notification_type_id}", command.to_payload()
        )
        return NotificationTypeDto.model_validate(data)

    async def delete(self, dapp_public_key: str, notification_type_id: str) -> None:
        await self._client.delete(f"{self._path(dapp_public_key)}/{notification_type_id}")


class DataServiceDappNotificationSubscriptionsApi(_Resource):

    async def find_all(self, dapp_public_key: str) -> List[DappNotificationSubscriptionDto]:
        data = await self._client.get(
            f"{API_PREFIX}/dapps/{dapp_public_key}/notificationSubscriptions"
        )
        return [DappNotificationSubscriptionDto.model_validate(item) for item in data or []]


class DataServiceWalletAddressesApi(_Resource):
    """Addresses (email, telegram, sms, wallet) of the authenticated wallet."""

    PATH = f"{API_PREFIX}/wallets/me/addresses"

    async def create(self, command: CreateAddressCommandDto) -> AddressDto:
        return AddressDto.model_validate(await self._client.post(self.PATH, command.to_payload()))

    async def find_all(self) -> List[AddressDto]:
        data = await self._client.get(self.PATH)
        return [AddressDto.model_validate(item) for item in data or []]

    async def find(self, address_id: str) -> Optional[AddressDto]:
        data = await self._get_or_none(f"{self.PATH}/{address_id}")
        return AddressDto.model_validate(data) if data else None

    async def patch(self, address_id: str, command: PatchAddressCommandDto) -> AddressDto:
        data = await self._client.patch(f"{self.PATH}/{address_id}", command.to_payload())
        return AddressDto.model_validate(data)

    async def delete(self, address_id: str) -> None:
        await self._client.delete(f"{self.PATH}/{address_id}")

    async def verify(self, address_id: str, command: VerifyAddressCommandDto) -> AddressDto:
        data = await self._client.post(f"{self.PATH}/{address_id}/verify", command.to_payload())
        return AddressDto.model_validate(data)

    async def resend_verification_code(self, address_id: str) -> None:
        await self._client.post(f"{self.PATH}/{address_id}/resendVerificationCode")


class DataServiceWalletDappAddressesApi(_Resource):

    PATH = f"{API_PREFIX}/wallets/me/dappAddresses"

    async def create(self, command: CreateDappAddressCommandDto) -> DappAddressDto:
        data = await self._client.post(self.PATH, command.to_payload())
        return DappAddressDto.model_validate(data)

    async def find_all(self, dapp_public_key: Optional[str] = None) -> List[DappAddressDto]:
        params = {"dappPublicKey": dapp_public_key} if dapp_public_key else None
        data = await self._client.get(self.PATH, params=params)
        return [DappAddressDto.model_validate(item) for item in data or []]

    async def patch(self, dapp_address_id: str, command: PatchDappAddressCommandDto) -> DappAddressDto:
        data = await self._client.patch(f"{self.PATH}/{dapp_address_id}", command.to_payload())
        return DappAddressDto.model_validate(data)

    async def delete(self, dapp_address_id: str) -> None:
        await self._client.delete(f"{self.PATH}/{dapp_address_id}")


class DataServiceWalletMessagesApi(_Resource):

    async def find_all_dapp_messages(self, skip: int = 0, take: int = 50) -> List[DappMessageDto]:
        data = await self._client.get(
            f"{API_PREFIX}/wallets/me/dappMessages", params={"skip": skip, "take": take}
        )
        return [DappMessageDto.model_validate(item) for item in data or []]


class DataServiceWalletNotificationSubscriptionsApi(_Resource):

    PATH = f"{API_PREFIX}/wallets/me/notificationSubscriptions"

    async def find_all(self, dapp_public_key: str) -> List[WalletNotificationSubscriptionDto]:
        data = await self._client.get(self.PATH, params={"dappPublicKey": dapp_public_key})
        return [WalletNotificationSubscriptionDto.model_validate(item) for item in data or []]

    async def upsert(
        self, command: UpsertNotificationSubscriptionCommandDto
    ) -> WalletNotificationSubscriptionDto:
        data = await self._client.post(self.PATH, command.to_payload())
        return WalletNotificationSubscriptionDto.model_validate(data)


class DataServicePushNotificationSubscriptionsApi(_Resource):

    PATH = f"{API_PREFIX}/wallets/me/pushNotificationSubscriptions"

    async def find(self, physical_id: str) -> Optional[PushNotificationSubscriptionDto]:
        data = await self._get_or_none(f"{self.PATH}/{physical_id}")
        return PushNotificationSubscriptionDto.model_validate(data) if data else None

    async def upsert(
        self, command: UpsertPushNotificationSubscriptionCommandDto
    ) -> PushNotificationSubscriptionDto:
        data = await self._client.post(self.PATH, command.to_payload())
        return PushNotificationSubscriptionDto.model_validate(data)

    async def delete(self, physical_id: str) -> None:
        await self._client.delete(f"{self.PATH}/{physical_id}")


class DataServiceApi:
    """All Dialect Cloud sub-clients sharing one authenticated transport."""

    def __init__(self, client: DataServiceClient):
        self.client = client
        self.threads = DataServiceDialectsApi(client)
        self.dapps = DataServiceDappsApi(client)
        self.dapp_notification_types = DataServiceDappNotificationTypesApi(client)
        self.dapp_notification_subscriptions = DataServiceDappNotificationSubscriptionsApi(client)
        self.wallet_addresses = DataServiceWalletAddressesApi(client)
        self.wallet_dapp_addresses = DataServiceWalletDappAddressesApi(client)
        self.wallet_messages = DataServiceWalletMessagesApi(client)
        self.wallet_notification_subscriptions = DataServiceWalletNotificationSubscriptionsApi(client)
        self.push_notification_subscriptions = DataServicePushNotificationSubscriptionsApi(client)

    @classmethod
    def create(cls, base_url: str, token_provider: TokenProvider) -> "DataServiceApi":
        return cls(DataServiceClient(base_url, token_provider))

    async def close(self) -> None:
        await self.client.close()

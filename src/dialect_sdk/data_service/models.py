"""Dialect Cloud request and response models."""
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class DataServiceModel(BaseModel):
    """Base model; camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# Threads

class MemberDto(DataServiceModel):
    public_key: str
    scopes: List[str] = Field(default_factory=list)


class MessageDto(DataServiceModel):
    owner: str
    text: str
    timestamp: datetime


class DialectDto(DataServiceModel):
    members: List[MemberDto]
    messages: List[MessageDto] = Field(default_factory=list)
    encrypted: bool = False
    last_message_timestamp: Optional[datetime] = None


class DialectAccountDto(DataServiceModel):
    public_key: str
    dialect: DialectDto


class CreateDialectCommandDto(DataServiceModel):
    members: List[MemberDto]
    encrypted: bool = False


class SendMessageCommandDto(DataServiceModel):
    text: str


# Dapps

class DappDto(DataServiceModel):
    id: str
    public_key: str
    name: str
    description: Optional[str] = None
    website: Optional[str] = None
    avatar_url: Optional[str] = None
    telegram_username: Optional[str] = None
    verified: bool = False


class CreateDappCommandDto(DataServiceModel):
    name: str
    description: Optional[str] = None
    website: Optional[str] = None
    avatar_url: Optional[str] = None
    telegram_username: Optional[str] = None


class WalletDto(DataServiceModel):
    id: str
    public_key: str


class AddressDto(DataServiceModel):
    id: str
    type: str
    verified: bool = False
    value: str
    wallet: WalletDto


class DappAddressDto(DataServiceModel):
    id: str
    enabled: bool
    channel_id: Optional[str] = None
    address: AddressDto


class BroadcastDappMessageCommandDto(DataServiceModel):
    title: Optional[str] = None
    message: str
    notification_type_id: Optional[str] = None


class UnicastDappMessageCommandDto(BroadcastDappMessageCommandDto):
    recipient_public_key: str


class MulticastDappMessageCommandDto(BroadcastDappMessageCommandDto):
    recipient_public_keys: List[str]


# Notification types and subscriptions

class NotificationConfigDto(DataServiceModel):
    enabled: bool


class NotificationTypeDto(DataServiceModel):
    id: str
    name: str
    human_readable_id: str
    trigger: Optional[str] = None
    ordering_priority: int = 0
    tags: List[str] = Field(default_factory=list)
    default_config: NotificationConfigDto


class CreateNotificationTypeCommandDto(DataServiceModel):
    name: str
    human_readable_id: str
    trigger: Optional[str] = None
    ordering_priority: Optional[int] = None
    tags: Optional[List[str]] = None
    default_config: NotificationConfigDto


class PatchNotificationTypeCommandDto(DataServiceModel):
    name: Optional[str] = None
    human_readable_id: Optional[str] = None
    trigger: Optional[str] = None
    ordering_priority: Optional[int] = None
    tags: Optional[List[str]] = None
    default_config: Optional[NotificationConfigDto] = None


class SubscriptionDto(DataServiceModel):
    wallet: WalletDto
    config: NotificationConfigDto


class DappNotificationSubscriptionDto(DataServiceModel):
    notification_type: NotificationTypeDto
    subscriptions: List[SubscriptionDto] = Field(default_factory=list)


class WalletNotificationSubscriptionDto(DataServiceModel):
    notification_type: NotificationTypeDto
    subscription: SubscriptionDto


class UpsertNotificationSubscriptionCommandDto(DataServiceModel):
    notification_type_id: str
    config: NotificationConfigDto


# Wallet addresses and messages

class CreateAddressCommandDto(DataServiceModel):
    type: str
    value: str


class PatchAddressCommandDto(DataServiceModel):
    value: Optional[str] = None


class VerifyAddressCommandDto(DataServiceModel):
    code: str


class CreateDappAddressCommandDto(DataServiceModel):
    dapp_public_key: str
    address_id: str
    enabled: bool = True


class PatchDappAddressCommandDto(DataServiceModel):
    enabled: Optional[bool] = None


class DappMessageDto(DataServiceModel):
    text: str
    timestamp: datetime
    owner: str
    title: Optional[str] = None


class PushNotificationSubscriptionDto(DataServiceModel):
    wallet_public_key: str
    physical_id: str
    token: str


class UpsertPushNotificationSubscriptionCommandDto(DataServiceModel):
    physical_id: str
    token: str

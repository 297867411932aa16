"""Dapp capabilities: subscriber addresses, notifications and messages."""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class AddressType(str, Enum):
    EMAIL = "EMAIL"
    SMS = "SMS"
    TELEGRAM = "TELEGRAM"
    WALLET = "WALLET"


class _DappModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class Address(_DappModel):
    id: str
    type: str
    verified: bool
    value: str
    wallet_public_key: str


class DappAddress(_DappModel):
    """A subscriber address a dapp can deliver to."""

    id: str
    enabled: bool
    channel_id: Optional[str] = None
    address: Address


class NotificationConfig(_DappModel):
    enabled: bool


class NotificationType(_DappModel):
    id: str
    name: str
    human_readable_id: str
    trigger: Optional[str] = None
    ordering_priority: int = 0
    tags: List[str] = Field(default_factory=list)
    default_config: NotificationConfig


class NotificationSubscription(_DappModel):
    wallet_public_key: str
    config: NotificationConfig


class DappNotificationSubscription(_DappModel):
    notification_type: NotificationType
    subscriptions: List[NotificationSubscription] = Field(default_factory=list)


class DappInfo(_DappModel):
    id: str
    public_key: str
    name: str
    description: Optional[str] = None
    website: Optional[str] = None
    avatar_url: Optional[str] = None
    telegram_username: Optional[str] = None
    verified: bool = False


# Commands

class CreateDappCommand(BaseModel):
    name: str
    description: Optional[str] = None
    website: Optional[str] = None
    avatar_url: Optional[str] = None
    telegram_username: Optional[str] = None


class CreateNotificationTypeCommand(BaseModel):
    name: str
    human_readable_id: str
    trigger: Optional[str] = None
    ordering_priority: Optional[int] = None
    tags: Optional[List[str]] = None
    default_config: NotificationConfig = NotificationConfig(enabled=True)


class UpdateNotificationTypeCommand(BaseModel):
    name: Optional[str] = None
    human_readable_id: Optional[str] = None
    trigger: Optional[str] = None
    ordering_priority: Optional[int] = None
    tags: Optional[List[str]] = None
    default_config: Optional[NotificationConfig] = None


class BroadcastDappMessageCommand(BaseModel):
    """Message to every subscriber of the dapp."""

    message: str
    title: Optional[str] = None
    notification_type_id: Optional[str] = None


class UnicastDappMessageCommand(BroadcastDappMessageCommand):
    recipient: str


class MulticastDappMessageCommand(BroadcastDappMessageCommand):
    recipients: List[str]


SendDappMessageCommand = Union[
    UnicastDappMessageCommand,
    MulticastDappMessageCommand,
    BroadcastDappMessageCommand,
]


# Capabilities

class DappAddresses(ABC):

    @abstractmethod
    async def find_all(self) -> List[DappAddress]:
        pass


class DappMessages(ABC):

    @abstractmethod
    async def send(self, command: SendDappMessageCommand) -> None:
        pass


class DappNotificationTypes(ABC):

    @abstractmethod
    async def find_all(self) -> List[NotificationType]:
        pass

    @abstractmethod
    async def create(self, command: CreateNotificationTypeCommand) -> NotificationType:
        pass

    @abstractmethod
    async def update(
        self, notification_type_id: str, command: UpdateNotificationTypeCommand
    ) -> NotificationType:
        pass

    @abstractmethod
    async def delete(self, notification_type_id: str) -> None:
        pass


class DappNotificationSubscriptions(ABC):

    @abstractmethod
    async def find_all(self) -> List[DappNotificationSubscription]:
        pass


@dataclass(frozen=True)
class Dapp:
    """The connected wallet's dapp with its capabilities attached."""

    info: DappInfo
    dapp_addresses: DappAddresses
    messages: DappMessages
    notification_types: DappNotificationTypes
    notification_subscriptions: DappNotificationSubscriptions

    @property
    def public_key(self) -> str:
        return self.info.public_key

    @property
    def name(self) -> str:
        return self.info.name


class Dapps(ABC):

    @abstractmethod
    async def create(self, command: CreateDappCommand) -> Dapp:
        pass

    @abstractmethod
    async def find(self) -> Optional[Dapp]:
        pass

    @abstractmethod
    async def find_all(self, verified: Optional[bool] = None) -> List[DappInfo]:
        pass

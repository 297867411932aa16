"""Messaging capability: threads between wallets."""
from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..backends import Backend


class ThreadMemberScope(str, Enum):
    ADMIN = "ADMIN"
    WRITE = "WRITE"


class ThreadMember(BaseModel):
    model_config = ConfigDict(frozen=True)

    public_key: str
    scopes: List[ThreadMemberScope] = Field(default_factory=lambda: [ThreadMemberScope.WRITE])


class ThreadId(BaseModel):
    """Thread address qualified by the backend that stores it."""

    model_config = ConfigDict(frozen=True)

    backend: Backend
    address: str

    def __str__(self) -> str:
        return f"{self.backend.value}:{self.address}"


class ThreadMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    author: str
    timestamp: datetime
    text: str


class Thread(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: ThreadId
    me: ThreadMember
    other_members: List[ThreadMember]
    encrypted: bool = False
    can_be_decrypted: bool = True
    updated_at: Optional[datetime] = None

    @property
    def backend(self) -> Backend:
        return self.id.backend


class CreateThreadCommand(BaseModel):
    me: ThreadMember
    other_members: List[ThreadMember]
    encrypted: bool = False
    backend: Optional[Backend] = None


class SendMessageCommand(BaseModel):
    text: str


class FindThreadQuery(BaseModel):
    """Find a thread either by id or by its other members."""

    id: Optional[ThreadId] = None
    other_members: Optional[List[str]] = None

    @model_validator(mode="after")
    def _exactly_one_criterion(self) -> "FindThreadQuery":
        if (self.id is None) == (self.other_members is None):
            raise ValueError("Provide either id or other_members")
        return self


class Messaging(ABC):
    """Thread operations for one backend, or all of them via the facade."""

    @abstractmethod
    async def create(self, command: CreateThreadCommand) -> Thread:
        pass

    @abstractmethod
    async def find(self, query: FindThreadQuery) -> Optional[Thread]:
        pass

    @abstractmethod
    async def find_all(self) -> List[Thread]:
        pass

    @abstractmethod
    async def messages(self, thread_id: ThreadId) -> List[ThreadMessage]:
        pass

    @abstractmethod
    async def send(self, thread_id: ThreadId, command: SendMessageCommand) -> None:
        pass

    @abstractmethod
    async def delete(self, thread_id: ThreadId) -> None:
        pass

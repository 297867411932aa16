"""Dialect Cloud backed messaging."""
from __future__ import annotations

from typing import List, Optional

from ..backends import Backend
from ..data_service.api import DataServiceDialectsApi
from ..data_service.models import (
    CreateDialectCommandDto,
    DialectAccountDto,
    MemberDto,
    SendMessageCommandDto,
)
from ..encryption.keys_provider import EncryptionKeysProvider
from ..errors import ResourceNotFoundError
from .interface import (
    CreateThreadCommand,
    FindThreadQuery,
    Messaging,
    SendMessageCommand,
    Thread,
    ThreadId,
    ThreadMember,
    ThreadMemberScope,
    ThreadMessage,
)


_KNOWN_SCOPES = {scope.value for scope in ThreadMemberScope}


def _to_member(dto: MemberDto) -> ThreadMember:
    scopes = [ThreadMemberScope(scope) for scope in dto.scopes if scope in _KNOWN_SCOPES]
    return ThreadMember(public_key=dto.public_key, scopes=scopes)


class DataServiceMessaging(Messaging):

    def __init__(
        self,
        me: str,
        api: DataServiceDialectsApi,
        encryption_keys_provider: EncryptionKeysProvider,
    ):
        self._me = me
        self._api = api
        self._encryption_keys_provider = encryption_keys_provider

    async def _to_thread(self, dto: DialectAccountDto) -> Thread:
        members = [_to_member(member) for member in dto.dialect.members]
        me = next((m for m in members if m.public_key == self._me), None)
        if me is None:
            me = ThreadMember(public_key=self._me, scopes=[])
        can_be_decrypted = True
        if dto.dialect.encrypted:
            can_be_decrypted = await self._encryption_keys_provider.get(self._me) is not None
        return Thread(
            id=ThreadId(backend=Backend.DIALECT_CLOUD, address=dto.public_key),
            me=me,
            other_members=[m for m in members if m.public_key != self._me],
            encrypted=dto.dialect.encrypted,
            can_be_decrypted=can_be_decrypted,
            updated_at=dto.dialect.last_message_timestamp,
        )

    async def create(self, command: CreateThreadCommand) -> Thread:
        if command.encrypted:
            await self._encryption_keys_provider.get_required(self._me)
        members = [command.me, *command.other_members]
        dto = await self._api.create(CreateDialectCommandDto(
            members=[
                MemberDto(public_key=m.public_key, scopes=[s.value for s in m.scopes])
                for m in members
            ],
            encrypted=command.encrypted,
        ))
        return await self._to_thread(dto)

    async def find(self, query: FindThreadQuery) -> Optional[Thread]:
        if query.id is not None:
            dto = await self._api.get(query.id.address)
            return await self._to_thread(dto) if dto else None
        wanted = {self._me, *query.other_members}
        for dto in await self._api.list(member_public_keys=sorted(wanted)):
            if {m.public_key for m in dto.dialect.members} == wanted:
                return await self._to_thread(dto)
        return None

    async def find_all(self) -> List[Thread]:
        return [await self._to_thread(dto) for dto in await self._api.list()]

    async def messages(self, thread_id: ThreadId) -> List[ThreadMessage]:
        dto = await self._api.get(thread_id.address)
        if dto is None:
            raise ResourceNotFoundError("Thread", str(thread_id))
        return [
            ThreadMessage(author=m.owner, timestamp=m.timestamp, text=m.text)
            for m in dto.dialect.messages
        ]

    async def send(self, thread_id: ThreadId, command: SendMessageCommand) -> None:
        await self._api.send_message(thread_id.address, SendMessageCommandDto(text=command.text))

    async def delete(self, thread_id: ThreadId) -> None:
        await self._api.delete(thread_id.address)

"""Solana backed messaging."""
from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import List, Optional

from ..backends import Backend
from ..encryption.keys_provider import EncryptionKeysProvider
from ..errors import ResourceNotFoundError
from ..solana.program import DialectAccount, DialectProgram, MemberAccount
from ..wallet_adapter import DialectWalletAdapterWrapper
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


def _to_scopes(member: MemberAccount) -> List[ThreadMemberScope]:
    admin, write = (member.scopes + [False, False])[:2]
    scopes = []
    if admin:
        scopes.append(ThreadMemberScope.ADMIN)
    if write:
        scopes.append(ThreadMemberScope.WRITE)
    return scopes


def _from_scopes(scopes: List[ThreadMemberScope]) -> List[bool]:
    return [ThreadMemberScope.ADMIN in scopes, ThreadMemberScope.WRITE in scopes]


def _to_datetime(timestamp: int) -> datetime:
    return datetime.fromtimestamp(timestamp, tz=timezone.utc)


class SolanaMessaging(Messaging):

    def __init__(
        self,
        wallet: DialectWalletAdapterWrapper,
        program: DialectProgram,
        encryption_keys_provider: EncryptionKeysProvider,
    ):
        self._wallet = wallet
        self._program = program
        self._encryption_keys_provider = encryption_keys_provider

    @property
    def _me(self) -> str:
        return self._wallet.public_key

    async def _to_thread(self, account: DialectAccount) -> Thread:
        members = [
            ThreadMember(public_key=m.public_key, scopes=_to_scopes(m)) for m in account.members
        ]
        me = next((m for m in members if m.public_key == self._me), None)
        if me is None:
            me = ThreadMember(public_key=self._me, scopes=[])
        can_be_decrypted = True
        if account.encrypted:
            can_be_decrypted = await self._encryption_keys_provider.get(self._me) is not None
        return Thread(
            id=ThreadId(backend=Backend.SOLANA, address=account.address),
            me=me,
            other_members=[m for m in members if m.public_key != self._me],
            encrypted=account.encrypted,
            can_be_decrypted=can_be_decrypted,
            updated_at=_to_datetime(account.last_message_timestamp)
            if account.last_message_timestamp else None,
        )

    async def create(self, command: CreateThreadCommand) -> Thread:
        if command.encrypted:
            await self._encryption_keys_provider.get_required(self._me)
        members = [command.me, *command.other_members]
        address = self._program.dialect_address([m.public_key for m in members])
        await self._program.execute(
            "create_dialect",
            accounts={"owner": self._me, "dialect": address},
            args={
                "members": [
                    {"public_key": m.public_key, "scopes": _from_scopes(m.scopes)}
                    for m in members
                ],
                "encrypted": command.encrypted,
            },
        )
        account = DialectAccount(
            address=address,
            members=[
                MemberAccount(public_key=m.public_key, scopes=_from_scopes(m.scopes))
                for m in members
            ],
            encrypted=command.encrypted,
        )
        return await self._to_thread(account)

    async def find(self, query: FindThreadQuery) -> Optional[Thread]:
        if query.id is not None:
            address = query.id.address
        else:
            address = self._program.dialect_address([self._me, *query.other_members])
        account = await self._program.fetch_dialect(address)
        return await self._to_thread(account) if account else None

    async def find_all(self) -> List[Thread]:
        accounts = await self._program.fetch_dialects(member=self._me)
        return [await self._to_thread(account) for account in accounts]

    async def messages(self, thread_id: ThreadId) -> List[ThreadMessage]:
        account = await self._program.fetch_dialect(thread_id.address)
        if account is None:
            raise ResourceNotFoundError("Thread", str(thread_id))
        return [
            ThreadMessage(author=m.owner, timestamp=_to_datetime(m.timestamp), text=m.text)
            for m in account.messages
        ]

    async def send(self, thread_id: ThreadId, command: SendMessageCommand) -> None:
        await self._program.execute(
            "send_message",
            accounts={"sender": self._me, "dialect": thread_id.address},
            args={"text": command.text, "timestamp": int(time.time())},
        )

    async def delete(self, thread_id: ThreadId) -> None:
        await self._program.execute(
            "close_dialect",
            accounts={"owner": self._me, "dialect": thread_id.address},
        )

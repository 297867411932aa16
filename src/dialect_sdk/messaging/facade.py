"""
Messaging over every enabled backend.

Per-operation policy:

- ``create``: one backend, ``command.backend`` or the first enabled one.
- ``find`` by id, ``messages``, ``send``, ``delete``: the backend named
  in the thread id.
- ``find`` by members: all backends concurrently; the first match in
  backend order wins. Any backend error propagates.
- ``find_all``: results of all backends concatenated in backend order,
  without deduplication. Any backend error propagates.
"""
from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..backends import Backend
from ..errors import IllegalArgumentError
from .interface import (
    CreateThreadCommand,
    FindThreadQuery,
    Messaging,
    SendMessageCommand,
    Thread,
    ThreadId,
    ThreadMessage,
)


@dataclass(frozen=True)
class MessagingBackend:
    backend: Backend
    messaging: Messaging


class MessagingFacade(Messaging):

    def __init__(self, backends: Sequence[MessagingBackend]):
        if not backends:
            raise IllegalArgumentError("Please specify at least one backend.")
        self._backends = tuple(backends)

    @property
    def backends(self) -> tuple[Backend, ...]:
        return tuple(binding.backend for binding in self._backends)

    def _lookup(self, backend: Backend) -> Messaging:
        for binding in self._backends:
            if binding.backend == backend:
                return binding.messaging
        raise IllegalArgumentError(f"Backend {Backend(backend).value} is not enabled")

    async def create(self, command: CreateThreadCommand) -> Thread:
        backend = command.backend or self._backends[0].backend
        return await self._lookup(backend).create(command)

    async def find(self, query: FindThreadQuery) -> Optional[Thread]:
        if query.id is not None:
            return await self._lookup(query.id.backend).find(query)
        found = await asyncio.gather(
            *(binding.messaging.find(query) for binding in self._backends)
        )
        return next((thread for thread in found if thread is not None), None)

    async def find_all(self) -> List[Thread]:
        results = await asyncio.gather(
            *(binding.messaging.find_all() for binding in self._backends)
        )
        return [thread for threads in results for thread in threads]

    async def messages(self, thread_id: ThreadId) -> List[ThreadMessage]:
        return await self._lookup(thread_id.backend).messages(thread_id)

    async def send(self, thread_id: ThreadId, command: SendMessageCommand) -> None:
        await self._lookup(thread_id.backend).send(thread_id, command)

    async def delete(self, thread_id: ThreadId) -> None:
        await self._lookup(thread_id.backend).delete(thread_id)

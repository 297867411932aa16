"""
Dapp capabilities over every enabled backend.

- ``DappAddressesFacade.find_all``: merged in backend order, no
  deduplication; any backend error propagates.
- ``DappMessagesFacade.send``: sent through every backend. Failures are
  collected per backend and reported in the ``BroadcastResult``; only
  when all backends fail is a ``BroadcastError`` raised.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

from ..backends import Backend
from ..errors import BroadcastError, IllegalArgumentError
from .interface import DappAddress, DappAddresses, DappMessages, SendDappMessageCommand

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DappAddressesBackend:
    backend: Backend
    addresses: DappAddresses


@dataclass(frozen=True)
class DappMessagesBackend:
    backend: Backend
    messages: DappMessages


@dataclass(frozen=True)
class BroadcastResult:
    succeeded: Tuple[Backend, ...] = ()
    failed: Dict[Backend, Exception] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failed


class DappAddressesFacade(DappAddresses):

    def __init__(self, backends: Sequence[DappAddressesBackend]):
        if not backends:
            raise IllegalArgumentError("Please specify at least one backend.")
        self._backends = tuple(backends)

    async def find_all(self) -> List[DappAddress]:
        results = await asyncio.gather(
            *(binding.addresses.find_all() for binding in self._backends)
        )
        return [address for addresses in results for address in addresses]


class DappMessagesFacade(DappMessages):

    def __init__(self, backends: Sequence[DappMessagesBackend]):
        if not backends:
            raise IllegalArgumentError("Please specify at least one backend.")
        self._backends = tuple(backends)

    async def send(self, command: SendDappMessageCommand) -> BroadcastResult:
        outcomes = await asyncio.gather(
            *(binding.messages.send(command) for binding in self._backends),
            return_exceptions=True,
        )
        succeeded = []
        failed: Dict[Backend, Exception] = {}
        for binding, outcome in zip(self._backends, outcomes):
            if isinstance(outcome, Exception):
                logger.warning("Dapp message via %s failed: %s", binding.backend.value, outcome)
                failed[binding.backend] = outcome
            elif isinstance(outcome, BaseException):
                raise outcome
            else:
                succeeded.append(binding.backend)
        if not succeeded:
            raise BroadcastError(
                "Dapp message failed on every backend",
                {backend.value: error for backend, error in failed.items()},
            )
        return BroadcastResult(succeeded=tuple(succeeded), failed=failed)

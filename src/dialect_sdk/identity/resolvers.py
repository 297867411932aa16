"""
Identity resolution strategies over an ordered list of providers.

Three execution policies:

- ``first-found``: providers are asked one after another; the first
  identity wins and later providers are never called.
- ``first-found-fast``: every provider is asked at once; the first
  identity to arrive wins, whatever the provider order, and the remaining
  lookups are cancelled.
- ``aggregate-sequential``: providers are asked one after another and
  every identity found is kept, in provider order.

Provider errors never fail a lookup: they are logged and the provider is
treated as having found nothing.
"""
from __future__ import annotations

import asyncio
import logging
from abc import abstractmethod
from typing import Awaitable, Callable, List, Optional, Sequence, Tuple

from ..errors import IllegalArgumentError
from .interface import Identity, IdentityResolver

logger = logging.getLogger(__name__)

FIRST_FOUND = "first-found"
FIRST_FOUND_FAST = "first-found-fast"
AGGREGATE_SEQUENTIAL = "aggregate-sequential"

IDENTITY_STRATEGIES = (FIRST_FOUND, FIRST_FOUND_FAST, AGGREGATE_SEQUENTIAL)

Lookup = Callable[[IdentityResolver], Awaitable[Optional[Identity]]]


async def _attempt(provider: IdentityResolver, lookup: Lookup) -> Optional[Identity]:
    try:
        return await lookup(provider)
    except Exception as e:
        logger.warning("Identity provider %s failed: %s", provider.type, e)
        return None


def _by_public_key(public_key: str) -> Lookup:
    return lambda provider: provider.resolve(public_key)


def _by_domain_name(domain_name: str) -> Lookup:
    return lambda provider: provider.resolve_reverse(domain_name)


class _StrategyResolver(IdentityResolver):
    strategy: str

    def __init__(self, resolvers: Sequence[IdentityResolver]):
        self._resolvers = tuple(resolvers)

    @property
    def type(self) -> str:
        return self.strategy

    @property
    def resolvers(self) -> Tuple[IdentityResolver, ...]:
        return self._resolvers

    @abstractmethod
    async def _run(self, lookup: Lookup) -> List[Identity]:
        pass

    async def resolve_all(self, public_key: str) -> List[Identity]:
        return await self._run(_by_public_key(public_key))

    async def resolve_reverse_all(self, domain_name: str) -> List[Identity]:
        return await self._run(_by_domain_name(domain_name))

    async def resolve(self, public_key: str) -> Optional[Identity]:
        found = await self.resolve_all(public_key)
        return found[0] if found else None

    async def resolve_reverse(self, domain_name: str) -> Optional[Identity]:
        found = await self.resolve_reverse_all(domain_name)
        return found[0] if found else None


class FirstFoundIdentityResolver(_StrategyResolver):
    strategy = FIRST_FOUND

    async def _run(self, lookup: Lookup) -> List[Identity]:
        for provider in self.resolvers:
            identity = await _attempt(provider, lookup)
            if identity is not None:
                return [identity]
        return []


class FirstFoundFastIdentityResolver(_StrategyResolver):
    strategy = FIRST_FOUND_FAST

    async def _run(self, lookup: Lookup) -> List[Identity]:
        if not self.resolvers:
            return []
        tasks = [
            asyncio.ensure_future(_attempt(provider, lookup)) for provider in self.resolvers
        ]
        try:
            for next_done in asyncio.as_completed(tasks):
                identity = await next_done
                if identity is not None:
                    return [identity]
            return []
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()


class AggregateSequentialIdentityResolver(_StrategyResolver):
    """Collects every provider's identity.

    ``resolve`` folds the list into one identity: the first one found,
    with ``additionals`` merged from the others. Keys from earlier
    providers take precedence.
    """

    strategy = AGGREGATE_SEQUENTIAL

    async def _run(self, lookup: Lookup) -> List[Identity]:
        found = []
        for provider in self.resolvers:
            identity = await _attempt(provider, lookup)
            if identity is not None:
                found.append(identity)
        return found

    @staticmethod
    def _fold(found: List[Identity]) -> Optional[Identity]:
        if not found:
            return None
        additionals = {}
        for identity in reversed(found):
            additionals.update(identity.additionals)
        return found[0].model_copy(update={"additionals": additionals})

    async def resolve(self, public_key: str) -> Optional[Identity]:
        return self._fold(await self.resolve_all(public_key))

    async def resolve_reverse(self, domain_name: str) -> Optional[Identity]:
        return self._fold(await self.resolve_reverse_all(domain_name))


def create_identity_resolver(
    strategy: str, resolvers: Sequence[IdentityResolver]
) -> IdentityResolver:
    if strategy == FIRST_FOUND:
        return FirstFoundIdentityResolver(resolvers)
    elif strategy == FIRST_FOUND_FAST:
        return FirstFoundFastIdentityResolver(resolvers)
    elif strategy == AGGREGATE_SEQUENTIAL:
        return AggregateSequentialIdentityResolver(resolvers)
    raise IllegalArgumentError(f"Unknown identity strategy {strategy}")

"""Solana backed dapp capabilities.

On Solana a dapp reaches a subscriber through the thread they share, so
subscriber addresses are the other members of the dapp's threads.
"""
from __future__ import annotations

import logging
from typing import List, Set

from ..errors import ResourceNotFoundError
from ..messaging.interface import FindThreadQuery, SendMessageCommand
from ..messaging.solana import SolanaMessaging
from ..solana.program import DialectProgram
from .interface import (
    Address,
    AddressType,
    DappAddress,
    DappAddresses,
    DappMessages,
    DappNotificationSubscriptions,
    DappNotificationTypes,
    MulticastDappMessageCommand,
    SendDappMessageCommand,
    UnicastDappMessageCommand,
)

logger = logging.getLogger(__name__)


class SolanaDappAddresses(DappAddresses):

    def __init__(self, program: DialectProgram):
        self._program = program

    async def find_all(self) -> List[DappAddress]:
        dapp = self._program.wallet.public_key
        addresses = []
        for account in await self._program.fetch_dialects(member=dapp):
            for member in account.members:
                if member.public_key == dapp:
                    continue
                addresses.append(DappAddress(
                    id=account.address,
                    enabled=True,
                    address=Address(
                        id=account.address,
                        type=AddressType.WALLET.value,
                        verified=True,
                        value=member.public_key,
                        wallet_public_key=member.public_key,
                    ),
                ))
        return addresses


class SolanaDappMessages(DappMessages):
    """Writes the message into each recipient's thread with the dapp.

    With a notification type, recipients that disabled it are skipped.
    Recipients without a thread are skipped too.
    """

    def __init__(
        self,
        messaging: SolanaMessaging,
        dapp_addresses: SolanaDappAddresses,
        notification_types: DappNotificationTypes,
        notification_subscriptions: DappNotificationSubscriptions,
    ):
        self._messaging = messaging
        self._dapp_addresses = dapp_addresses
        self._notification_types = notification_types
        self._notification_subscriptions = notification_subscriptions

    async def _recipients(self, command: SendDappMessageCommand) -> List[str]:
        if isinstance(command, UnicastDappMessageCommand):
            return [command.recipient]
        if isinstance(command, MulticastDappMessageCommand):
            return list(command.recipients)
        addresses = await self._dapp_addresses.find_all()
        return list(dict.fromkeys(a.address.wallet_public_key for a in addresses if a.enabled))

    async def _opted_out(self, notification_type_id: str) -> Set[str]:
        known = {t.id for t in await self._notification_types.find_all()}
        if notification_type_id not in known:
            raise ResourceNotFoundError("NotificationType", notification_type_id)
        for entry in await self._notification_subscriptions.find_all():
            if entry.notification_type.id == notification_type_id:
                return {
                    sub.wallet_public_key for sub in entry.subscriptions if not sub.config.enabled
                }
        return set()

    async def send(self, command: SendDappMessageCommand) -> None:
        recipients = await self._recipients(command)
        if command.notification_type_id:
            opted_out = await self._opted_out(command.notification_type_id)
            recipients = [r for r in recipients if r not in opted_out]
        text = f"{command.title}\n{command.message}" if command.title else command.message
        for recipient in recipients:
            thread = await self._messaging.find(FindThreadQuery(other_members=[recipient]))
            if thread is None:
                logger.debug("No thread with %s, skipping", recipient)
                continue
            await self._messaging.send(thread.id, SendMessageCommand(text=text))

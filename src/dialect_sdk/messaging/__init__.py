from .data_service import DataServiceMessaging
from .facade import MessagingBackend, MessagingFacade
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
from .solana import SolanaMessaging

__all__ = [
    "Messaging",
    "MessagingBackend",
    "MessagingFacade",
    "DataServiceMessaging",
    "SolanaMessaging",
    "Thread",
    "ThreadId",
    "ThreadMember",
    "ThreadMemberScope",
    "ThreadMessage",
    "CreateThreadCommand",
    "SendMessageCommand",
    "FindThreadQuery",
]

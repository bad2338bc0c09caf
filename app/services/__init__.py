"""Services package for the messaging application."""

from .conversation_aggregator import conversation_aggregator, ConversationAggregator
from .directory import catalog, user_directory, Catalog, UserDirectory
from .message_composer import message_composer, MessageComposer
from .message_hydrator import message_hydrator, MessageHydrator
from .thread_fetcher import thread_fetcher, ThreadFetcher
from .unread_counter import unread_counter, UnreadCounter

__all__ = [
    "conversation_aggregator",
    "ConversationAggregator",
    "catalog",
    "user_directory",
    "Catalog",
    "UserDirectory",
    "message_composer",
    "MessageComposer",
    "message_hydrator",
    "MessageHydrator",
    "thread_fetcher",
    "ThreadFetcher",
    "unread_counter",
    "UnreadCounter",
]

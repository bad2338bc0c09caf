"""Derives a viewer's conversation index from the flat message log."""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from app.crud import ViewerRole, crud_message
from app.models.message import Message
from app.schemas.conversation import ConversationResponse
from app.services.directory import user_directory
from app.services.message_hydrator import message_hydrator
from app.utils.identifiers import parse_id

logger = logging.getLogger(__name__)


def ordering_key(message: Message):
    """Total order on messages: creation time, then insertion sequence."""
    return (message.created_at, message.id)


@dataclass
class _Conversation:
    other_user_id: int
    last_message: Optional[Message] = None
    unread_count: int = 0
    total_messages: int = 0

    def add(self, message: Message, role: ViewerRole) -> None:
        self.total_messages += 1
        if role is ViewerRole.AS_RECIPIENT and not message.is_read:
            self.unread_count += 1
        if self.last_message is None or ordering_key(message) > ordering_key(self.last_message):
            self.last_message = message


class ConversationAggregator:
    """
    Builds the inbox: one entry per counterparty.

    Nothing is cached or stored; each call is a fresh grouping pass over the
    viewer's messages, so new messages and read-marks show up immediately.
    """

    def group(self, messages: List[Message], viewer_id: int) -> List[_Conversation]:
        """Group messages by counterparty, most recently active first."""
        groups: Dict[int, _Conversation] = {}
        for message in messages:
            role = ViewerRole.of(message, viewer_id)
            other_user_id = role.counterparty(message)
            if other_user_id not in groups:
                groups[other_user_id] = _Conversation(other_user_id=other_user_id)
            groups[other_user_id].add(message, role)

        return sorted(
            groups.values(),
            key=lambda conversation: ordering_key(conversation.last_message),
            reverse=True,
        )

    def list_conversations(self, db: Session, *, viewer_id: Any) -> List[ConversationResponse]:
        """
        List the viewer's conversations.

        Counterparties missing from the user directory are left out.

        Raises:
            InvalidArgumentException: Malformed viewer id
        """
        viewer = parse_id(viewer_id, "user id")
        messages = crud_message.get_for_viewer(db, viewer_id=viewer)
        conversations = self.group(messages, viewer)

        users = user_directory.lookup_many(db, (c.other_user_id for c in conversations))
        kept = [c for c in conversations if c.other_user_id in users]
        if len(kept) != len(conversations):
            logger.warning(
                f"Skipped {len(conversations) - len(kept)} conversation(s) of user {viewer} "
                f"with unknown counterparties"
            )

        last_messages = message_hydrator.hydrate_many(db, [c.last_message for c in kept])
        return [
            ConversationResponse(
                other_user_id=conversation.other_user_id,
                other_user=user_directory.summarize(users[conversation.other_user_id]),
                last_message=last_message,
                unread_count=conversation.unread_count,
                total_messages=conversation.total_messages,
            )
            for conversation, last_message in zip(kept, last_messages)
        ]


conversation_aggregator = ConversationAggregator()

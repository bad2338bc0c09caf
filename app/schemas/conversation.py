"""Pydantic schemas for Conversation."""

from typing import Optional

from app.schemas.common import CamelModel
from app.schemas.message import MessageResponse
from app.schemas.user import UserSummary


class ConversationResponse(CamelModel):
    """One inbox entry: everything exchanged between the viewer and one counterparty."""
    other_user_id: int
    other_user: Optional[UserSummary] = None
    last_message: MessageResponse
    unread_count: int = 0
    total_messages: int = 0

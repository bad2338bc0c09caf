"""Messaging endpoints: inbox, threads, sending and read state."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.api.deps import get_current_active_user, get_db
from app.models.user import User
from app.schemas.conversation import ConversationResponse
from app.schemas.message import MessageCreate, MessageResponse, UnreadCountResponse
from app.services import (
    conversation_aggregator,
    message_composer,
    thread_fetcher,
    unread_counter,
)


router = APIRouter(
    tags=["Messages"],
)


@router.get(
    "/conversations",
    response_model=List[ConversationResponse],
    status_code=status.HTTP_200_OK,
    summary="List conversations",
    description="""
    Get one entry per counterparty the current user has exchanged messages with.

    Each entry carries the latest message, the number of unread messages
    received from that user and the total message count. Ordered by the
    latest message (most recent first).
    """,
)
def list_conversations(
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> List[ConversationResponse]:
    """List all conversations for the current user."""
    return conversation_aggregator.list_conversations(db, viewer_id=current_user.id)


@router.get(
    "/conversations/{other_user_id}",
    response_model=List[MessageResponse],
    status_code=status.HTTP_200_OK,
    summary="Get conversation with a user",
    description="""
    Get all messages exchanged with another user, oldest first.

    Use `productRef` to narrow the thread to one listing. Opening a thread
    marks the messages received from that user as read.
    """,
)
def get_conversation(
    other_user_id: str,
    product_ref: Optional[str] = Query(None, alias="productRef", description="Listing or giveaway id"),
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> List[MessageResponse]:
    """Get the thread with another user."""
    return thread_fetcher.get_thread(
        db,
        viewer_id=current_user.id,
        other_user_id=other_user_id,
        product_ref=product_ref,
    )


@router.post(
    "/messages",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Send message",
    description="""
    Send a message to another user, optionally about a listing and with a
    meeting proposal.

    When `subject` is omitted it defaults to "Inquiry about: <title>" for
    product messages. A meeting proposal needs both `meetingDate` and
    `meetingLocation`; `meetingTime` (HH:MM) is optional.
    """,
)
def send_message(
    message_in: MessageCreate,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> MessageResponse:
    """Send a message."""
    return message_composer.send_request(db, sender_id=current_user.id, message_in=message_in)


@router.get(
    "/unread-count",
    response_model=UnreadCountResponse,
    status_code=status.HTTP_200_OK,
    summary="Get unread message count",
    description="Get the number of unread messages received by the current user.",
)
def get_unread_count(
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> UnreadCountResponse:
    """Get unread message count for the current user."""
    return UnreadCountResponse(count=unread_counter.count(db, viewer_id=current_user.id))


@router.put(
    "/messages/{message_id}/read",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Mark message as read",
    description="Mark a single message as read. Only its recipient may do this.",
)
def mark_message_as_read(
    message_id: str,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> MessageResponse:
    """Mark one message as read."""
    return thread_fetcher.mark_read(db, viewer_id=current_user.id, message_id=message_id)

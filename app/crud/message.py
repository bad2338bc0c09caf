"""CRUD operations for Message (the append-only message store)."""

import enum
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import and_, func, or_, select, update
from sqlalchemy.orm import Session

from app.crud.base import CRUDBase
from app.models.message import Message


class ViewerRole(str, enum.Enum):
    """The side of a message a viewer stands on."""

    AS_SENDER = "as_sender"
    AS_RECIPIENT = "as_recipient"

    @classmethod
    def of(cls, message: Message, viewer_id: int) -> "ViewerRole":
        return cls.AS_SENDER if message.sender_id == viewer_id else cls.AS_RECIPIENT

    def counterparty(self, message: Message) -> int:
        """Id of the other participant, seen from this role."""
        if self is ViewerRole.AS_SENDER:
            return message.recipient_id
        return message.sender_id

    def clause(self, viewer_id: int, other_user_id: Optional[int] = None):
        """SQL condition selecting messages where the viewer plays this role."""
        if self is ViewerRole.AS_SENDER:
            own, other = Message.sender_id, Message.recipient_id
        else:
            own, other = Message.recipient_id, Message.sender_id
        conditions = [own == viewer_id]
        if other_user_id is not None:
            conditions.append(other == other_user_id)
        return and_(*conditions)


def participation(viewer_id: int, other_user_id: Optional[int] = None):
    """Messages where the viewer is either party (optionally with one counterparty)."""
    return or_(*(role.clause(viewer_id, other_user_id) for role in ViewerRole))


class CRUDMessage(CRUDBase[Message, dict]):
    """CRUD operations for Message."""

    def create_message(
        self,
        db: Session,
        *,
        sender_id: int,
        recipient_id: int,
        content: str,
        subject: Optional[str] = None,
        product_ref: Optional[int] = None,
        product_kind: Optional[str] = None,
        meeting_columns: Optional[Dict[str, Any]] = None,
    ) -> Message:
        """Insert one message in a single commit. Rolls back on failure."""
        message = Message(
            sender_id=sender_id,
            recipient_id=recipient_id,
            content=content,
            subject=subject,
            product_ref=product_ref,
            product_kind=product_kind,
            is_read=False,
            **(meeting_columns or {}),
        )
        try:
            db.add(message)
            db.commit()
            db.refresh(message)
        except Exception:
            db.rollback()
            raise
        return message

    def get_for_viewer(self, db: Session, *, viewer_id: int) -> List[Message]:
        """Every message the viewer sent or received, oldest first."""
        stmt = (
            select(Message)
            .where(participation(viewer_id))
            .order_by(Message.created_at.asc(), Message.id.asc())
        )
        return list(db.scalars(stmt).all())

    def get_thread(
        self,
        db: Session,
        *,
        viewer_id: int,
        other_user_id: int,
        product_ref: Optional[int] = None,
    ) -> List[Message]:
        """Messages exchanged between two users in either direction, oldest first."""
        conditions = [participation(viewer_id, other_user_id)]
        if product_ref is not None:
            conditions.append(Message.product_ref == product_ref)

        stmt = (
            select(Message)
            .where(and_(*conditions))
            .order_by(Message.created_at.asc(), Message.id.asc())
            .execution_options(populate_existing=True)
        )
        return list(db.scalars(stmt).all())

    def mark_pair_read(
        self,
        db: Session,
        *,
        recipient_id: int,
        sender_id: int,
        read_at: datetime,
        product_ref: Optional[int] = None,
    ) -> int:
        """Mark every unread sender -> recipient message as read.

        Issued as one conditional UPDATE so a row moves to read at most once.
        Does not commit: the caller owns the transaction.

        Returns:
            Number of messages marked as read
        """
        conditions = [
            Message.recipient_id == recipient_id,
            Message.sender_id == sender_id,
            Message.is_read == False,  # noqa: E712
        ]
        if product_ref is not None:
            conditions.append(Message.product_ref == product_ref)

        stmt = (
            update(Message)
            .where(and_(*conditions))
            .values(is_read=True, read_at=read_at)
        )
        result = db.execute(stmt)
        return result.rowcount or 0

    def mark_one_read(self, db: Session, *, message: Message, read_at: datetime) -> Message:
        """Mark a single message as read. Already-read messages keep their read_at."""
        stmt = (
            update(Message)
            .where(and_(Message.id == message.id, Message.is_read == False))  # noqa: E712
            .values(is_read=True, read_at=read_at)
        )
        try:
            db.execute(stmt)
            db.commit()
            db.refresh(message)
        except Exception:
            db.rollback()
            raise
        return message

    def count_unread(self, db: Session, *, recipient_id: int) -> int:
        """Count unread messages addressed to a user, across all senders."""
        stmt = select(func.count(Message.id)).where(
            and_(
                Message.recipient_id == recipient_id,
                Message.is_read == False,  # noqa: E712
            )
        )
        return db.scalar(stmt) or 0


# Create instance
crud_message = CRUDMessage(Message)

"""Message model for direct messages between marketplace users."""

from datetime import datetime, timezone

from sqlalchemy import (
    Column, Integer, String, Text, Boolean, Date, Float, TIMESTAMP,
    ForeignKey, Index, CheckConstraint,
)
from sqlalchemy.orm import relationship
from ..database import Base


def utcnow() -> datetime:
    """Naive UTC timestamp, matching the TIMESTAMP columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Message(Base):
    """One message in the append-only message log.

    Only ``is_read`` and ``read_at`` ever change after insert.
    """

    __tablename__ = "messages"

    id = Column(Integer, primary_key=True, index=True)

    # Participants
    sender_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    recipient_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    # Optional reference into one of the two catalogs
    product_ref = Column(Integer, nullable=True)
    product_kind = Column(String(20), nullable=True)

    # Message Content
    subject = Column(String(200), nullable=True)
    content = Column(Text, nullable=False)

    # Meeting proposal; time/location are only stored with a date
    meeting_date = Column(Date, nullable=True)
    meeting_time = Column(String(5), nullable=True)
    meeting_location_name = Column(String(255), nullable=True)
    meeting_lat = Column(Float, nullable=True)
    meeting_lng = Column(Float, nullable=True)

    # Read Status
    is_read = Column(Boolean, nullable=False, default=False)
    read_at = Column(TIMESTAMP, nullable=True)

    # Timestamps
    created_at = Column(TIMESTAMP, nullable=False, default=utcnow)

    # Constraints & Indexes
    __table_args__ = (
        CheckConstraint("sender_id <> recipient_id", name="check_message_not_self"),
        CheckConstraint(
            "product_kind IS NULL OR product_kind IN ('listing', 'giveaway')",
            name="check_message_product_kind"
        ),
        # Thread lookup between two users
        Index('idx_message_pair_created', 'sender_id', 'recipient_id', 'created_at'),
        # Unread lookup per recipient
        Index('idx_message_unread', 'recipient_id', 'is_read', 'created_at'),
        Index('idx_message_product', 'product_ref'),
    )

    # Relationships
    sender = relationship("User", foreign_keys=[sender_id])
    recipient = relationship("User", foreign_keys=[recipient_id])

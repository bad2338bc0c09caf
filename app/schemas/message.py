"""Pydantic schemas for Message."""

import datetime as dt
from typing import Optional, Union

from pydantic import Field

from app.schemas.common import CamelModel
from app.schemas.meeting import MeetingLocation, MeetingProposal
from app.schemas.product import ProductSummary
from app.schemas.user import UserSummary


# Ids arrive as JSON numbers or strings; well-formedness is checked by the services
IdInput = Union[int, str]


class MessageCreate(CamelModel):
    """Schema for sending a new message."""
    recipient_id: Optional[IdInput] = Field(None, description="User receiving the message")
    content: Optional[str] = Field(None, description="Message content")
    product_ref: Optional[IdInput] = Field(None, description="Listing or giveaway the message is about")
    subject: Optional[str] = None
    meeting_date: Optional[dt.date] = None
    meeting_time: Optional[str] = Field(None, description="24h HH:MM")
    meeting_location: Optional[MeetingLocation] = None


class MessageResponse(CamelModel):
    """Schema for Message response, hydrated with participant and product summaries."""
    id: int
    sender_id: int
    recipient_id: int
    sender: Optional[UserSummary] = None
    recipient: Optional[UserSummary] = None
    product_ref: Optional[int] = None
    product: Optional[ProductSummary] = None
    subject: Optional[str] = None
    content: str
    meeting_proposal: Optional[MeetingProposal] = None
    read: bool
    read_at: Optional[dt.datetime] = None
    created_at: dt.datetime


class UnreadCountResponse(CamelModel):
    """Response for unread message count."""
    count: int

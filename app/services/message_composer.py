"""Service layer for composing and sending messages."""

import logging
from typing import Any, Dict, Optional, Union

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import settings
from app.core.exceptions import InternalException, InvalidArgumentException, NotFoundException
from app.crud import crud_message
from app.schemas.meeting import MeetingProposal
from app.schemas.message import MessageCreate, MessageResponse
from app.services import meeting_codec
from app.services.directory import catalog, user_directory
from app.services.message_hydrator import message_hydrator
from app.utils.identifiers import parse_id, parse_optional_id

logger = logging.getLogger(__name__)

MAX_SUBJECT_LENGTH = 200


class MessageComposer:
    """
    Validates and persists new messages.

    Every check runs before anything is written, and the insert is a
    single commit, so a failed send leaves the message store unchanged.
    """

    def send(
        self,
        db: Session,
        *,
        sender_id: Any,
        recipient_id: Any,
        content: Optional[str],
        product_ref: Any = None,
        subject: Optional[str] = None,
        meeting_proposal: Union[MeetingProposal, Dict[str, Any], None] = None,
    ) -> MessageResponse:
        """
        Send a message from one user to another.

        Args:
            db: Database session
            sender_id: Authenticated sender
            recipient_id: User receiving the message
            content: Message body, must be non-empty after trimming
            product_ref: Optional listing or giveaway id
            subject: Optional subject; defaults from the product title
            meeting_proposal: Optional proposal with a date and a location

        Returns:
            MessageResponse: The stored message with sender, recipient and product summaries

        Raises:
            InvalidArgumentException: Malformed ids, self-message, empty content,
                subject too long or malformed meeting proposal
            NotFoundException: Recipient or product does not resolve
            InternalException: The message could not be stored
        """
        sender = parse_id(sender_id, "sender id")
        if recipient_id is None or (isinstance(recipient_id, str) and not recipient_id.strip()):
            raise InvalidArgumentException("Recipient and message content are required")
        recipient = parse_id(recipient_id, "recipient id")

        if sender == recipient:
            raise InvalidArgumentException("You cannot send a message to yourself")

        if user_directory.lookup(db, recipient) is None:
            raise NotFoundException("Recipient not found")

        body = (content or "").strip()
        if not body:
            raise InvalidArgumentException("Recipient and message content are required")
        if len(body) > settings.MAX_CONTENT_LENGTH:
            raise InvalidArgumentException(
                f"Message content cannot exceed {settings.MAX_CONTENT_LENGTH} characters"
            )

        product = None
        ref = parse_optional_id(product_ref, "product id")
        if ref is not None:
            product = catalog.resolve(db, ref)
            if product is None:
                raise NotFoundException("Product not found")

        message_subject = (subject or "").strip()
        if not message_subject:
            message_subject = f"Inquiry about: {product.title}" if product else settings.DEFAULT_SUBJECT
        if len(message_subject) > MAX_SUBJECT_LENGTH:
            raise InvalidArgumentException(f"Subject cannot exceed {MAX_SUBJECT_LENGTH} characters")

        proposal = meeting_codec.coerce(meeting_proposal)

        try:
            message = crud_message.create_message(
                db,
                sender_id=sender,
                recipient_id=recipient,
                content=body,
                subject=message_subject,
                product_ref=product.id if product else None,
                product_kind=product.kind if product else None,
                meeting_columns=meeting_codec.encode(proposal),
            )
        except SQLAlchemyError as exc:
            logger.exception(f"Failed to store message from user {sender} to user {recipient}")
            raise InternalException("Failed to send message") from exc

        logger.info(
            f"Message {message.id} sent: sender={sender} recipient={recipient} "
            f"product={message.product_kind}:{message.product_ref} meeting={proposal is not None}"
        )
        return message_hydrator.hydrate(db, message)

    def send_request(self, db: Session, *, sender_id: Any, message_in: MessageCreate) -> MessageResponse:
        """Send a message from the POST /messages payload."""
        proposal = meeting_codec.from_wire(
            message_in.meeting_date,
            message_in.meeting_time,
            message_in.meeting_location,
        )
        return self.send(
            db,
            sender_id=sender_id,
            recipient_id=message_in.recipient_id,
            content=message_in.content,
            product_ref=message_in.product_ref,
            subject=message_in.subject,
            meeting_proposal=proposal,
        )


message_composer = MessageComposer()

"""Service layer for opening message threads and marking them read."""

import logging
from typing import Any, List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import settings
from app.core.exceptions import InternalException, NotFoundException, UnauthorizedException
from app.crud import crud_message
from app.models.message import utcnow
from app.schemas.message import MessageResponse
from app.services.message_hydrator import message_hydrator
from app.utils.identifiers import parse_id, parse_optional_id

logger = logging.getLogger(__name__)


class ThreadFetcher:
    """
    Loads the exchange between two users and promotes unread messages to read.

    Read-marking and the thread query share one transaction: the UPDATE runs
    first, the SELECT sees its result, and a failure rolls both back.
    """

    def get_thread(
        self,
        db: Session,
        *,
        viewer_id: Any,
        other_user_id: Any,
        product_ref: Any = None,
    ) -> List[MessageResponse]:
        """
        Get the ordered thread between the viewer and another user.

        Every unread message from the other user to the viewer is marked as
        read. With READ_MARK_SCOPE="counterpart" that covers the whole pair
        even when ``product_ref`` narrows the returned thread; with
        READ_MARK_SCOPE="product" only the filtered messages are marked.

        Returns:
            Messages in both directions, oldest first

        Raises:
            InvalidArgumentException: Malformed user or product id
            InternalException: Read state could not be updated
        """
        viewer = parse_id(viewer_id, "user id")
        other = parse_id(other_user_id, "user id")
        ref = parse_optional_id(product_ref, "product id")

        mark_ref = ref if settings.READ_MARK_SCOPE == "product" else None

        try:
            marked = crud_message.mark_pair_read(
                db,
                recipient_id=viewer,
                sender_id=other,
                read_at=utcnow(),
                product_ref=mark_ref,
            )
            messages = crud_message.get_thread(
                db,
                viewer_id=viewer,
                other_user_id=other,
                product_ref=ref,
            )
            thread = message_hydrator.hydrate_many(db, messages)
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            logger.exception(f"Failed to open thread between user {viewer} and user {other}")
            raise InternalException("Failed to load conversation") from exc

        if marked:
            logger.info(f"Marked {marked} message(s) from user {other} to user {viewer} as read")
        return thread

    def mark_read(self, db: Session, *, viewer_id: Any, message_id: Any) -> MessageResponse:
        """
        Mark one message as read on behalf of its recipient.

        Raises:
            InvalidArgumentException: Malformed message id
            NotFoundException: Message does not exist
            UnauthorizedException: Viewer is not the recipient
            InternalException: Read state could not be updated
        """
        viewer = parse_id(viewer_id, "user id")
        message_pk = parse_id(message_id, "message id")
        message = crud_message.get(db, message_pk)
        if message is None:
            raise NotFoundException("Message not found")

        if message.recipient_id != viewer:
            logger.warning(f"User {viewer} tried to mark message {message.id} they did not receive")
            raise UnauthorizedException()

        if not message.is_read:
            try:
                message = crud_message.mark_one_read(db, message=message, read_at=utcnow())
            except SQLAlchemyError as exc:
                logger.exception(f"Failed to mark message {message_pk} as read")
                raise InternalException("Failed to mark message as read") from exc
            logger.info(f"Message {message.id} marked as read by user {viewer}")

        return message_hydrator.hydrate(db, message)


thread_fetcher = ThreadFetcher()

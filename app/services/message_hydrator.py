"""Builds MessageResponse objects with denormalized sender, recipient and product."""

from typing import Dict, List, Optional, Sequence, Tuple

from sqlalchemy.orm import Session

from app.models.message import Message
from app.models.user import User
from app.schemas.message import MessageResponse
from app.schemas.product import ProductSummary
from app.services import meeting_codec
from app.services.directory import catalog, user_directory


class MessageHydrator:
    """Denormalizes collaborator data into message responses.

    Users and products are fetched once per call, however many messages
    reference them.
    """

    def hydrate(self, db: Session, message: Message) -> MessageResponse:
        return self.hydrate_many(db, [message])[0]

    def hydrate_many(self, db: Session, messages: Sequence[Message]) -> List[MessageResponse]:
        user_ids = set()
        for message in messages:
            user_ids.add(message.sender_id)
            user_ids.add(message.recipient_id)
        users = user_directory.lookup_many(db, user_ids)

        products: Dict[Tuple[Optional[str], int], Optional[ProductSummary]] = {}
        responses = []
        for message in messages:
            product = None
            if message.product_ref is not None:
                key = (message.product_kind, message.product_ref)
                if key not in products:
                    products[key] = catalog.lookup(db, message.product_kind, message.product_ref)
                product = products[key]
            responses.append(self._build(message, users, product))
        return responses

    @staticmethod
    def _build(
        message: Message,
        users: Dict[int, User],
        product: Optional[ProductSummary],
    ) -> MessageResponse:
        return MessageResponse(
            id=message.id,
            sender_id=message.sender_id,
            recipient_id=message.recipient_id,
            sender=user_directory.summarize(users.get(message.sender_id)),
            recipient=user_directory.summarize(users.get(message.recipient_id)),
            product_ref=message.product_ref,
            product=product,
            subject=message.subject,
            content=message.content,
            meeting_proposal=meeting_codec.decode(message),
            read=bool(message.is_read),
            read_at=message.read_at,
            created_at=message.created_at,
        )


message_hydrator = MessageHydrator()

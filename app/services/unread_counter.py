"""Total unread message count for a user."""

from typing import Any

from sqlalchemy.orm import Session

from app.crud import crud_message
from app.utils.identifiers import parse_id


class UnreadCounter:
    def count(self, db: Session, *, viewer_id: Any) -> int:
        """Unread messages addressed to the viewer, across all counterparties."""
        return crud_message.count_unread(db, recipient_id=parse_id(viewer_id, "user id"))


unread_counter = UnreadCounter()

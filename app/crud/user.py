"""CRUD operations for `User` model."""

from __future__ import annotations

from typing import Dict, Iterable, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.crud.base import CRUDBase
from app.models.user import User


class CRUDUser(CRUDBase[User, dict]):
    def get_active(self, db: Session, id: int) -> Optional[User]:
        user = self.get(db, id)
        if user is None or not user.is_active:
            return None
        return user

    def get_many(self, db: Session, ids: Iterable[int]) -> Dict[int, User]:
        """Fetch several users in one query, keyed by id."""
        ids = set(ids)
        if not ids:
            return {}
        stmt = select(User).where(User.id.in_(ids))
        return {user.id: user for user in db.scalars(stmt).all()}


crud_user = CRUDUser(User)

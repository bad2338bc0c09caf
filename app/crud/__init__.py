"""CRUD operations package - exports singleton instances for all models."""

from .base import CRUDBase
from .user import crud_user
from .product import crud_product, crud_giveaway
from .message import crud_message, participation, ViewerRole


__all__ = [
    # Base
    "CRUDBase",
    # CRUD instances
    "crud_user",
    "crud_product",
    "crud_giveaway",
    "crud_message",
    # Message helpers
    "participation",
    "ViewerRole",
]

"""
SQLAlchemy Models for Marketplace Messaging
"""

from ..database import Base
from .user import User
from .product import Product
from .giveaway import Giveaway
from .message import Message

# Export all models
__all__ = [
    "Base",
    "User",
    "Product",
    "Giveaway",
    "Message",
]

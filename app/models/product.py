"""Sellable listing model (owned by the catalog service)."""

from sqlalchemy import Column, Integer, String, Numeric, JSON, TIMESTAMP, ForeignKey, CheckConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from ..database import Base


class Product(Base):
    """Listing that a seller offers for a price."""

    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)

    # Foreign Keys
    seller_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    # Listing
    title = Column(String(200), nullable=False)
    price = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    images = Column(JSON, default=list)
    status = Column(String(20), nullable=False, default="available", index=True)

    # Timestamps
    created_at = Column(TIMESTAMP, server_default=func.now())

    __table_args__ = (
        CheckConstraint(
            "status IN ('available', 'sold', 'inactive')",
            name="check_product_status"
        ),
    )

    # Relationships
    seller = relationship("User", foreign_keys=[seller_id])

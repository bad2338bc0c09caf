"""Free giveaway listing model (owned by the catalog service)."""

from sqlalchemy import Column, Integer, String, JSON, TIMESTAMP, ForeignKey, CheckConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from ..database import Base


class Giveaway(Base):
    """Item offered for free. Has no price."""

    __tablename__ = "giveaways"

    id = Column(Integer, primary_key=True, index=True)

    owner_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    title = Column(String(200), nullable=False)
    images = Column(JSON, default=list)
    status = Column(String(20), nullable=False, default="active", index=True)

    created_at = Column(TIMESTAMP, server_default=func.now())

    __table_args__ = (
        CheckConstraint(
            "status IN ('active', 'claimed', 'inactive')",
            name="check_giveaway_status"
        ),
    )

    owner = relationship("User", foreign_keys=[owner_id])

"""Pydantic schemas for catalog items referenced by messages."""

from typing import List, Literal, Optional

from pydantic import Field

from app.schemas.common import CamelModel


ProductKind = Literal["listing", "giveaway"]


class ProductSummary(CamelModel):
    """Denormalized view of a listing or giveaway item."""
    id: int
    kind: ProductKind
    title: str
    price: Optional[float] = Field(None, description="Always null for giveaway items")
    images: List[str] = Field(default_factory=list)

"""Lookups against the user directory and the two catalog variants."""

import logging
from typing import Dict, Iterable, Optional

from sqlalchemy.orm import Session

from app.crud import crud_giveaway, crud_product, crud_user
from app.models.giveaway import Giveaway
from app.models.product import Product
from app.models.user import User
from app.schemas.product import ProductKind, ProductSummary
from app.schemas.user import UserSummary

logger = logging.getLogger(__name__)


def _image_urls(images) -> list:
    """Catalog images are stored either as URLs or as {"image_url": ...} objects."""
    urls = []
    for image in images or []:
        if isinstance(image, str):
            urls.append(image)
        elif isinstance(image, dict) and image.get("image_url"):
            urls.append(image["image_url"])
    return urls


class UserDirectory:
    """Read-only access to marketplace user accounts."""

    def lookup(self, db: Session, user_id: int) -> Optional[User]:
        """Active user with this id, or None."""
        return crud_user.get_active(db, user_id)

    def lookup_many(self, db: Session, user_ids: Iterable[int]) -> Dict[int, User]:
        return crud_user.get_many(db, user_ids)

    @staticmethod
    def summarize(user: Optional[User]) -> Optional[UserSummary]:
        if user is None:
            return None
        return UserSummary.model_validate(user)


class Catalog:
    """Resolves product references against listings first, then giveaways."""

    def resolve(self, db: Session, product_ref: int) -> Optional[ProductSummary]:
        product = crud_product.get(db, product_ref)
        if product is not None:
            return self._summarize_listing(product)

        giveaway = crud_giveaway.get(db, product_ref)
        if giveaway is not None:
            logger.debug(f"Product ref {product_ref} resolved in giveaway catalog")
            return self._summarize_giveaway(giveaway)

        return None

    def lookup(self, db: Session, kind: Optional[ProductKind], product_ref: int) -> Optional[ProductSummary]:
        """Summary of an item whose catalog is already known."""
        if kind == "listing":
            product = crud_product.get(db, product_ref)
            return self._summarize_listing(product) if product else None
        if kind == "giveaway":
            giveaway = crud_giveaway.get(db, product_ref)
            return self._summarize_giveaway(giveaway) if giveaway else None
        return self.resolve(db, product_ref)

    @staticmethod
    def _summarize_listing(product: Product) -> ProductSummary:
        return ProductSummary(
            id=product.id,
            kind="listing",
            title=product.title,
            price=product.price,
            images=_image_urls(product.images),
        )

    @staticmethod
    def _summarize_giveaway(giveaway: Giveaway) -> ProductSummary:
        return ProductSummary(
            id=giveaway.id,
            kind="giveaway",
            title=giveaway.title,
            price=None,
            images=_image_urls(giveaway.images),
        )


# Global instances
user_directory = UserDirectory()
catalog = Catalog()

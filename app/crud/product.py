"""CRUD operations for the two catalog variants (listings and giveaways)."""

from app.crud.base import CRUDBase
from app.models.giveaway import Giveaway
from app.models.product import Product


# Catalog rows are written by the catalog service; only reads happen here
crud_product = CRUDBase[Product, dict](Product)
crud_giveaway = CRUDBase[Giveaway, dict](Giveaway)

# product_ranker/domain/repositories/product_repo.py

from __future__ import annotations
import logging
from typing import Optional, List
from motor.motor_asyncio import AsyncIOMotorDatabase
from pydantic import ValidationError
from product_ranker.domain.models.product import Product

logger = logging.getLogger(__name__)

# Fields the engine reads; everything else stays in Mongo
SCORING_PROJECTION = {
    "_id": 0,
    "product_id": 1,
    "name": 1,
    "price": 1,
    "stock_quantity": 1,
    "category_slug": 1,
    "subcategory_slug": 1,
    "brand": 1,
    "created_at": 1,
    "description": 1,
    "images": 1,
    "avg_rating": 1,
    "avg_shipping_days": 1,
    "return_rate": 1,
    "inventory_turnover": 1,
    "admin_boost": 1,
    "campaigns": 1,
    "analytics": 1,
    "seller": 1,
}

# Newest first, so a capped candidate list is the freshest slice of the catalog
CANDIDATE_SORT = [("created_at", -1), ("product_id", 1)]


class ProductRepo:
    """
    Read-only product catalog backed by the 'products' collection.
    Documents carry their analytics and seller snapshots embedded.
    """

    def __init__(self, db: AsyncIOMotorDatabase, collection_name: str = "products"):
        self.col = db[collection_name]

    @staticmethod
    def _to_products(docs: List[dict]) -> List[Product]:
        products = []
        for doc in docs:
            try:
                products.append(Product.model_validate(doc))
            except ValidationError as e:
                logger.warning("skipping malformed product product_id=%s err=%s", doc.get("product_id"), e)
        return products

    async def list_candidates(self, category_slug: Optional[str] = None, limit: int = 500) -> List[Product]:
        query: dict = {}
        if category_slug:
            query = {"$or": [{"category_slug": category_slug}, {"subcategory_slug": category_slug}]}
        cursor = self.col.find(query, SCORING_PROJECTION).sort(CANDIDATE_SORT).limit(limit)
        return self._to_products([doc async for doc in cursor])


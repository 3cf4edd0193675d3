# product_ranker/api/v1/schemas/ranking.py
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional

from product_ranker.domain.models.product import Product
from product_ranker.domain.models.ranking_config import MarketContext
from product_ranker.domain.models.score import ScoreResult
from product_ranker.domain.services.constants import CONTEXT_GENERAL


class ScoreIn(BaseModel):
    product: Product
    context_type: str = CONTEXT_GENERAL
    market: Optional[MarketContext] = None
    user_id: Optional[str] = None


class RankIn(BaseModel):
    products: List[Product]
    user_id: Optional[str] = None
    category_slug: Optional[str] = None
    limit: int = Field(20, ge=1, le=200)
    include_breakdown: bool = False


class TrendingIn(BaseModel):
    products: List[Product]
    limit: int = Field(20, ge=1, le=200)


class RecoItemOut(BaseModel):
    product_id: str
    score: float
    recommendation: Optional[ScoreResult] = None


class RecoListOut(BaseModel):
    items: List[RecoItemOut]
    count: int


class TrendingItemOut(BaseModel):
    product_id: str
    trending_score: float


class TrendingListOut(BaseModel):
    items: List[TrendingItemOut]
    count: int


class VariantOut(BaseModel):
    user_id: str
    test_name: str
    variant: str


class AnalyticsOut(BaseModel):
    weights: Dict[str, float]
    category_weights: Dict[str, float]
    active_users: int
    seasonal_factors: Dict[str, Any]
    version: str
    last_updated: str

from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime

from product_ranker.domain.models.product import Product
from product_ranker.domain.services.constants import ALGORITHM_VERSION, CONTEXT_GENERAL


# Each breakdown holds the scaled components exactly as they enter `combined`

class SalesScore(BaseModel):
    velocity: float
    conversion: float
    revenue: float
    aov: float
    combined: float


class EngagementScore(BaseModel):
    views: float
    wishlist: float
    cart: float
    social: float
    ctr: float
    combined: float


class InventoryScore(BaseModel):
    stock: float
    speed: float
    returns: float
    turnover: float
    combined: float


class SellerScore(BaseModel):
    rating: float
    response: float
    fulfillment: float
    combined: float


class ContentScore(BaseModel):
    images: float
    description: float
    reviews: float
    combined: float


class AdminScore(BaseModel):
    boost: float
    campaign: float
    combined: float


class ScoreBreakdown(BaseModel):
    sales: SalesScore
    engagement: EngagementScore
    inventory: InventoryScore
    seller: SellerScore
    content: ContentScore
    admin: AdminScore


class Multipliers(BaseModel):
    time_decay: float
    seasonal_boost: float
    personalization_boost: float


class ScoreMetadata(BaseModel):
    calculated_at: datetime
    version: str = ALGORITHM_VERSION
    context: str = CONTEXT_GENERAL


class ScoreResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    score: float = Field(ge=0, le=100)
    breakdown: ScoreBreakdown
    multipliers: Multipliers
    metadata: ScoreMetadata


class ScoredProduct(BaseModel):
    product: Product
    recommendation: ScoreResult


class TrendingProduct(BaseModel):
    product: Product
    trending_score: float

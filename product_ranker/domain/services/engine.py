import logging
import time
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from pydantic import BaseModel

from product_ranker.domain.models.product import Product
from product_ranker.domain.models.profile import UserProfile
from product_ranker.domain.models.ranking_config import MarketContext, RankingConfig
from product_ranker.domain.models.score import (
    Multipliers,
    ScoreBreakdown,
    ScoredProduct,
    ScoreMetadata,
    ScoreResult,
    TrendingProduct,
)
from product_ranker.domain.services import constants as C
from product_ranker.domain.services import multipliers, scoring

logger = logging.getLogger(__name__)


class ScoringContext(BaseModel):
    """
    Per-call inputs besides the product itself.
    `market` defaults to the preset registered for `type`.
    """
    type: str = C.CONTEXT_GENERAL
    market: Optional[MarketContext] = None
    user: Optional[UserProfile] = None
    category: Optional[str] = None
    now: Optional[datetime] = None


def _utf16_units(s: str) -> Iterable[int]:
    raw = s.encode("utf-16-le")
    for i in range(0, len(raw), 2):
        yield raw[i] | (raw[i + 1] << 8)


def simple_hash(s: str) -> int:
    """
    31-multiplier string hash over UTF-16 code units, wrapped to a signed
    32-bit integer, returned as its absolute value.
    Weak on purpose: not cryptographic, not guaranteed uniform.
    """
    h = 0
    for unit in _utf16_units(s):
        h = (h * 31 + unit) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return abs(h)


def _velocity(recent, previous) -> float:
    return (recent or 0) / (previous or 1)


class RecommendationEngine:
    """
    Multi-factor product ranking.

    Stateless per call: every input comes from the product, the context and
    the RankingConfig given at construction. User profiles are loaded by the
    caller (see recommendation_svc) and passed in through the context.
    """

    def __init__(self, config: Optional[RankingConfig] = None):
        self.config = config or RankingConfig()

    # ----- Single product ---------------------------------------------------

    def calculate_product_score(self, product: Product, context: Optional[ScoringContext] = None) -> ScoreResult:
        context = context or ScoringContext()
        cfg = self.config
        market = context.market or cfg.market(context.type)
        now = context.now or datetime.now(timezone.utc)

        breakdown = ScoreBreakdown(
            sales=scoring.sales_score(product, market, cfg.sales_blend),
            engagement=scoring.engagement_score(product, market, cfg.engagement_blend),
            inventory=scoring.inventory_score(product, market, cfg.inventory_blend),
            seller=scoring.seller_score(product, cfg.seller_blend),
            content=scoring.content_score(product, cfg.content_blend),
            admin=scoring.admin_score(product, cfg.admin_blend),
        )

        applied = Multipliers(
            time_decay=multipliers.time_decay(product.created_at, now, cfg.time_decay),
            seasonal_boost=multipliers.seasonal_boost(product.category_slug, now.month, cfg.seasonal),
            personalization_boost=multipliers.personalization_boost(product, context.user, cfg.personalization),
        )

        weighted = sum(
            getattr(breakdown, name).combined * weight
            for name, weight in cfg.category_weights.items()
        )
        raw = weighted * applied.time_decay * applied.seasonal_boost * applied.personalization_boost
        score = min(100.0, max(0.0, raw * 100))

        return ScoreResult(
            score=score,
            breakdown=breakdown,
            multipliers=applied,
            metadata=ScoreMetadata(calculated_at=now, version=C.ALGORITHM_VERSION, context=context.type),
        )

    def calculate_trending_score(self, product: Product) -> float:
        stats = product.analytics
        w = self.config.trending_weights
        return scoring.saturate(
            _velocity(stats.views_last_7_days, stats.views_previous_7_days) * w["views"]
            + _velocity(stats.sales_last_7_days, stats.sales_previous_7_days) * w["sales"]
            + _velocity(stats.wishlist_additions_last_7_days, stats.wishlist_additions_previous_7_days) * w["wishlist"]
        )

    # ----- Lists -------------------------------------------------------------

    def rank_products(self, products: List[Product], context: ScoringContext, limit: Optional[int] = None) -> List[ScoredProduct]:
        """Score every product, sort by score desc (ties keep input order), truncate."""
        t0 = time.perf_counter()
        scored = [
            ScoredProduct(product=p, recommendation=self.calculate_product_score(p, context))
            for p in products
        ]
        scored.sort(key=lambda s: s.recommendation.score, reverse=True)
        if limit is not None:
            scored = scored[:limit]
        logger.debug(
            "rank_products context=%s candidates=%s returned=%s time=%.4fs",
            context.type, len(products), len(scored), time.perf_counter() - t0,
        )
        return scored

    def get_trending_products(self, products: List[Product], limit: int = C.DEFAULT_LIMIT) -> List[TrendingProduct]:
        trending = [TrendingProduct(product=p, trending_score=self.calculate_trending_score(p)) for p in products]
        trending.sort(key=lambda t: t.trending_score, reverse=True)
        return trending[:limit]

    def get_personalized_recommendations(
        self,
        products: List[Product],
        user: Optional[UserProfile] = None,
        limit: int = C.DEFAULT_LIMIT,
        now: Optional[datetime] = None,
    ) -> List[ScoredProduct]:
        context = ScoringContext(type=C.CONTEXT_PERSONALIZED, user=user, now=now)
        return self.rank_products(products, context, limit)

    def get_category_recommendations(
        self,
        products: List[Product],
        category_slug: str,
        limit: int = C.DEFAULT_LIMIT,
        now: Optional[datetime] = None,
    ) -> List[ScoredProduct]:
        in_category = [
            p for p in products
            if p.category_slug == category_slug or p.subcategory_slug == category_slug
        ]
        context = ScoringContext(type=C.CONTEXT_CATEGORY, category=category_slug, now=now)
        return self.rank_products(in_category, context, limit)

    # ----- Experiments & reporting -------------------------------------------

    def get_ab_test_variant(self, user_id: str, test_name: str) -> str:
        return C.AB_VARIANTS[simple_hash(f"{user_id}{test_name}") % 2]

    def algorithm_analytics(self, active_users: int) -> Dict[str, Any]:
        cfg = self.config
        return {
            "weights": dict(C.ALGORITHM_WEIGHTS),
            "category_weights": dict(cfg.category_weights),
            "active_users": active_users,
            "seasonal_factors": {slug: rule.model_dump() for slug, rule in cfg.seasonal.items()},
            "version": C.ALGORITHM_VERSION,
            "last_updated": datetime.now(timezone.utc).isoformat(),
        }

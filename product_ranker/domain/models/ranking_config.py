from __future__ import annotations

import math
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from product_ranker.core.config import get_settings
from product_ranker.domain.services import constants as C


class SeasonalRule(BaseModel):
    months: List[int]
    in_season: float
    off_season: float = 1.0

    @field_validator("months")
    @classmethod
    def _valid_months(cls, v: List[int]) -> List[int]:
        bad = [m for m in v if not 1 <= m <= 12]
        if bad:
            raise ValueError(f"months out of range 1-12: {bad}")
        return v

    def factor(self, month: int) -> float:
        return self.in_season if month in self.months else self.off_season


class MarketContext(BaseModel):
    """Market-average references a product is normalized against."""
    avg_market_views: float = 100
    avg_market_revenue: float = 1000
    market_avg_order_value: float = 500
    optimal_stock: float = 50


class TimeDecayConfig(BaseModel):
    buckets: List[Tuple[float, float]] = Field(default_factory=lambda: list(C.TIME_DECAY_BUCKETS))
    older: float = C.TIME_DECAY_OLDER
    missing: float = C.TIME_DECAY_MISSING

    @field_validator("buckets")
    @classmethod
    def _sorted_buckets(cls, v):
        return sorted(v, key=lambda b: b[0])


class PersonalizationConfig(BaseModel):
    category_weight: float = C.CATEGORY_PREFERENCE_WEIGHT
    min_price_preference: float = C.MIN_PRICE_PREFERENCE
    brand_boost: float = C.BRAND_PREFERENCE_BOOST
    default_avg_price: float = Field(default=C.DEFAULT_AVG_PRICE, gt=0)


class RankingConfig(BaseModel):
    """
    All tunables of the ranking engine, passed at construction.

    Defaults reproduce the production weights; override any subset from a
    JSON file (see load_ranking_config).
    """
    model_config = ConfigDict(frozen=True)

    category_weights: Dict[str, float] = Field(default_factory=lambda: dict(C.CATEGORY_WEIGHTS))
    sales_blend: Dict[str, float] = Field(default_factory=lambda: dict(C.SALES_BLEND))
    engagement_blend: Dict[str, float] = Field(default_factory=lambda: dict(C.ENGAGEMENT_BLEND))
    inventory_blend: Dict[str, float] = Field(default_factory=lambda: dict(C.INVENTORY_BLEND))
    seller_blend: Dict[str, float] = Field(default_factory=lambda: dict(C.SELLER_BLEND))
    content_blend: Dict[str, float] = Field(default_factory=lambda: dict(C.CONTENT_BLEND))
    admin_blend: Dict[str, float] = Field(default_factory=lambda: dict(C.ADMIN_BLEND))

    time_decay: TimeDecayConfig = Field(default_factory=TimeDecayConfig)
    seasonal: Dict[str, SeasonalRule] = Field(
        default_factory=lambda: {slug: SeasonalRule(**rule) for slug, rule in C.SEASONAL_RULES.items()}
    )
    personalization: PersonalizationConfig = Field(default_factory=PersonalizationConfig)
    trending_weights: Dict[str, float] = Field(default_factory=lambda: dict(C.TRENDING_WEIGHTS))
    market_presets: Dict[str, MarketContext] = Field(
        default_factory=lambda: {k: MarketContext(**v) for k, v in C.MARKET_PRESETS.items()}
    )

    @model_validator(mode="after")
    def _check_weights(self) -> "RankingConfig":
        expected = set(C.CATEGORY_WEIGHTS)
        if set(self.category_weights) != expected:
            raise ValueError(f"category_weights must define exactly {sorted(expected)}")
        total = sum(self.category_weights.values())
        if not math.isclose(total, 1.0, abs_tol=1e-6):
            raise ValueError(f"category_weights must sum to 1.0, got {total:.4f}")
        for name, blend, keys in (
            ("sales_blend", self.sales_blend, C.SALES_BLEND),
            ("engagement_blend", self.engagement_blend, C.ENGAGEMENT_BLEND),
            ("inventory_blend", self.inventory_blend, C.INVENTORY_BLEND),
            ("seller_blend", self.seller_blend, C.SELLER_BLEND),
            ("content_blend", self.content_blend, C.CONTENT_BLEND),
            ("admin_blend", self.admin_blend, C.ADMIN_BLEND),
            ("trending_weights", self.trending_weights, C.TRENDING_WEIGHTS),
        ):
            if set(blend) != set(keys):
                raise ValueError(f"{name} must define exactly {sorted(keys)}")
        return self

    def market(self, context_type: str) -> MarketContext:
        return self.market_presets.get(context_type) or self.market_presets.get(C.CONTEXT_GENERAL) or MarketContext()


def load_ranking_config(path: Optional[str] = None) -> RankingConfig:
    if not path:
        return RankingConfig()
    return RankingConfig.model_validate_json(Path(path).read_text(encoding="utf-8"))


@lru_cache
def get_ranking_config() -> RankingConfig:
    return load_ranking_config(get_settings().RANKING_CONFIG_PATH)

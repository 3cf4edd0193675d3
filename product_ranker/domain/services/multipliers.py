from datetime import datetime, timezone
from typing import Dict, Optional

from product_ranker.domain.models.product import Product
from product_ranker.domain.models.profile import UserProfile
from product_ranker.domain.models.ranking_config import (
    PersonalizationConfig,
    SeasonalRule,
    TimeDecayConfig,
)

SECONDS_PER_DAY = 24 * 60 * 60


def _as_utc(dt: datetime) -> datetime:
    # naive timestamps are stored as UTC
    return dt.replace(tzinfo=timezone.utc) if dt.tzinfo is None else dt


def time_decay(created_at: Optional[datetime], now: datetime, cfg: TimeDecayConfig) -> float:
    """Step multiplier by product age; fresher products keep more of their score."""
    if created_at is None:
        return cfg.missing

    age_days = (_as_utc(now) - _as_utc(created_at)).total_seconds() / SECONDS_PER_DAY
    for max_age, factor in cfg.buckets:
        if age_days <= max_age:
            return factor
    return cfg.older


def seasonal_boost(category_slug: Optional[str], month: int, rules: Dict[str, SeasonalRule]) -> float:
    rule = rules.get(category_slug or "")
    return rule.factor(month) if rule else 1.0


def personalization_boost(product: Product, profile: Optional[UserProfile], cfg: PersonalizationConfig) -> float:
    """
    Multiplier from a user's past behavior:
      - share of their category views going to this product's category
      - closeness of the price to their average purchase price
      - flat boost when they already viewed the brand
    """
    if profile is None:
        return 1.0

    category_views = profile.viewed_categories.get(product.category_slug or "", 0)
    total_views = sum(profile.viewed_categories.values()) + 1
    category_preference = category_views / total_views

    avg_price = profile.avg_price_range or cfg.default_avg_price
    price_distance = abs((product.price or 0) - avg_price) / avg_price
    price_preference = max(cfg.min_price_preference, 1 - price_distance)

    brand_views = profile.viewed_brands.get(product.brand, 0) if product.brand else 0
    brand_preference = cfg.brand_boost if brand_views > 0 else 1.0

    return (1 + category_preference * cfg.category_weight) * price_preference * brand_preference

import math
import sys
from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from product_ranker.domain.models.product import Campaign, ProductAnalytics, SellerSnapshot
from product_ranker.domain.models.ranking_config import MarketContext
from product_ranker.domain.services.engine import ScoringContext


def _ctx(now, **kw):
    return ScoringContext(now=now, **kw)


def test_all_zero_product_scores_golden_baseline(engine, make_product, now):
    result = engine.calculate_product_score(make_product(), _ctx(now))

    # inventory 0.2 (returns), seller 0.25 (default rating 3), content 0.1 (default review 3)
    assert result.breakdown.sales.combined == 0
    assert result.breakdown.engagement.combined == 0
    assert result.breakdown.inventory.combined == pytest.approx(0.2)
    assert result.breakdown.seller.combined == pytest.approx(0.25)
    assert result.breakdown.content.combined == pytest.approx(0.1)
    assert result.breakdown.admin.combined == 0
    assert result.multipliers.time_decay == 0.7
    assert result.multipliers.seasonal_boost == 1.0
    assert result.multipliers.personalization_boost == 1.0
    assert result.score == pytest.approx(4.2)


def test_metadata_records_context_and_version(engine, make_product, now):
    result = engine.calculate_product_score(make_product(), _ctx(now, type="category"))
    assert result.metadata.context == "category"
    assert result.metadata.version == "2.0"
    assert result.metadata.calculated_at == now


def test_score_is_clamped_to_100(engine, make_product, now):
    hot = make_product(
        analytics=ProductAnalytics(sales_last_7_days=1000, sales_last_30_days=1, views_last_30_days=1,
                                   purchases_last_30_days=50, listing_clicks=500),
        created_at=now - timedelta(hours=1),
        admin_boost=1,
    )
    assert engine.calculate_product_score(hot, _ctx(now)).score == 100.0


@pytest.mark.parametrize("fields", [
    {},
    {"price": 10_000, "stock_quantity": 10_000},
    {"return_rate": 5, "avg_shipping_days": 30},
    {"analytics": {"views_last_30_days": 3, "wishlist_additions_last_30_days": 900}},
    {"seller": {"rating": 5, "avg_response_time_hours": 0.5, "avg_fulfillment_hours": 1}},
])
def test_score_within_bounds(engine, make_product, now, fields):
    score = engine.calculate_product_score(make_product(**fields), _ctx(now)).score
    assert 0 <= score <= 100


def test_sales_velocity_is_linear_in_recent_sales(engine, make_product, now):
    base = make_product(analytics=ProductAnalytics(sales_last_7_days=10, sales_last_30_days=100))
    doubled = make_product(analytics=ProductAnalytics(sales_last_7_days=20, sales_last_30_days=100))

    v1 = engine.calculate_product_score(base, _ctx(now)).breakdown.sales.velocity
    v2 = engine.calculate_product_score(doubled, _ctx(now)).breakdown.sales.velocity

    assert v1 == pytest.approx(0.43)
    assert v2 == pytest.approx(2 * v1)


def test_new_product_velocity_capped(engine, make_product, now):
    p = make_product(analytics=ProductAnalytics(sales_last_7_days=25))
    assert engine.calculate_product_score(p, _ctx(now)).breakdown.sales.velocity == 1


def test_market_context_normalizes_revenue_and_aov(engine, make_product, now):
    p = make_product(price=200, analytics=ProductAnalytics(total_revenue=400))
    general = engine.calculate_product_score(p, _ctx(now)).breakdown.sales
    custom = engine.calculate_product_score(
        p, _ctx(now, market=MarketContext(avg_market_revenue=400, market_avg_order_value=100))
    ).breakdown.sales

    assert general.revenue == pytest.approx(0.4)
    assert general.aov == pytest.approx(0.4)
    assert custom.revenue == 1
    assert custom.aov == 1


def test_engagement_rates_per_view(engine, make_product, now):
    p = make_product(analytics=ProductAnalytics(
        views_last_30_days=50,
        wishlist_additions_last_30_days=5,
        cart_additions_last_30_days=10,
        social_shares=25,
        listing_impressions=100,
        listing_clicks=5,
    ))
    e = engine.calculate_product_score(p, _ctx(now)).breakdown.engagement
    assert e.views == pytest.approx(0.5)
    assert e.wishlist == pytest.approx(1.0)   # 0.1 * 10
    assert e.cart == pytest.approx(1.0)       # 0.2 * 5
    assert e.social == 1
    assert e.ctr == pytest.approx(1.0)        # 0.05 * 20


def test_seller_and_content_scores(engine, make_product, now):
    p = make_product(
        seller=SellerSnapshot(rating=5, avg_response_time_hours=12, avg_fulfillment_hours=24),
        images=["a.jpg"] * 7,
        description="x" * 250,
        avg_rating=1,
    )
    result = engine.calculate_product_score(p, _ctx(now)).breakdown
    assert result.seller.rating == 1
    assert result.seller.response == pytest.approx(0.5)
    assert result.seller.fulfillment == pytest.approx(0.5)
    assert result.content.images == 1
    assert result.content.description == pytest.approx(0.5)
    assert result.content.reviews == 0


def test_admin_score_uses_highest_campaign_priority(engine, make_product, now):
    p = make_product(admin_boost=0.5, campaigns=[Campaign(priority=3), Campaign(priority=8), Campaign()])
    admin = engine.calculate_product_score(p, _ctx(now)).breakdown.admin
    assert admin.campaign == pytest.approx(0.8)
    assert admin.combined == pytest.approx(0.5 * 0.6 + 0.8 * 0.4)


def test_winter_category_scores_higher_in_january(engine, make_product):
    coat = make_product(category_slug="giyim-mont-kaban")
    january = datetime(2026, 1, 10, tzinfo=timezone.utc)
    july = datetime(2026, 7, 10, tzinfo=timezone.utc)

    jan = engine.calculate_product_score(coat, _ctx(january))
    jul = engine.calculate_product_score(coat, _ctx(july))

    assert jan.multipliers.seasonal_boost == 1.3
    assert jul.multipliers.seasonal_boost == 0.8
    assert jan.score > jul.score


def test_newer_product_scores_higher(engine, make_product, now):
    fresh = make_product(created_at=now - timedelta(hours=12))
    stale = make_product(created_at=now - timedelta(days=100))

    a = engine.calculate_product_score(fresh, _ctx(now))
    b = engine.calculate_product_score(stale, _ctx(now))

    assert a.multipliers.time_decay == 1.0
    assert b.multipliers.time_decay == 0.2
    assert a.score > b.score


def test_catalog_document_with_nulls_scores(engine, now):
    from product_ranker.domain.models.product import Product

    doc = {"product_id": "p9", "analytics": None, "seller": None, "images": None, "campaigns": None, "extra": 1}
    result = engine.calculate_product_score(Product.model_validate(doc), _ctx(now))
    assert result.score == pytest.approx(4.2)


def test_overflowing_sales_ratio_saturates_instead_of_inf(engine, make_product, now):
    p = make_product(analytics=ProductAnalytics(sales_last_7_days=1e308, sales_last_30_days=1))
    result = engine.calculate_product_score(p, _ctx(now))

    sales = result.breakdown.sales
    assert sales.velocity == sys.float_info.max
    assert math.isfinite(sales.combined)
    assert result.score == 100.0


@pytest.mark.parametrize("counters", [
    {"sales_last_7_days": float("inf")},
    {"views_last_30_days": float("nan")},
    {"listing_clicks": -5},
])
def test_analytics_counters_must_be_finite_and_non_negative(counters):
    with pytest.raises(ValidationError):
        ProductAnalytics(**counters)

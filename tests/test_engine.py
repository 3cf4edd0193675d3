import sys
from datetime import timedelta

import pytest

from product_ranker.domain.models.product import ProductAnalytics
from product_ranker.domain.models.profile import UserProfile
from product_ranker.domain.services.engine import RecommendationEngine, simple_hash


# ----- trending ---------------------------------------------------------------

def test_trending_ranks_view_spike_above_flat(engine, make_product):
    flat = make_product("flat", analytics=ProductAnalytics(views_last_7_days=10, views_previous_7_days=10))
    spike = make_product("spike", analytics=ProductAnalytics(views_last_7_days=100, views_previous_7_days=10))

    ranked = engine.get_trending_products([flat, spike], limit=2)

    assert [t.product.product_id for t in ranked] == ["spike", "flat"]
    assert ranked[0].trending_score > ranked[1].trending_score


def test_trending_score_weights_and_zero_denominators(engine, make_product):
    p = make_product(analytics=ProductAnalytics(
        views_last_7_days=4, views_previous_7_days=2,
        sales_last_7_days=3,                            # previous missing -> floored at 1
        wishlist_additions_last_7_days=5, wishlist_additions_previous_7_days=0,
    ))
    assert engine.calculate_trending_score(p) == pytest.approx(2 * 0.4 + 3 * 0.4 + 5 * 0.2)


def test_trending_respects_limit_and_keeps_ties_in_order(engine, make_product):
    products = [make_product(f"p{i}") for i in range(5)]
    ranked = engine.get_trending_products(products, limit=3)
    assert [t.product.product_id for t in ranked] == ["p0", "p1", "p2"]


# ----- lists ------------------------------------------------------------------

def test_personalized_recommendations_sorted_and_truncated(engine, make_product, now):
    products = [
        make_product("low"),
        make_product("high", stock_quantity=50, images=["a"] * 5, created_at=now - timedelta(hours=1)),
        make_product("mid", stock_quantity=50),
    ]
    ranked = engine.get_personalized_recommendations(products, None, limit=2, now=now)

    assert [s.product.product_id for s in ranked] == ["high", "mid"]
    assert all(s.recommendation.metadata.context == "personalized" for s in ranked)


def test_personalized_recommendations_favor_user_preferences(engine, make_product, now):
    profile = UserProfile(user_id="u1", viewed_categories={"kitap": 10}, viewed_brands={"Acme": 1})
    products = [
        make_product("other", category_slug="oyun", price=500),
        make_product("liked", category_slug="kitap", brand="Acme", price=500),
    ]
    ranked = engine.get_personalized_recommendations(products, profile, now=now)
    assert ranked[0].product.product_id == "liked"


def test_category_recommendations_filter_by_slug_or_subcategory(engine, make_product, now):
    products = [
        make_product("a", category_slug="elektronik"),
        make_product("b", category_slug="giyim", subcategory_slug="elektronik"),
        make_product("c", category_slug="giyim"),
    ]
    ranked = engine.get_category_recommendations(products, "elektronik", now=now)

    assert {s.product.product_id for s in ranked} == {"a", "b"}
    assert all(s.recommendation.metadata.context == "category" for s in ranked)


def test_category_preset_uses_smaller_optimal_stock(engine, make_product, now):
    p = make_product(stock_quantity=30, category_slug="kitap")
    [general] = engine.get_personalized_recommendations([p], now=now)
    [category] = engine.get_category_recommendations([p], "kitap", now=now)
    assert general.recommendation.breakdown.inventory.stock == 0.6
    assert category.recommendation.breakdown.inventory.stock == 1


# ----- A/B bucketing ----------------------------------------------------------

def test_simple_hash_matches_31_multiplier_hash():
    assert simple_hash("") == 0
    assert simple_hash("ab") == 97 * 31 + 98
    assert simple_hash("hello") == 99162322
    # wraps past 32 bits: signed value is -862545276
    assert simple_hash("Hello World") == 862545276


def test_ab_variant_is_deterministic(engine):
    first = engine.get_ab_test_variant("user-42", "checkout-button")
    assert first in ("A", "B")
    assert all(engine.get_ab_test_variant("user-42", "checkout-button") == first for _ in range(20))
    assert RecommendationEngine().get_ab_test_variant("user-42", "checkout-button") == first


def test_ab_variant_by_hash_parity(engine):
    assert engine.get_ab_test_variant("a", "b") == "B"       # 3105, odd
    assert engine.get_ab_test_variant("hel", "lo") == "A"    # 99162322, even


def test_algorithm_analytics_report(engine):
    report = engine.algorithm_analytics(active_users=3)
    assert report["active_users"] == 3
    assert report["version"] == "2.0"
    assert abs(sum(report["weights"].values()) - 1.0) < 1e-9
    assert report["category_weights"]["sales"] == 0.40
    assert report["seasonal_factors"]["hediye"]["in_season"] == 1.4


def test_trending_score_saturates_on_overflow(engine, make_product):
    p = make_product(analytics=ProductAnalytics(views_last_7_days=1e308, views_previous_7_days=1e-300))
    assert engine.calculate_trending_score(p) == sys.float_info.max

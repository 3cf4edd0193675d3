"""
Factor sub-scores of the ranking engine.

Each function maps one product onto a 0-1-ish factor score and returns the
components it blended. Absent or zero inputs fall back to neutral defaults;
nothing here raises on missing data and no denominator can reach zero.
"""
import math
import sys
from typing import Dict

from product_ranker.domain.models.product import Product
from product_ranker.domain.models.ranking_config import MarketContext
from product_ranker.domain.models.score import (
    AdminScore,
    ContentScore,
    EngagementScore,
    InventoryScore,
    SalesScore,
    SellerScore,
)
from product_ranker.domain.services import constants as C


def saturate(value: float) -> float:
    # ratios of huge counters overflow to inf; keep them finite so they serialize
    if math.isnan(value):
        return 0.0
    return value if math.isfinite(value) else sys.float_info.max


def _finite(components: Dict[str, float]) -> Dict[str, float]:
    return {k: saturate(v) for k, v in components.items()}


def _blend(components: Dict[str, float], weights: Dict[str, float]) -> float:
    return saturate(sum(components[k] * weights[k] for k in weights))


def _unit_rating(rating) -> float:
    # 1-5 stars -> 0-1
    return ((rating or C.DEFAULT_RATING) - 1) / 4


def sales_score(product: Product, market: MarketContext, blend: Dict[str, float]) -> SalesScore:
    stats = product.analytics

    recent = stats.sales_last_7_days or 0
    historical = stats.sales_last_30_days or 0
    if historical > 0:
        velocity = recent * C.WEEKS_PER_MONTH / historical
    else:
        # new product: no history to compare against
        velocity = min(recent / C.NEW_PRODUCT_SALES_REF, 1)

    views = stats.views_last_30_days or 1
    purchases = stats.purchases_last_30_days or 0
    conversion = purchases / views * C.CONVERSION_SCALE

    revenue = min((stats.total_revenue or 0) / (market.avg_market_revenue or 1), 1)

    order_value = stats.avg_order_value or product.price or 0
    aov = min(order_value / (market.market_avg_order_value or 1), 1)

    parts = _finite({"velocity": velocity, "conversion": conversion, "revenue": revenue, "aov": aov})
    return SalesScore(**parts, combined=_blend(parts, blend))


def engagement_score(product: Product, market: MarketContext, blend: Dict[str, float]) -> EngagementScore:
    stats = product.analytics

    views = stats.views_last_30_days or 0
    view_score = min(views / (market.avg_market_views or 1), 1)

    wishlist_rate = (stats.wishlist_additions_last_30_days or 0) / views if views > 0 else 0
    cart_rate = (stats.cart_additions_last_30_days or 0) / views if views > 0 else 0

    social = min((stats.social_shares or 0) / C.SOCIAL_SHARES_CAP, 1)

    impressions = stats.listing_impressions or 1
    ctr = (stats.listing_clicks or 0) / impressions

    parts = _finite({
        "views": view_score,
        "wishlist": wishlist_rate * C.WISHLIST_SCALE,
        "cart": cart_rate * C.CART_SCALE,
        "social": social,
        "ctr": ctr * C.CTR_SCALE,
    })
    return EngagementScore(**parts, combined=_blend(parts, blend))


def inventory_score(product: Product, market: MarketContext, blend: Dict[str, float]) -> InventoryScore:
    optimal = market.optimal_stock or 1
    stock = min((product.stock_quantity or 0) / optimal, 1)

    shipping_days = product.avg_shipping_days or C.MAX_SHIPPING_DAYS
    speed = max(0, (C.MAX_SHIPPING_DAYS - shipping_days) / C.MAX_SHIPPING_DAYS)

    returns = max(0, 1 - (product.return_rate or 0))
    turnover = min((product.inventory_turnover or 0) / C.TURNOVER_REF, 1)

    parts = {"stock": stock, "speed": speed, "returns": returns, "turnover": turnover}
    return InventoryScore(**parts, combined=_blend(parts, blend))


def seller_score(product: Product, blend: Dict[str, float]) -> SellerScore:
    seller = product.seller

    response_hours = seller.avg_response_time_hours or C.MAX_RESPONSE_HOURS
    fulfillment_hours = seller.avg_fulfillment_hours or C.MAX_FULFILLMENT_HOURS

    parts = {
        "rating": _unit_rating(seller.rating),
        "response": max(0, (C.MAX_RESPONSE_HOURS - response_hours) / C.MAX_RESPONSE_HOURS),
        "fulfillment": max(0, (C.MAX_FULFILLMENT_HOURS - fulfillment_hours) / C.MAX_FULFILLMENT_HOURS),
    }
    return SellerScore(**parts, combined=_blend(parts, blend))


def content_score(product: Product, blend: Dict[str, float]) -> ContentScore:
    parts = {
        "images": min(len(product.images) / C.IMAGE_COUNT_REF, 1),
        "description": min(len(product.description or "") / C.DESCRIPTION_LENGTH_REF, 1),
        "reviews": _unit_rating(product.avg_rating),
    }
    return ContentScore(**parts, combined=_blend(parts, blend))


def admin_score(product: Product, blend: Dict[str, float]) -> AdminScore:
    campaign = 0.0
    if product.campaigns:
        campaign = max(c.priority or 0 for c in product.campaigns) / C.CAMPAIGN_PRIORITY_MAX

    parts = {"boost": product.admin_boost or 0, "campaign": campaign}
    return AdminScore(**parts, combined=_blend(parts, blend))

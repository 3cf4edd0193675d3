# Default tuning for the ranking engine. RankingConfig reads these as defaults.
ALGORITHM_VERSION = "2.0"

# Share of each factor category in the final score (sums to 1.0)
CATEGORY_WEIGHTS = {
    "sales": 0.40,
    "engagement": 0.25,
    "inventory": 0.15,
    "seller": 0.10,
    "content": 0.05,
    "admin": 0.05,
}

# Fine-grained view of the same allocation, reported by the analytics endpoint
ALGORITHM_WEIGHTS = {
    # Sales performance (40%)
    "SALES_VELOCITY": 0.15,
    "CONVERSION_RATE": 0.12,
    "REVENUE_CONTRIBUTION": 0.08,
    "AVERAGE_ORDER_VALUE": 0.05,
    # User engagement (25%)
    "VIEW_COUNT": 0.08,
    "WISHLIST_ADDITIONS": 0.06,
    "CART_ADDITIONS": 0.05,
    "SOCIAL_SIGNALS": 0.03,
    "CLICK_THROUGH_RATE": 0.03,
    # Inventory & logistics (15%)
    "STOCK_LEVEL": 0.06,
    "FULFILLMENT_SPEED": 0.04,
    "RETURN_RATE": 0.03,
    "INVENTORY_TURNOVER": 0.02,
    # Seller performance (10%)
    "SELLER_RATING": 0.04,
    "SELLER_RESPONSE_TIME": 0.03,
    "SELLER_FULFILLMENT": 0.03,
    # Content quality (5%)
    "IMAGE_QUALITY": 0.02,
    "DESCRIPTION_COMPLETENESS": 0.02,
    "REVIEW_QUALITY": 0.01,
    # Admin controls (5%)
    "ADMIN_BOOST": 0.03,
    "CAMPAIGN_PRIORITY": 0.02,
}

# Blend of sub-signals inside each factor category
SALES_BLEND = {"velocity": 0.4, "conversion": 0.3, "revenue": 0.2, "aov": 0.1}
ENGAGEMENT_BLEND = {"views": 0.3, "wishlist": 0.25, "cart": 0.25, "social": 0.1, "ctr": 0.1}
INVENTORY_BLEND = {"stock": 0.4, "speed": 0.3, "returns": 0.2, "turnover": 0.1}
SELLER_BLEND = {"rating": 0.5, "response": 0.25, "fulfillment": 0.25}
CONTENT_BLEND = {"images": 0.4, "description": 0.4, "reviews": 0.2}
ADMIN_BLEND = {"boost": 0.6, "campaign": 0.4}

# Normalization references
WEEKS_PER_MONTH = 4.3            # 7 days * 4.3 ~ 30 days
NEW_PRODUCT_SALES_REF = 10       # recent sales giving full velocity when no history
CONVERSION_SCALE = 30
WISHLIST_SCALE = 10
CART_SCALE = 5
CTR_SCALE = 20
SOCIAL_SHARES_CAP = 10
MAX_SHIPPING_DAYS = 7
TURNOVER_REF = 12                # monthly turnover
MAX_RESPONSE_HOURS = 24
MAX_FULFILLMENT_HOURS = 48
DEFAULT_RATING = 3               # on a 1-5 scale
IMAGE_COUNT_REF = 5
DESCRIPTION_LENGTH_REF = 500
CAMPAIGN_PRIORITY_MAX = 10

# Time decay: (max age in days, multiplier), checked in order
TIME_DECAY_BUCKETS = [(1, 1.0), (7, 0.9), (30, 0.7), (90, 0.4)]
TIME_DECAY_OLDER = 0.2
TIME_DECAY_MISSING = 0.7         # no created_at -> 30-day bucket

# Seasonal multipliers per category slug
SEASONAL_RULES = {
    # Winter (Dec, Jan, Feb)
    "giyim-mont-kaban": {"months": [12, 1, 2], "in_season": 1.3, "off_season": 0.8},
    "ayakkabi-bot": {"months": [12, 1, 2], "in_season": 1.2, "off_season": 0.9},
    # Summer (Jun, Jul, Aug)
    "giyim-mayo-bikini": {"months": [6, 7, 8], "in_season": 1.4, "off_season": 0.7},
    "giyim-sort": {"months": [6, 7, 8], "in_season": 1.2, "off_season": 0.9},
    # Back to school (Aug, Sep)
    "elektronik-bilgisayar": {"months": [8, 9], "in_season": 1.2, "off_season": 1.0},
    "kitap-kirtasiye": {"months": [8, 9], "in_season": 1.3, "off_season": 1.0},
    # Holiday season (Nov, Dec)
    "hediye": {"months": [11, 12], "in_season": 1.4, "off_season": 1.0},
    "elektronik": {"months": [11, 12], "in_season": 1.2, "off_season": 1.0},
}

# Personalization
CATEGORY_PREFERENCE_WEIGHT = 0.3
MIN_PRICE_PREFERENCE = 0.5
BRAND_PREFERENCE_BOOST = 1.1
DEFAULT_AVG_PRICE = 500

# Trending
TRENDING_WEIGHTS = {"views": 0.4, "sales": 0.4, "wishlist": 0.2}

# Market references per context type
CONTEXT_GENERAL = "general"
CONTEXT_PERSONALIZED = "personalized"
CONTEXT_CATEGORY = "category"

MARKET_PRESETS = {
    CONTEXT_GENERAL: {"avg_market_views": 100, "avg_market_revenue": 1000, "market_avg_order_value": 500, "optimal_stock": 50},
    CONTEXT_PERSONALIZED: {"avg_market_views": 100, "avg_market_revenue": 1000, "market_avg_order_value": 500, "optimal_stock": 50},
    CONTEXT_CATEGORY: {"avg_market_views": 80, "avg_market_revenue": 800, "market_avg_order_value": 400, "optimal_stock": 30},
}

DEFAULT_LIMIT = 20

# Experiment buckets, indexed by hash parity
AB_VARIANTS = ("A", "B")

# Behavior kinds that change a profile
BEHAVIOR_VIEW = "view"
BEHAVIOR_PURCHASE = "purchase"

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, List
from datetime import datetime


class ProductAnalytics(BaseModel):
    """Rolling-window counters snapshotted onto the product document."""
    model_config = ConfigDict(extra="ignore", allow_inf_nan=False)

    sales_last_7_days: Optional[float] = Field(default=None, ge=0)
    sales_previous_7_days: Optional[float] = Field(default=None, ge=0)
    sales_last_30_days: Optional[float] = Field(default=None, ge=0)
    purchases_last_30_days: Optional[float] = Field(default=None, ge=0)

    views_last_7_days: Optional[float] = Field(default=None, ge=0)
    views_previous_7_days: Optional[float] = Field(default=None, ge=0)
    views_last_30_days: Optional[float] = Field(default=None, ge=0)
    unique_views_last_30_days: Optional[float] = Field(default=None, ge=0)

    wishlist_additions_last_7_days: Optional[float] = Field(default=None, ge=0)
    wishlist_additions_previous_7_days: Optional[float] = Field(default=None, ge=0)
    wishlist_additions_last_30_days: Optional[float] = Field(default=None, ge=0)
    cart_additions_last_30_days: Optional[float] = Field(default=None, ge=0)

    social_shares: Optional[float] = Field(default=None, ge=0)
    listing_impressions: Optional[float] = Field(default=None, ge=0)
    listing_clicks: Optional[float] = Field(default=None, ge=0)

    total_revenue: Optional[float] = Field(default=None, ge=0)
    avg_order_value: Optional[float] = Field(default=None, ge=0)


class SellerSnapshot(BaseModel):
    model_config = ConfigDict(extra="ignore")

    seller_id: Optional[str] = None
    rating: Optional[float] = None
    avg_response_time_hours: Optional[float] = None
    avg_fulfillment_hours: Optional[float] = None


class Campaign(BaseModel):
    model_config = ConfigDict(extra="ignore")

    campaign_id: Optional[str] = None
    name: Optional[str] = None
    priority: Optional[float] = None  # 0-10


class Product(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)  # immutable, safe to share across scorings

    product_id: str
    name: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    stock_quantity: Optional[int] = None
    category_slug: Optional[str] = None
    subcategory_slug: Optional[str] = None
    brand: Optional[str] = None
    created_at: Optional[datetime] = None
    description: Optional[str] = None
    images: List[str] = Field(default_factory=list)
    avg_rating: Optional[float] = None

    # Logistics
    avg_shipping_days: Optional[float] = None
    return_rate: Optional[float] = None
    inventory_turnover: Optional[float] = None

    # Admin controls
    admin_boost: Optional[float] = Field(default=None, description="Manual promotion, 0-1")
    campaigns: List[Campaign] = Field(default_factory=list)

    analytics: ProductAnalytics = Field(default_factory=ProductAnalytics)
    seller: SellerSnapshot = Field(default_factory=SellerSnapshot)

    @field_validator("images", "campaigns", "analytics", "seller", mode="before")
    @classmethod
    def _none_as_empty(cls, v, info):
        # documents from the catalog may carry explicit nulls
        if v is None:
            return {} if info.field_name in ("analytics", "seller") else []
        return v

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Dict, List
from datetime import datetime, timezone

from product_ranker.domain.services.constants import DEFAULT_AVG_PRICE


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Behavior(BaseModel):
    """A single user action. Only 'view' and 'purchase' change preferences."""
    model_config = ConfigDict(extra="ignore")

    type: str
    category_slug: Optional[str] = None
    brand: Optional[str] = None
    product_id: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)


class PurchaseRecord(BaseModel):
    product_id: Optional[str] = None
    category_slug: Optional[str] = None
    brand: Optional[str] = None
    price: float = Field(default=0.0, ge=0)
    purchased_at: datetime = Field(default_factory=_utcnow)


class UserProfile(BaseModel):
    """
    Preference profile built from behavior events.
    Mutable on purpose: profile_svc updates it in place then saves it back.
    """
    user_id: str
    viewed_categories: Dict[str, int] = Field(default_factory=dict)
    viewed_brands: Dict[str, int] = Field(default_factory=dict)
    purchase_history: List[PurchaseRecord] = Field(default_factory=list)
    avg_price_range: float = Field(default=DEFAULT_AVG_PRICE, ge=0)
    last_activity: datetime = Field(default_factory=_utcnow)

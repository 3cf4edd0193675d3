import logging
import time
from datetime import datetime, timezone
from typing import Optional

from product_ranker.domain.models.profile import Behavior, PurchaseRecord, UserProfile
from product_ranker.domain.repositories.profile_store import ProfileStore
from product_ranker.domain.services.constants import BEHAVIOR_PURCHASE, BEHAVIOR_VIEW

logger = logging.getLogger(__name__)


def apply_behavior(profile: UserProfile, behavior: Behavior, now: Optional[datetime] = None) -> UserProfile:
    """
    Fold one behavior into the profile, in place.
    - view: bump category and brand view counters
    - purchase: append to history, recompute avg_price_range as the mean price
    Any other type only refreshes last_activity.
    """
    if behavior.type == BEHAVIOR_VIEW:
        if behavior.category_slug:
            cats = profile.viewed_categories
            cats[behavior.category_slug] = cats.get(behavior.category_slug, 0) + 1
        if behavior.brand:
            brands = profile.viewed_brands
            brands[behavior.brand] = brands.get(behavior.brand, 0) + 1

    elif behavior.type == BEHAVIOR_PURCHASE:
        profile.purchase_history.append(PurchaseRecord(
            product_id=behavior.product_id,
            category_slug=behavior.category_slug,
            brand=behavior.brand,
            price=behavior.price or 0,
        ))
        prices = [p.price for p in profile.purchase_history]
        profile.avg_price_range = sum(prices) / len(prices)

    else:
        logger.debug("profile behavior ignored type=%s user_id=%s", behavior.type, profile.user_id)

    profile.last_activity = now or datetime.now(timezone.utc)
    return profile


async def update_user_profile(store: ProfileStore, user_id: str, behavior: Behavior) -> UserProfile:
    t0 = time.perf_counter()
    async with store.locked(user_id):
        profile = await store.get(user_id) or UserProfile(user_id=user_id)
        apply_behavior(profile, behavior)
        await store.save(profile)
    logger.info(
        "profile updated user_id=%s type=%s purchases=%s time=%.4fs",
        user_id, behavior.type, len(profile.purchase_history), time.perf_counter() - t0,
    )
    return profile


async def get_user_profile(store: ProfileStore, user_id: str) -> Optional[UserProfile]:
    return await store.get(user_id)

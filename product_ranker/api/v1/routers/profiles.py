# product_ranker/api/v1/routers/profiles.py
from fastapi import APIRouter, Depends, HTTPException
import logging

from product_ranker.api.deps import profile_store_dep
from product_ranker.domain.models.profile import Behavior, UserProfile
from product_ranker.domain.services.profile_svc import get_user_profile, update_user_profile

logger = logging.getLogger(__name__)

router = APIRouter(tags=["users"])


@router.post("/users/{user_id}/behavior", response_model=UserProfile)
async def record_behavior(user_id: str, behavior: Behavior, store = Depends(profile_store_dep)):
    """Fold a view/purchase event into the user's preference profile."""
    logger.info("Request: record_behavior user_id=%s type=%s", user_id, behavior.type)
    try:
        return await update_user_profile(store, user_id, behavior)
    except TimeoutError:
        raise HTTPException(status_code=409, detail="Profile is being updated, retry shortly.")


@router.get("/users/{user_id}/profile", response_model=UserProfile)
async def read_profile(user_id: str, store = Depends(profile_store_dep)):
    profile = await get_user_profile(store, user_id)
    if profile is None:
        raise HTTPException(status_code=404, detail="No profile recorded for this user.")
    return profile

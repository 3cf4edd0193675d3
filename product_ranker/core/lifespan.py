# product_ranker/core/lifespan.py
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from product_ranker.db import mongo, redis as r
from product_ranker.core.config import get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()

    # --- Startup ---
    # Mongo only backs the catalog endpoints; scoring works without it
    if settings.MONGO_URI:
        await mongo.connect()
    else:
        logger.warning("no MONGO_URI provided, catalog endpoints disabled")

    # Redis optional
    await r.connect()

    yield

    # --- Shutdown ---
    try:
        await r.disconnect()
    except Exception as e:
        logger.warning("redis disconnect failed: %s", e)

    try:
        await mongo.disconnect()
    except Exception as e:
        logger.warning("mongo disconnect failed: %s", e)

from fastapi import FastAPI
from product_ranker.core.config import get_settings
from product_ranker.core.lifespan import lifespan
from product_ranker.api.v1.routers.health import router as health_router
from product_ranker.api.v1.routers.scoring import router as scoring_router
from product_ranker.api.v1.routers.trending import router as trending_router
from product_ranker.api.v1.routers.recommendations import router as recommendations_router
from product_ranker.api.v1.routers.profiles import router as profiles_router
from product_ranker.api.v1.routers.experiments import router as experiments_router
from product_ranker.api.v1.routers.algorithm import router as algorithm_router
from product_ranker.core.logging import configure_logging

from fastapi.middleware.cors import CORSMiddleware
import logging

settings = get_settings()
configure_logging(level=logging.DEBUG if settings.DEBUG else logging.INFO)

app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

# ------- CORS -------
# ALLOWED_ORIGINS is a CSV, e.g. "https://shop.example.com,https://admin.example.com"
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=False,                        # keeps preflight simple
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
    max_age=86400,
)

# ------- Routes -------
app.include_router(health_router)
app.include_router(scoring_router)           # inline score / rank
app.include_router(trending_router)          # trending (inline + catalog)
app.include_router(recommendations_router)   # personalized / category over catalog
app.include_router(profiles_router)          # behavior -> profile
app.include_router(experiments_router)       # A/B buckets
app.include_router(algorithm_router)         # weights report

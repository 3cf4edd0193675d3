from functools import lru_cache
from typing import Literal, Optional
import os
from pydantic_settings import BaseSettings, SettingsConfigDict

EnvName = Literal["development", "production"]

def _env_file_for(app_env: EnvName) -> str:
    return ".env.development" if app_env == "development" else ".env.production"

class Settings(BaseSettings):

    # Core
    APP_ENV: EnvName = "development"
    APP_NAME: str = "ProductRanker"
    DEBUG: bool = False
    GIT_SHA: str = "unknown"

    # Mongo (product catalog); empty disables catalog endpoints
    MONGO_URI: str = ""
    MONGO_DB: str = "storefront"

    # Redis (profiles + trending cache); empty falls back to in-memory profiles
    REDIS_URL: str = ""

    # Profile store config
    profile_cache_prefix: str = "profile"     # redis key namespace
    profile_cache_ttl: int = 30 * 24 * 3600   # 30 days
    profile_lock_ttl: int = 5                 # seconds; guards read-modify-write

    # Cache config
    trending_cache_ttl: int = 5 * 60          # 5 minutes

    # Catalog
    catalog_candidate_limit: int = 500        # max documents scored per request, newest first

    # Ranking weights override (JSON file matching RankingConfig)
    RANKING_CONFIG_PATH: Optional[str] = None

    # API
    ALLOWED_ORIGINS: str = ""

    # pydantic-settings config will be set dynamically in the factory below
    model_config = SettingsConfigDict(env_file=None, case_sensitive=True)

    @property
    def allowed_origins(self) -> list[str]:
        return [o.strip() for o in self.ALLOWED_ORIGINS.split(",") if o.strip()]

@lru_cache
def get_settings() -> Settings:
    """
    Factory that chooses the right .env file based on APP_ENV.
    Cache makes it cheap to inject via FastAPI dependencies.
    """
    app_env: EnvName = os.getenv("APP_ENV", "development")  # earliest switch
    env_file = _env_file_for(app_env)
    return Settings(
                _env_file=env_file,  # load .env.development or .env.production
                _env_file_encoding="utf-8"
    )

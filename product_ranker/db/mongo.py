# product_ranker/db/mongo.py
import logging
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from product_ranker.core.config import get_settings
import certifi

logger = logging.getLogger(__name__)

_client: AsyncIOMotorClient | None = None
_db: AsyncIOMotorDatabase | None = None


def get_db() -> AsyncIOMotorDatabase:
    """Catalog database. Raises RuntimeError when Mongo is not configured."""
    if _db is None:
        raise RuntimeError("Mongo catalog not initialized")
    return _db


def _new_client(uri: str) -> AsyncIOMotorClient:
    kwargs = dict(
        uuidRepresentation="standard",
        serverSelectionTimeoutMS=6000,
        connectTimeoutMS=6000,
    )
    # SRV URIs imply TLS; containers often lack a system CA bundle
    if uri.startswith("mongodb+srv://"):
        kwargs.update(tls=True, tlsCAFile=certifi.where())
    return AsyncIOMotorClient(uri, **kwargs)


async def connect():
    """
    Create the Motor client for the product catalog.
    A failed startup ping is logged, not raised: the client stays lazy and
    the first real query retries the connection.
    """
    global _client, _db
    settings = get_settings()

    _client = _new_client(settings.MONGO_URI)
    _db = _client[settings.MONGO_DB]
    try:
        await _client.admin.command("ping")
        logger.info("mongo connected db=%s", settings.MONGO_DB)
    except Exception as e:
        logger.warning("mongo startup ping failed, keeping lazy client: %s", e)


async def disconnect():
    global _client, _db
    if _client:
        _client.close()
        logger.info("mongo disconnected")
    _client = None
    _db = None

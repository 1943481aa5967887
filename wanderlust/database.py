from motor.motor_asyncio import AsyncIOMotorClient
from wanderlust.config import settings

client = AsyncIOMotorClient(
    settings.mongo_uri,
    serverSelectionTimeoutMS=settings.mongo_timeout_ms,
)
db = client[settings.mongo_db]

__all__ = ["client", "db", "get_db"]


def get_db():
    """Dependency handing the active database to route handlers"""
    return db

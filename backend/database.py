import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from config import Settings

logger = logging.getLogger(__name__)


def create_client(settings: Settings) -> AsyncIOMotorClient:
    # Motor connects lazily; nothing here touches the network.
    return AsyncIOMotorClient(
        settings.mongo_url,
        retryWrites=True,
        w="majority",
        serverSelectionTimeoutMS=settings.mongo_timeout_ms,
    )


def get_database(client, settings: Settings) -> AsyncIOMotorDatabase:
    return client[settings.db_name]


async def ping(db) -> bool:
    try:
        await db.command("ping")
        return True
    except Exception as e:  # any failure reads as "Disconnected"
        logger.warning("MongoDB ping failed: %s", e)
        return False

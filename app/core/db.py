import logging
from pymongo import AsyncMongoClient, ASCENDING
from pymongo.asynchronous.database import AsyncDatabase
from .config import settings

log = logging.getLogger(__name__)

USERS = "users"
VIDEOS = "videos"

client: AsyncMongoClient = AsyncMongoClient(settings.MONGODB_URI, tz_aware=True, connect=False)

def get_database() -> AsyncDatabase:
    return client[settings.MONGODB_DB]

async def init_indexes():
    db = get_database()
    await db[USERS].create_index([("username", ASCENDING)], unique=True)
    await db[USERS].create_index([("email", ASCENDING)], unique=True)
    await db[VIDEOS].create_index([("owner", ASCENDING)])
    log.info("indexes ensured on %s", settings.MONGODB_DB)

async def close_client():
    await client.close()

"""Database connection lifecycle and collection access."""

from fastapi import Request
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING
from config.settings import Settings
from utils.logger import setup_logger

logger = setup_logger(__name__)

USERS_COLLECTION = "users"
EXERCISES_COLLECTION = "exercises"


def connect_to_mongo(settings: Settings) -> AsyncIOMotorClient:
    """Create the process-wide database client."""
    client = AsyncIOMotorClient(settings.mongo_uri)
    logger.info("MongoDB client created")
    return client


def close_mongo_connection(client: AsyncIOMotorClient) -> None:
    """Close database connection."""
    if client:
        client.close()
        logger.info("Disconnected from MongoDB")


def resolve_database(client: AsyncIOMotorClient, settings: Settings) -> AsyncIOMotorDatabase:
    """Database named in the connection string, or the configured fallback."""
    return client.get_default_database(default=settings.mongo_db_name)


async def init_indexes(database) -> None:
    """Create the indexes the service relies on.

    The unique indexes on ``users`` are what keep usernames and userIds
    unique; registration treats a duplicate key error as the conflict.
    """
    users_collection = database[USERS_COLLECTION]
    await users_collection.create_index([("username", ASCENDING)], unique=True)
    await users_collection.create_index([("userId", ASCENDING)], unique=True)
    
    exercises_collection = database[EXERCISES_COLLECTION]
    await exercises_collection.create_index([("userId", ASCENDING), ("date", ASCENDING)])
    
    logger.info("MongoDB initialized: indexes created")


def get_database(request: Request):
    """FastAPI dependency: the database bound to the running application."""
    return request.app.state.database


def get_users_collection(database):
    """Get users collection."""
    return database[USERS_COLLECTION]


def get_exercises_collection(database):
    """Get exercises collection."""
    return database[EXERCISES_COLLECTION]
